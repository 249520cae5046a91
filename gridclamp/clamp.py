"""Applying a row allocation back onto the cells it was computed from."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .allocator import allocate
from .models import CellClamp, GridConfig, GridLayout, RowAggregate


def compute_cell_clamps(rows: Sequence[RowAggregate], allocation: Sequence[int]) -> List[CellClamp]:
    """Per-cell clamp settings for an allocation, in grid order.

    A cell never shows more lines than it has, so each clamp is capped at the
    cell's own natural line count.
    """
    if len(rows) != len(allocation):
        raise ValueError(f"Allocation has {len(allocation)} entries for {len(rows)} rows")
    clamps = []
    for row_index, (row, lines) in enumerate(zip(rows, allocation)):
        for column_index, cell in enumerate(row.cells):
            clamp_lines = min(lines, cell.natural_line_count)
            clamp_height = clamp_lines * cell.line_unit_height
            clamps.append(
                CellClamp(
                    row_index=row_index,
                    column_index=column_index,
                    clamp_line_count=clamp_lines,
                    clamp_height=clamp_height,
                    cell_height=clamp_height + cell.fixed_overhead,
                )
            )
    return clamps


def compute_row_heights(
    clamps: Sequence[CellClamp],
    rows: Sequence[RowAggregate],
    allocation: Sequence[int],
) -> List[float]:
    """Rendered height of each row.

    This is the height the allocation budgeted for the row, or its tallest
    clamped cell if that is taller. A row lifted to its readability floor
    keeps the floor height even though its text is shorter.
    """
    heights = [row.height_for(lines) for row, lines in zip(rows, allocation)]
    for clamp in clamps:
        heights[clamp.row_index] = max(heights[clamp.row_index], clamp.cell_height)
    return heights


def compute_grid_layout(
    rows: Sequence[RowAggregate],
    config: Optional[GridConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> GridLayout:
    """Allocate lines for measured rows and derive what the renderer applies.

    rows must come from an unclamped measurement pass; the returned layout is
    the only thing the clamping side needs.
    """
    if config is None:
        config = GridConfig()
    if logger is None:
        logger = logging.getLogger(__name__)

    allocation = allocate(rows, config.height_budget, max_iterations=config.max_iterations, logger=logger)
    clamps = compute_cell_clamps(rows, allocation)
    layout = GridLayout(
        allocation=allocation,
        cells=clamps,
        row_heights=compute_row_heights(clamps, rows, allocation),
        container_height=config.height_budget,
    )
    if not layout.within_budget:
        logger.info(
            "Grid needs %.1f, more than the %.1f budget",
            layout.total_height,
            config.height_budget,
        )
    return layout
