"""Clamp table generation: CSV of cards in, per-cell clamp settings out."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from . import fonts
from .clamp import compute_grid_layout
from .constants import GRID_WIDTH, TEXT_COLUMN_CANDIDATES
from .errors import MissingContentError
from .layout import content_width, grid_template_rows, row_offsets
from .measure import collect_rows
from .models import CellStyle, GridConfig, GridLayout, RowAggregate
from .text_utils import clamp_lines, wrap_text_to_width


def find_text_column(columns: List[str], text_column: Optional[str] = None) -> str:
    """Return the actual name of the column holding card text."""
    lcmap = {str(col).lower(): col for col in columns}
    if text_column:
        if text_column.lower() in lcmap:
            return lcmap[text_column.lower()]
        raise MissingContentError(f"Text column {text_column!r} not found in {list(columns)}")
    for k in TEXT_COLUMN_CANDIDATES:
        if k in lcmap:
            return lcmap[k]
    raise MissingContentError(
        f"No text column found; expected one of {TEXT_COLUMN_CANDIDATES}, got {list(columns)}"
    )


def card_styles(data: pd.DataFrame, base_style: CellStyle) -> List[CellStyle]:
    """One style per card, applying optional per-card font_size / line_height columns."""
    lcmap = {str(col).lower(): col for col in data.columns}
    size_col = lcmap.get("font_size")
    height_col = lcmap.get("line_height")
    styles = []
    for _, row in data.iterrows():
        overrides = {}
        if size_col and not pd.isna(row[size_col]):
            overrides["font_size"] = float(row[size_col])
        if height_col and not pd.isna(row[height_col]):
            # Read as text so a bare number is a font-size multiplier whatever dtype pandas picked
            overrides["line_height"] = str(row[height_col]).strip()
        styles.append(CellStyle(**{**base_style.model_dump(), **overrides}) if overrides else base_style)
    return styles


def build_clamp_table(
    texts: List[Optional[str]],
    styles: List[CellStyle],
    rows: List[RowAggregate],
    layout: GridLayout,
    cell_width: float,
) -> pd.DataFrame:
    """Tabulate a computed layout, one record per card in grid order."""
    offsets = row_offsets(layout.row_heights)
    measurements = [cell for row in rows for cell in row.cells]
    records = []
    for card_index, (text, style, cell, clamp) in enumerate(zip(texts, styles, measurements, layout.cells)):
        width = content_width(cell_width, style)
        lines = wrap_text_to_width(text, style.font_name, style.font_size, width)
        visible = clamp_lines(lines, clamp.clamp_line_count, style.font_name, style.font_size, width)
        records.append(
            {
                "card_index": card_index,
                "row_index": clamp.row_index,
                "column_index": clamp.column_index,
                "natural_line_count": cell.natural_line_count,
                "line_unit_height": cell.line_unit_height,
                "fixed_overhead": cell.fixed_overhead,
                "clamp_line_count": clamp.clamp_line_count,
                "clamp_height": clamp.clamp_height,
                "cell_height": clamp.cell_height,
                "row_height": layout.row_heights[clamp.row_index],
                "row_top": offsets[clamp.row_index],
                "visible_text": "\n".join(visible),
            }
        )
    return pd.DataFrame.from_records(records)


def main(
    csv_file_path: str,
    output_csv_path: Optional[str] = None,
    text_column: Optional[str] = None,
    grid_width: float = GRID_WIDTH,
    config: Optional[GridConfig] = None,
    style: Optional[CellStyle] = None,
    logger: Optional[logging.Logger] = None,
) -> GridLayout:
    if config is None:
        config = GridConfig()
    if style is None:
        style = CellStyle()
    if logger is None:
        logger = logging.getLogger(__name__)

    # Measure with the same font the renderer will register
    style = style.model_copy(update={"font_name": fonts.resolve_font(style.font_name)})

    data = pd.read_csv(csv_file_path)
    # Remove leading/trailing whitespaces across the DataFrame
    try:
        data = data.map(lambda x: x.strip() if isinstance(x, str) else x)
    except AttributeError:
        data = data.applymap(lambda x: x.strip() if isinstance(x, str) else x)

    column = find_text_column(list(data.columns), text_column)
    texts = [None if pd.isna(v) else str(v) for v in data[column]]
    styles = card_styles(data, style)
    cell_width = grid_width / config.columns_per_row

    # Phase 1: measure unclamped. Phase 2: allocate and derive clamps.
    rows = collect_rows(texts, styles, cell_width, config)
    layout = compute_grid_layout(rows, config, logger=logger)

    table = build_clamp_table(texts, styles, rows, layout, cell_width)

    # If output path not provided, create a default path under repo-root/output using the CSV file name
    if not output_csv_path:
        repo_root = Path(__file__).resolve().parents[1]
        output_dir = repo_root / "output"
        output_dir.mkdir(parents=True, exist_ok=True)
        output_csv_path = output_dir / f"{Path(csv_file_path).stem}_clamps.csv"

    table.to_csv(output_csv_path, index=False)

    logger.info(
        "Clamp table written.\n\n"
        "Input: %s\n"
        "Output: %s\n"
        "Cards: %d\n"
        "Rows: %d\n"
        "Height: %.1f of %.1f\n"
        "Row tracks: %s",
        csv_file_path,
        output_csv_path,
        len(texts),
        len(rows),
        layout.total_height,
        config.height_budget,
        grid_template_rows(layout.row_heights),
    )
    return layout
