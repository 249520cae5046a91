"""Pydantic models for measurements, configuration and the computed layout."""

from __future__ import annotations

import math
from typing import Optional, Union

from pydantic import BaseModel, Field

from . import constants


class CellMeasurement(BaseModel):
    """Text geometry of one grid cell, measured in its unclamped state."""

    natural_line_count: int = Field(ge=1)
    line_unit_height: float = Field(gt=0)
    fixed_overhead: float = Field(default=0.0, ge=0)


class RowAggregate(BaseModel):
    """Per-row figures the allocator works with. Built by ``measure.aggregate_row``."""

    cells: list[CellMeasurement] = Field(min_length=1)
    max_natural_line_count: int = Field(ge=1)
    avg_line_unit_height: float = Field(gt=0)
    avg_fixed_overhead: float = Field(ge=0)
    min_line_count: int = Field(ge=1)

    # ── helpers ────────────────────────────────────────────────
    @property
    def ideal_line_count(self) -> int:
        return max(self.max_natural_line_count, self.min_line_count)

    @property
    def remaining_need(self) -> int:
        return max(0, self.max_natural_line_count - self.min_line_count)

    def height_for(self, lines: int) -> float:
        return lines * self.avg_line_unit_height + self.avg_fixed_overhead


class GridConfig(BaseModel):
    """Constants the allocator needs from its caller."""

    min_row_height: float = Field(default=constants.MIN_ROW_HEIGHT, ge=0)
    height_budget: float = Field(default=constants.HEIGHT_BUDGET, ge=0)
    columns_per_row: int = Field(default=constants.COLUMNS_PER_ROW, ge=1)
    max_iterations: int = Field(default=constants.MAX_ITERATIONS, ge=0)


class CellStyle(BaseModel):
    """Font and box geometry of a card's text element.

    ``line_height`` accepts what a stylesheet would: an absolute number, a
    string such as ``"18pt"``, ``"1.5"`` or ``"120%"``, or ``None`` /
    ``"normal"`` to have it measured from the font.
    """

    font_name: str = "Helvetica"
    font_size: float = Field(default=constants.FONT_SIZE, gt=0)
    line_height: Optional[Union[float, str]] = None
    padding_top: float = Field(default=constants.PADDING_VERTICAL, ge=0)
    padding_bottom: float = Field(default=constants.PADDING_VERTICAL, ge=0)
    padding_left: float = Field(default=constants.PADDING_HORIZONTAL, ge=0)
    padding_right: float = Field(default=constants.PADDING_HORIZONTAL, ge=0)
    margin_top: float = Field(default=0.0, ge=0)
    margin_bottom: float = Field(default=0.0, ge=0)


class CellClamp(BaseModel):
    """How one cell is shown once its row's allocation is known."""

    row_index: int
    column_index: int
    clamp_line_count: int
    clamp_height: float
    cell_height: float


class GridLayout(BaseModel):
    """Result of a full measure → allocate → apply pass."""

    allocation: list[int]
    cells: list[CellClamp]
    row_heights: list[float]
    container_height: float

    @property
    def total_height(self) -> float:
        return math.fsum(self.row_heights)

    @property
    def within_budget(self) -> bool:
        return self.total_height <= self.container_height
