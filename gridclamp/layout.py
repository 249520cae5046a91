"""Layout helpers for cell sizing and row placement."""
from itertools import accumulate
from typing import List

from .models import CellStyle


def content_width(cell_width: float, style: CellStyle) -> float:
    """Return the width available to text inside a cell's horizontal padding."""
    width = cell_width - style.padding_left - style.padding_right
    if width <= 0:
        raise ValueError(
            f"Cell width {cell_width} leaves no room for text after padding "
            f"({style.padding_left} + {style.padding_right})"
        )
    return width


def fixed_overhead(style: CellStyle) -> float:
    """Vertical space a cell takes regardless of how many lines it shows."""
    return style.padding_top + style.padding_bottom + style.margin_top + style.margin_bottom


def row_offsets(row_heights: List[float]) -> List[float]:
    """Top offset of each row when rows are stacked from the top of the grid."""
    return [0.0] + list(accumulate(row_heights))[:-1] if row_heights else []


def grid_template_rows(row_heights: List[float]) -> str:
    """Row track list in the form a CSS grid container takes, e.g. ``"176px 200px"``."""
    return " ".join(f"{h:g}px" for h in row_heights)
