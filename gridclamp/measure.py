"""Measurement pass: turn unclamped card text into per-row aggregates.

Everything here looks at the natural (unclamped) extent of the text. Nothing
is derived from a previous allocation, so repeated passes do not compound
rounding from earlier clamps.
"""
from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from io import BytesIO
from typing import Iterator, List, Optional, Sequence, TypeVar, Union

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .constants import DEFAULT_LEADING_RATIO, REFERENCE_GLYPH
from .errors import MissingContentError
from .layout import content_width, fixed_overhead
from .models import CellMeasurement, CellStyle, GridConfig, RowAggregate
from .text_utils import wrap_text_to_width

T = TypeVar("T")

logger = logging.getLogger(__name__)


def measure_cell(content_height: float, line_unit_height: float) -> int:
    """Number of line units needed to show content_height unclamped (at least 1)."""
    if not line_unit_height > 0:
        raise ValueError(f"line_unit_height must be positive, got {line_unit_height!r}")
    # Round away float noise such as 3 * 0.1 / 0.1 == 3.0000000000000004
    lines = math.ceil(round(content_height / line_unit_height, 6))
    return max(1, lines)


def _parse_line_height(value: Union[float, str, None], font_size: float) -> Optional[float]:
    """Concrete line height for a style value, or None when it is a keyword or unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        height = float(value)
    else:
        raw = str(value).strip().lower()
        if raw in ("", "normal"):
            return None
        try:
            if raw.endswith("%"):
                height = float(raw[:-1]) * font_size / 100.0
            elif raw.endswith(("pt", "px")):
                height = float(raw[:-2])
            else:
                height = float(raw) * font_size
        except ValueError:
            return None
    if not math.isfinite(height) or height <= 0:
        return None
    return height


@contextmanager
def glyph_probe(font_name: str, font_size: float) -> Iterator[canvas.Canvas]:
    """Offscreen scratch canvas set in the given font; discarded on exit."""
    buffer = BytesIO()
    probe = canvas.Canvas(buffer, pagesize=(font_size * 4, font_size * 4))
    try:
        probe.setFont(font_name, font_size)
        yield probe
    finally:
        buffer.close()


def probe_line_height(font_name: str, font_size: float) -> float:
    """Height of one rendered line of the reference glyph in this font."""
    with glyph_probe(font_name, font_size) as probe:
        glyph_width = probe.stringWidth(REFERENCE_GLYPH, font_name, font_size)
        ascent, descent = pdfmetrics.getAscentDescent(font_name, font_size)
    height = ascent - descent
    if glyph_width <= 0 or height <= 0:
        logger.debug("Glyph probe gave no extent for %s; using leading ratio", font_name)
        return font_size * DEFAULT_LEADING_RATIO
    return height


def resolve_line_height(style: CellStyle) -> float:
    """Concrete line height for a style, falling back to the glyph probe."""
    height = _parse_line_height(style.line_height, style.font_size)
    if height is None:
        height = probe_line_height(style.font_name, style.font_size)
    return height


def measure_text_cell(text: Optional[str], style: CellStyle, cell_width: float) -> CellMeasurement:
    """Measure one cell's text as it would render unclamped at cell_width."""
    if text is None:
        raise MissingContentError("cell has no text content")
    line_height = resolve_line_height(style)
    lines = wrap_text_to_width(text, style.font_name, style.font_size, content_width(cell_width, style))
    return CellMeasurement(
        natural_line_count=measure_cell(len(lines) * line_height, line_height),
        line_unit_height=line_height,
        fixed_overhead=fixed_overhead(style),
    )


def group_into_rows(cells: Sequence[T], columns_per_row: int) -> List[List[T]]:
    """Split cells into consecutive rows of columns_per_row; the last row may be shorter."""
    if columns_per_row < 1:
        raise ValueError(f"columns_per_row must be at least 1, got {columns_per_row}")
    return [list(cells[i:i + columns_per_row]) for i in range(0, len(cells), columns_per_row)]


def aggregate_row(cells: Sequence[CellMeasurement], min_row_height: float) -> RowAggregate:
    """Combine a row's cells into the figures the allocator uses.

    The readability floor is the line count that brings the average cell up
    to min_row_height, and never less than one line. It may exceed what the
    row's content needs.
    """
    if not cells:
        raise ValueError("a row needs at least one cell")
    avg_line_height = math.fsum(c.line_unit_height for c in cells) / len(cells)
    avg_overhead = math.fsum(c.fixed_overhead for c in cells) / len(cells)
    min_lines = max(1, math.ceil((min_row_height - avg_overhead) / avg_line_height))
    return RowAggregate(
        cells=list(cells),
        max_natural_line_count=max(c.natural_line_count for c in cells),
        avg_line_unit_height=avg_line_height,
        avg_fixed_overhead=avg_overhead,
        min_line_count=min_lines,
    )


def collect_rows(
    texts: Sequence[Optional[str]],
    styles: Union[CellStyle, Sequence[CellStyle]],
    cell_width: float,
    config: Optional[GridConfig] = None,
) -> List[RowAggregate]:
    """Measure every cell unclamped and aggregate them row by row.

    styles is either one style for every cell or one per cell. A cell with
    no text aborts the whole pass with MissingContentError.
    """
    if config is None:
        config = GridConfig()
    if isinstance(styles, CellStyle):
        styles = [styles] * len(texts)
    if len(styles) != len(texts):
        raise ValueError(f"Got {len(styles)} styles for {len(texts)} cells")

    measurements = []
    for index, (text, style) in enumerate(zip(texts, styles)):
        try:
            measurements.append(measure_text_cell(text, style, cell_width))
        except MissingContentError as exc:
            raise MissingContentError(f"cell {index}: {exc}") from exc
    rows = [aggregate_row(row, config.min_row_height) for row in group_into_rows(measurements, config.columns_per_row)]
    logger.debug("Measured %d cells into %d rows", len(measurements), len(rows))
    return rows
