"""Shared layout and measurement defaults for the clamped card grid."""

# Readability floor: every row must be at least this tall
MIN_ROW_HEIGHT: float = 160.0

# Total vertical space the whole grid may occupy
HEIGHT_BUDGET: float = 740.0

COLUMNS_PER_ROW: int = 2

# Safety valve for the constrained distribution loop
MAX_ITERATIONS: int = 200

# Cell geometry used when the caller does not specify a style
GRID_WIDTH: float = 600.0
FONT_SIZE: float = 14.0
PADDING_VERTICAL: float = 8.0     # top and bottom, each
PADDING_HORIZONTAL: float = 12.0  # left and right, each

# Line height as a multiple of font size when neither the style nor the glyph probe gives one
DEFAULT_LEADING_RATIO: float = 1.2

# Glyph rendered by the line-height probe
REFERENCE_GLYPH: str = "M"

ELLIPSIS: str = "…"

# Column names tried (case-insensitive) when no text column is given
TEXT_COLUMN_CANDIDATES = ("text", "content", "markdown", "body", "description")
