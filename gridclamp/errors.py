"""Exceptions raised by the measurement pass."""


class GridClampError(Exception):
    """Base class for gridclamp errors."""


class MissingContentError(GridClampError):
    """A cell's text content (or the whole text column) is absent.

    Raised instead of measuring the cell as empty, since a zero-length cell
    would distort the aggregate of every row it belongs to.
    """
