from gridclamp.measure import aggregate_row
from gridclamp.models import CellMeasurement


def make_row(naturals, line_heights, overheads, min_row_height=160.0):
    """Build a RowAggregate from per-cell natural line counts, line heights and overheads."""
    cells = [
        CellMeasurement(natural_line_count=n, line_unit_height=h, fixed_overhead=o)
        for n, h, o in zip(naturals, line_heights, overheads)
    ]
    return aggregate_row(cells, min_row_height)


def uniform_row(naturals, line_height=20.0, overhead=16.0, min_row_height=160.0):
    """Row whose cells all share the same line height and overhead."""
    count = len(naturals)
    return make_row(naturals, [line_height] * count, [overhead] * count, min_row_height)
