import random

import pytest

from gridclamp.allocator import (
    allocate,
    ideal_allocation,
    minimum_allocation,
    priority_order,
    total_height,
)
from tests.helpers import make_row, uniform_row


def _random_rows(seed, count):
    rng = random.Random(seed)
    rows = []
    for _ in range(count):
        cells = rng.randint(1, 2)
        rows.append(
            make_row(
                [rng.randint(1, 30) for _ in range(cells)],
                [rng.choice([14.0, 16.8, 20.0]) for _ in range(cells)],
                [rng.choice([8.0, 16.0, 24.0]) for _ in range(cells)],
            )
        )
    return rows


def test_floor_dominates_short_row():
    row = uniform_row([3, 5], line_height=20, overhead=16)
    assert row.min_line_count == 8
    assert row.max_natural_line_count == 5
    assert allocate([row], 740) == [8]


def test_ideal_allocation_returned_when_it_fits():
    rows = [uniform_row([10, 12]), uniform_row([9, 4]), uniform_row([2, 1])]
    # 12*20+16 + 9*20+16 + 8*20+16 = 628
    assert allocate(rows, 740) == [12, 9, 8]
    assert allocate(rows, 628) == [12, 9, 8]


def test_equal_need_rows_fill_in_row_order():
    rows = [uniform_row([9, 9], overhead=20) for _ in range(4)]
    assert [r.min_line_count for r in rows] == [7, 7, 7, 7]
    assert total_height(ideal_allocation(rows), rows) == 800

    allocation = allocate(rows, 740)

    assert allocation == [9, 9, 8, 7]
    assert total_height(allocation, rows) == 740


def test_neediest_row_served_first():
    rows = [uniform_row([8], overhead=20), uniform_row([12], overhead=20), uniform_row([10], overhead=20)]
    assert priority_order(rows) == [1, 2, 0]
    assert allocate(rows, 600) == [7, 12, 8]


def test_tie_goes_to_earlier_row():
    rows = [uniform_row([9], overhead=20), uniform_row([9], overhead=20)]
    assert allocate(rows, 340) == [8, 7]


def test_row_below_floor_is_never_grown():
    short = uniform_row([1], line_height=20, overhead=10)
    long = uniform_row([20], line_height=20, overhead=10)
    assert short.min_line_count == 8
    assert short.remaining_need == 0
    assert priority_order([short, long]) == [1]
    assert allocate([short, long], 400) == [8, 11]


def test_empty_priority_queue_keeps_minimum():
    rows = [uniform_row([1], line_height=20, overhead=10) for _ in range(5)]
    assert total_height(ideal_allocation(rows), rows) > 740
    assert allocate(rows, 740) == [8] * 5


def test_single_row_reduced_when_ideal_does_not_fit():
    row = uniform_row([30], overhead=20)
    assert allocate([row], 100) == [7]
    assert allocate([row], 300) == [14]


def test_zero_budget_returns_floors():
    rows = [uniform_row([9, 9], overhead=20) for _ in range(4)]
    assert allocate(rows, 0) == minimum_allocation(rows) == [7, 7, 7, 7]


def test_cheaper_row_takes_space_a_costlier_row_cannot_use():
    costly = make_row([20], [30.0], [10.0])
    cheap = make_row([20], [10.0], [0.0])
    assert (costly.min_line_count, cheap.min_line_count) == (5, 16)
    assert priority_order([costly, cheap]) == [0, 1]

    allocation = allocate([costly, cheap], 345)

    assert allocation == [5, 18]
    assert total_height(allocation, [costly, cheap]) == 340


def test_iteration_cap_returns_partial_allocation():
    row = uniform_row([100], line_height=10, overhead=0)
    assert row.min_line_count == 16
    assert allocate([row], 900, max_iterations=5) == [21]
    assert allocate([row], 900, max_iterations=0) == [16]
    assert allocate([row], 900) == [90]


def test_empty_grid():
    assert allocate([], 740) == []


@pytest.mark.parametrize("budget", [0, 200, 500, 740, 1200, 5000])
@pytest.mark.parametrize("seed", [1, 2, 3])
def test_floor_ceiling_and_budget_hold(seed, budget):
    rows = _random_rows(seed, 6)
    allocation = allocate(rows, budget)

    assert len(allocation) == len(rows)
    for lines, row in zip(allocation, rows):
        assert row.min_line_count <= lines <= max(row.max_natural_line_count, row.min_line_count)
    if total_height(minimum_allocation(rows), rows) <= budget:
        assert total_height(allocation, rows) <= budget


def test_idempotent():
    rows = _random_rows(11, 8)
    assert allocate(rows, 740) == allocate(rows, 740)


def test_more_budget_never_takes_lines_away_with_uniform_rows():
    rng = random.Random(5)
    rows = [uniform_row([rng.randint(1, 20), rng.randint(1, 20)]) for _ in range(5)]
    previous = allocate(rows, 0)
    for budget in range(100, 2400, 37):
        current = allocate(rows, budget)
        assert all(c >= p for c, p in zip(current, previous))
        previous = current
    assert previous == ideal_allocation(rows)
