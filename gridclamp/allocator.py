"""Distribution of the grid's height budget over rows, in whole lines.

``allocate`` is a pure function of the row aggregates and the budget. It
either returns the ideal allocation (every row fully unclamped, never below
its floor) when that fits, or grows rows one line at a time from their
floors, most-starved row first, re-checking the exact total height after
each line.

Two outcomes are deliberately not errors:

* If the floors alone exceed the budget, the all-floor allocation is
  returned and the grid overflows.
* If ``max_iterations`` attempts are used up, the lines granted so far are
  returned. The result may then be short of what the budget allows.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .constants import MAX_ITERATIONS
from .models import RowAggregate


def row_height(lines: int, row: RowAggregate) -> float:
    return row.height_for(lines)


def total_height(allocation: Sequence[int], rows: Sequence[RowAggregate]) -> float:
    return math.fsum(row_height(lines, row) for lines, row in zip(allocation, rows))


def ideal_allocation(rows: Sequence[RowAggregate]) -> List[int]:
    """Full natural content for every row, raised to the floor where needed."""
    return [row.ideal_line_count for row in rows]


def minimum_allocation(rows: Sequence[RowAggregate]) -> List[int]:
    return [row.min_line_count for row in rows]


def priority_order(rows: Sequence[RowAggregate]) -> List[int]:
    """Indices of rows that can still grow, largest remaining need first.

    Ties keep the original row order.
    """
    needy = [i for i, row in enumerate(rows) if row.remaining_need > 0]
    return sorted(needy, key=lambda i: rows[i].remaining_need, reverse=True)


def allocate(
    rows: Sequence[RowAggregate],
    height_budget: float,
    max_iterations: int = MAX_ITERATIONS,
    logger: Optional[logging.Logger] = None,
) -> List[int]:
    """Return the number of visible lines for each row.

    Every entry lies between the row's floor and its ideal line count, and
    the total height stays within height_budget whenever the floors fit.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    ideal = ideal_allocation(rows)
    ideal_height = total_height(ideal, rows)
    if ideal_height <= height_budget:
        logger.debug("Ideal allocation fits (%.1f <= %.1f)", ideal_height, height_budget)
        return ideal

    allocation = minimum_allocation(rows)
    current_height = total_height(allocation, rows)
    if current_height > height_budget:
        logger.debug(
            "Row floors alone need %.1f, over the %.1f budget; keeping floors",
            current_height,
            height_budget,
        )

    order = priority_order(rows)
    pointer = 0
    iterations = 0
    while current_height < height_budget and pointer < len(order) and iterations < max_iterations:
        index = order[pointer]
        row = rows[index]

        if allocation[index] >= row.max_natural_line_count:
            pointer += 1
            continue

        trial = list(allocation)
        trial[index] += 1
        trial_height = total_height(trial, rows)
        if trial_height <= height_budget:
            allocation = trial
            current_height = trial_height
            if allocation[index] >= row.max_natural_line_count:
                pointer += 1
        else:
            # Cheaper rows further down may still fit; this one is retried after wrapping
            pointer += 1

        if pointer >= len(order):
            pointer = 0
            if not any(allocation[i] < rows[i].max_natural_line_count for i in order):
                break

        iterations += 1

    if iterations >= max_iterations:
        logger.debug("Stopped after %d iterations at %.1f of %.1f", iterations, current_height, height_budget)
    logger.debug("Constrained allocation %s (height %.1f)", allocation, current_height)
    return allocation
