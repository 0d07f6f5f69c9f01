"""Slice schedule computations.

Slice ``i`` becomes eligible at ``start_time + interval * i`` where
``interval = (end_time - start_time) // slice_count``. The interval may be
zero when the window is short relative to the slice count, in which case
every slice is eligible at ``start_time``. No upper bound is applied at
``end_time``: slices remain executable after the window closes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from twap_engine.core.domain.types import StrategyParams


def slice_count(strategy: StrategyParams) -> int:
    """Return ``ceil(total_amount_in / slice_amount_in)``."""
    return -(-strategy.total_amount_in // strategy.slice_amount_in)


def slice_interval(strategy: StrategyParams) -> int:
    return (strategy.end_time - strategy.start_time) // slice_count(strategy)


def scheduled_time(strategy: StrategyParams, slice_id: int) -> int:
    """Earliest eligible timestamp for ``slice_id``.

    Range checking is the caller's responsibility.
    """
    return strategy.start_time + slice_interval(strategy) * slice_id


def first_pending_slice(count: int, is_done: Callable[[int], bool]) -> int | None:
    """Return the lowest slice id that is not done, ignoring the schedule."""
    for slice_id in range(count):
        if not is_done(slice_id):
            return slice_id
    return None


def next_eligible_slice(
    strategy: StrategyParams,
    now: int,
    is_done: Callable[[int], bool],
) -> int | None:
    """Return the lowest undone slice whose scheduled time is ``<= now``."""
    interval = slice_interval(strategy)
    for slice_id in range(slice_count(strategy)):
        if is_done(slice_id):
            continue
        if now >= strategy.start_time + interval * slice_id:
            return slice_id
        # Scheduled times are non-decreasing in slice id.
        return None
    return None
