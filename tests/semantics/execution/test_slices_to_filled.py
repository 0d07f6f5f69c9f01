"""
Semantic test: open -> partial_filled -> filled.

Invariant:
Each slice consumes min(slice_amount, remaining); the sum of consumed
input never exceeds the total and equals it exactly when the order fills.
"""

from __future__ import annotations

from conftest import EXECUTOR, START, Harness, build_strategy

from twap_engine.core.domain.order_state_machine import OrderStatus
from twap_engine.core.events.events import FillEvent, OrderStatusEvent


def test_ten_units_in_slices_of_three(harness: Harness) -> None:
    """total=10, slice=3: slices 0-2 take 3 units, slice 3 takes the last unit."""
    harness.start(build_strategy(total_amount_in=10, slice_amount_in=3, max_slippage_bps=0))
    harness.clock.set(START + 300)

    consumed = []
    for slice_id in range(4):
        result = harness.engine.execute_slice(slice_id, caller=EXECUTOR)
        consumed.append(result.filled)
        assert harness.engine.filled_amount_in <= 10

    assert consumed == [3, 3, 3, 1]
    assert harness.engine.filled_amount_in == 10
    assert harness.engine.received_amount_out == 10
    assert harness.engine.status == OrderStatus.FILLED
    assert all(harness.engine.slice_done(i) for i in range(4))

    # The venue was asked for exactly the computed amounts.
    assert [call.amount_in for call in harness.venue.calls] == [3, 3, 3, 1]
    assert [call.min_out for call in harness.venue.calls] == [3, 3, 3, 1]


def test_status_progression_and_notifications(harness: Harness) -> None:
    harness.start(build_strategy(total_amount_in=10, slice_amount_in=3, max_slippage_bps=0))
    harness.clock.set(START + 300)

    statuses = []
    for slice_id in range(4):
        harness.engine.execute_slice(slice_id, caller=EXECUTOR)
        statuses.append(harness.engine.status)

    assert statuses == [
        OrderStatus.PARTIAL_FILLED,
        OrderStatus.PARTIAL_FILLED,
        OrderStatus.PARTIAL_FILLED,
        OrderStatus.FILLED,
    ]

    fills = harness.recorder.of_type(FillEvent)
    assert [(f.slice_id, f.amount_in, f.amount_out) for f in fills] == [
        (0, 3, 3),
        (1, 3, 3),
        (2, 3, 3),
        (3, 1, 1),
    ]

    # One status event for configure, then one per slice.
    status_events = harness.recorder.of_type(OrderStatusEvent)
    assert len(status_events) == 5
    assert [e.filled_amount_in for e in status_events] == [0, 3, 6, 9, 10]
    assert status_events[-1].status == OrderStatus.FILLED

    # Fill precedes the status update for the same slice.
    kinds = [type(e).__name__ for e in harness.recorder.events[1:3]]
    assert kinds == ["FillEvent", "OrderStatusEvent"]


def test_slices_may_execute_out_of_order(harness: Harness) -> None:
    harness.start(build_strategy(total_amount_in=10, slice_amount_in=3, max_slippage_bps=0))
    harness.clock.set(START + 300)

    assert harness.engine.execute_slice(3, caller=EXECUTOR).filled == 3
    assert harness.engine.execute_slice(0, caller=EXECUTOR).filled == 3
    assert harness.engine.execute_slice(2, caller=EXECUTOR).filled == 3
    # Remaining is what the last slice gets, whichever id it is.
    assert harness.engine.execute_slice(1, caller=EXECUTOR).filled == 1
    assert harness.engine.status == OrderStatus.FILLED


def test_fee_and_received_accumulate(harness: Harness) -> None:
    harness.venue.fee_bps = 30
    harness.venue.fill_at_min_out = False
    harness.start(build_strategy())
    harness.clock.set(START + 100)

    first = harness.engine.execute_slice(0, caller=EXECUTOR)
    second = harness.engine.execute_slice(1, caller=EXECUTOR)

    assert harness.engine.accrued_fee == first.fee + second.fee > 0
    assert harness.engine.received_amount_out == first.received + second.received
