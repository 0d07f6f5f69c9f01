"""
Engine notification models.

These events are immutable, append-only facts emitted after a state change
has been committed. They are consumed by loggers, recorders, keepers and
monitoring pipelines.
"""
from __future__ import annotations

from dataclasses import dataclass

from twap_engine.core.domain.order_state_machine import OrderStatus


@dataclass(frozen=True, slots=True)
class FillEvent:
    """Emitted once per successfully executed slice."""

    slice_id: int
    amount_in: int
    amount_out: int
    fee: int


@dataclass(frozen=True, slots=True)
class OrderStatusEvent:
    """Emitted after every slice, configuration and cancellation."""

    filled_amount_in: int
    received_amount_out: int
    fee: int
    status: OrderStatus
