"""
Order lifecycle state machine definitions.

This module defines the order-level statuses and the allowed transitions
between them. Status is never assigned freely: it is derived from fill
progress, except for the explicit cancellation edge.

Numeric values are the externally observed status codes.
"""

from __future__ import annotations

from enum import IntEnum


class OrderStatus(IntEnum):
    OPEN = 0
    PARTIAL_FILLED = 1
    FILLED = 2
    CANCELLED = 3


# Terminal order statuses: once reached, no slice may execute.
ORDER_TERMINAL_STATES: frozenset[OrderStatus] = frozenset(
    {
        OrderStatus.FILLED,
        OrderStatus.CANCELLED,
    }
)


# Allowed order status transitions within one strategy lifetime.
#
# Key   : previous status
# Value : set of allowed next statuses
#
# Notes:
# - A configuration event starts a new lifetime at OPEN and is not modelled here.
# - Repeated PARTIAL_FILLED -> PARTIAL_FILLED is allowed (one per slice).
ORDER_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.OPEN: frozenset(
        {
            OrderStatus.PARTIAL_FILLED,
            OrderStatus.FILLED,
            OrderStatus.CANCELLED,
        }
    ),

    OrderStatus.PARTIAL_FILLED: frozenset(
        {
            OrderStatus.PARTIAL_FILLED,
            OrderStatus.FILLED,
            OrderStatus.CANCELLED,
        }
    ),

    OrderStatus.FILLED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def is_terminal_state(status: OrderStatus) -> bool:
    """Return True if the given status is terminal."""
    return status in ORDER_TERMINAL_STATES


def is_valid_transition(prev_status: OrderStatus, next_status: OrderStatus) -> bool:
    """Return True if the transition prev_status -> next_status is allowed."""
    allowed = ORDER_ALLOWED_TRANSITIONS.get(prev_status)
    if allowed is None:
        return False
    return next_status in allowed


def derive_status(filled_amount_in: int, total_amount_in: int) -> OrderStatus:
    """Derive the order status from cumulative fill progress."""
    if filled_amount_in >= total_amount_in:
        return OrderStatus.FILLED
    if filled_amount_in > 0:
        return OrderStatus.PARTIAL_FILLED
    return OrderStatus.OPEN
