"""Stable reason codes attached to every rejected operation."""

from __future__ import annotations


class RejectReason:
    """String constants used as failure reasons.

    Values are part of the external surface: drivers match on them.
    """

    # Authorization
    UNAUTHORIZED = "unauthorized"

    # Quiescence
    PAUSED = "paused"
    NOT_PAUSED = "not_paused"
    ALREADY_PAUSED = "already_paused"

    # Validation
    INVALID_ASSETS = "invalid_assets"
    SAME_ASSET = "same_asset"
    INVALID_ADDRESS = "invalid_address"
    INVALID_AMOUNTS = "invalid_amounts"
    INVALID_TIME_WINDOW = "invalid_time_window"
    INVALID_BPS = "invalid_bps"
    VENUE_IS_EXECUTOR = "venue_is_executor"
    INVALID_RECIPIENT = "invalid_recipient"

    # Schedule
    SLICE_OUT_OF_RANGE = "slice_out_of_range"
    SLICE_ALREADY_DONE = "slice_already_done"
    TOO_EARLY = "too_early"

    # Market
    INVALID_PRICE = "invalid_price"
    PRICE_DEVIATION = "price_deviation"
    MIN_OUT_ZERO = "min_out_zero"
    INVALID_FILL = "invalid_fill"
    SLIPPAGE = "slippage"

    # Lifecycle
    NOT_CONFIGURED = "not_configured"
    ORDER_INACTIVE = "order_inactive"
    NOTHING_REMAINING = "nothing_remaining"
