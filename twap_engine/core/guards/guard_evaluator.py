"""Price and slippage guards.

Pure integer arithmetic over 18-decimal fixed-point prices. All divisions
floor, matching the on-chain semantics the engine is modelled on. Guards
raise ``MarketError``; they never round a failing value into a passing one.
"""

from __future__ import annotations

from twap_engine.core.domain.errors import MarketError
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import BPS_DENOMINATOR, PRICE_SCALE


def require_positive_price(price: int) -> int:
    """Return the price unchanged, or raise if the oracle value is unusable."""
    if price <= 0:
        raise MarketError(RejectReason.INVALID_PRICE, f"oracle price must be positive, got {price}")
    return price


def deviation_bps(price: int, reference_price: int) -> int:
    """Return ``|price - reference| * 10000 // reference``."""
    if reference_price <= 0:
        raise MarketError(
            RejectReason.INVALID_PRICE,
            f"reference price must be positive, got {reference_price}",
        )
    return abs(price - reference_price) * BPS_DENOMINATOR // reference_price


def check_price_deviation(price: int, reference_price: int, max_deviation_bps: int) -> None:
    """Raise if the quote is further than ``max_deviation_bps`` from the reference."""
    deviation = deviation_bps(price, reference_price)
    if deviation > max_deviation_bps:
        raise MarketError(
            RejectReason.PRICE_DEVIATION,
            f"price deviation {deviation} bps exceeds {max_deviation_bps} bps",
        )


def compute_min_out(amount_in: int, price: int, max_slippage_bps: int) -> int:
    """Return the minimum acceptable output for ``amount_in`` at ``price``.

    ``min_out = amount_in * price * (10000 - max_slippage_bps) // 10000 // PRICE_SCALE``

    A zero result is rejected: a guard that would accept a worthless fill
    is treated as a degenerate configuration.
    """
    min_out = amount_in * price * (BPS_DENOMINATOR - max_slippage_bps) // BPS_DENOMINATOR // PRICE_SCALE
    if min_out == 0:
        raise MarketError(RejectReason.MIN_OUT_ZERO, "computed minimum output is zero")
    return min_out
