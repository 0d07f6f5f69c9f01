"""
Semantic test: price deviation guard.

Invariant:
A quote whose relative distance from the reference price exceeds the
configured bound (in bps, floor-rounded) is always rejected.
"""

from __future__ import annotations

import pytest

from twap_engine.core.domain.errors import MarketError
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import PRICE_SCALE
from twap_engine.core.guards.guard_evaluator import (
    check_price_deviation,
    deviation_bps,
    require_positive_price,
)


def test_quote_at_double_reference_is_rejected() -> None:
    with pytest.raises(MarketError) as exc_info:
        check_price_deviation(2 * PRICE_SCALE, PRICE_SCALE, 250)

    assert exc_info.value.reason == RejectReason.PRICE_DEVIATION


def test_quote_exactly_at_bound_is_accepted() -> None:
    # 2.5% above and below the reference.
    check_price_deviation(PRICE_SCALE * 10_250 // 10_000, PRICE_SCALE, 250)
    check_price_deviation(PRICE_SCALE * 9_750 // 10_000, PRICE_SCALE, 250)


def test_quote_one_bps_beyond_bound_is_rejected() -> None:
    with pytest.raises(MarketError):
        check_price_deviation(PRICE_SCALE * 10_251 // 10_000, PRICE_SCALE, 250)


def test_deviation_floors_partial_bps() -> None:
    # 0.015% above the reference floors to 1 bps.
    price = PRICE_SCALE + PRICE_SCALE * 15 // 100_000
    assert deviation_bps(price, PRICE_SCALE) == 1
    check_price_deviation(price, PRICE_SCALE, 1)


def test_zero_bound_accepts_only_reference_price() -> None:
    check_price_deviation(PRICE_SCALE, PRICE_SCALE, 0)
    with pytest.raises(MarketError):
        check_price_deviation(PRICE_SCALE + PRICE_SCALE // 10_000, PRICE_SCALE, 0)


@pytest.mark.parametrize("price", [0, -1])
def test_non_positive_price_is_rejected(price: int) -> None:
    with pytest.raises(MarketError) as exc_info:
        require_positive_price(price)

    assert exc_info.value.reason == RejectReason.INVALID_PRICE
