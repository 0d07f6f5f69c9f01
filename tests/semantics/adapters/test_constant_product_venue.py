"""
Semantic test: constant-product pool venue and oracles.

Invariant:
The pool quotes x*y=k with an input-side fee, honours min_out, and only
moves input it was allowed to pull.
"""

from __future__ import annotations

import pytest

from twap_engine.adapters.constant_product_venue import ConstantProductVenue, VenueError
from twap_engine.adapters.in_memory_assets import InMemoryAssetLedger
from twap_engine.adapters.oracles import FixedPriceOracle, PoolPriceOracle
from twap_engine.core.domain.types import PRICE_SCALE
from twap_engine.core.ports.asset_ledger import AssetLedgerError

WETH = "0xweth"
USDC = "0xusdc"
POOL = "0xpool"
TRADER = "0xtrader"


@pytest.fixture
def pool() -> ConstantProductVenue:
    assets = InMemoryAssetLedger()
    assets.mint(WETH, POOL, 1_000 * PRICE_SCALE)
    assets.mint(USDC, POOL, 2_000_000 * PRICE_SCALE)
    assets.mint(WETH, TRADER, 10 * PRICE_SCALE)
    return ConstantProductVenue(assets=assets, address=POOL, asset_a=WETH, asset_b=USDC, fee_bps=30)


def test_spot_price_from_reserves(pool: ConstantProductVenue) -> None:
    assert pool.spot_price(WETH, USDC) == 2_000 * PRICE_SCALE
    assert PoolPriceOracle(pool=pool).get_price(WETH, USDC) == 2_000 * PRICE_SCALE


def test_swap_follows_constant_product(pool: ConstantProductVenue) -> None:
    amount_in = PRICE_SCALE
    expected_out, fee = pool.quote(WETH, USDC, amount_in)
    pool.assets.approve(WETH, TRADER, POOL, amount_in)

    result = pool.swap(WETH, USDC, amount_in, expected_out, account=TRADER)

    assert result.filled == amount_in
    assert result.received == expected_out
    assert result.fee == fee == amount_in * 30 // 10_000
    assert pool.assets.balance_of(USDC, TRADER) == expected_out
    # Price impact keeps the output below the spot value.
    assert expected_out < 2_000 * PRICE_SCALE


def test_swap_below_min_out_is_refused(pool: ConstantProductVenue) -> None:
    pool.assets.approve(WETH, TRADER, POOL, PRICE_SCALE)
    expected_out, _ = pool.quote(WETH, USDC, PRICE_SCALE)

    with pytest.raises(VenueError):
        pool.swap(WETH, USDC, PRICE_SCALE, expected_out + 1, account=TRADER)


def test_swap_without_allowance_is_refused(pool: ConstantProductVenue) -> None:
    with pytest.raises(AssetLedgerError):
        pool.swap(WETH, USDC, PRICE_SCALE, 1, account=TRADER)


def test_unsupported_pair_is_refused(pool: ConstantProductVenue) -> None:
    with pytest.raises(VenueError):
        pool.quote(WETH, "0xdai", PRICE_SCALE)


def test_fixed_oracle_defaults_to_invalid_price() -> None:
    oracle = FixedPriceOracle()
    assert oracle.get_price(WETH, USDC) == 0

    oracle.set_price(WETH, USDC, 5)
    assert oracle.get_price(WETH, USDC) == 5
