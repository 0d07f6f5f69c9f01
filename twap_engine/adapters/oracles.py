"""Price oracle implementations."""

from __future__ import annotations

from dataclasses import dataclass, field

from twap_engine.adapters.constant_product_venue import ConstantProductVenue
from twap_engine.core.ports.price_oracle import PriceOracle


@dataclass
class FixedPriceOracle(PriceOracle):
    """Oracle returning a settable price per (asset_in, asset_out) pair.

    Unknown pairs quote ``default_price``; zero signals an invalid price.
    """

    default_price: int = 0
    prices: dict[tuple[str, str], int] = field(default_factory=dict)

    def set_price(self, asset_in: str, asset_out: str, price: int) -> None:
        self.prices[(asset_in, asset_out)] = price

    def get_price(self, asset_in: str, asset_out: str) -> int:
        return self.prices.get((asset_in, asset_out), self.default_price)


@dataclass(frozen=True)
class PoolPriceOracle(PriceOracle):
    """Oracle reading the spot price of a constant-product pool."""

    pool: ConstantProductVenue

    def get_price(self, asset_in: str, asset_out: str) -> int:
        return self.pool.spot_price(asset_in, asset_out)
