"""Constant-product pool venue.

A single x*y=k pool whose reserves are the balances of the pool account in
the asset ledger. Swaps pull the input through the caller's allowance, so
they roll back together with everything else in a ledger transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from twap_engine.core.domain.types import BPS_DENOMINATOR, PRICE_SCALE, SwapResult
from twap_engine.core.ports.asset_ledger import AssetLedger
from twap_engine.core.ports.swap_venue import SwapVenue, VenueError

LOGGER = logging.getLogger(__name__)


@dataclass
class ConstantProductVenue(SwapVenue):
    """Two-asset constant-product pool with an input-side fee in bps."""

    assets: AssetLedger
    address: str
    asset_a: str
    asset_b: str
    fee_bps: int = 30

    def __post_init__(self) -> None:
        if self.asset_a == self.asset_b:
            raise ValueError("pool assets must differ")
        if not 0 <= self.fee_bps < BPS_DENOMINATOR:
            raise ValueError(f"fee_bps out of range: {self.fee_bps}")

    def reserves(self, asset_in: str, asset_out: str) -> tuple[int, int]:
        if {asset_in, asset_out} != {self.asset_a, self.asset_b}:
            raise VenueError(f"unsupported pair {asset_in}/{asset_out}")
        return (
            self.assets.balance_of(asset_in, self.address),
            self.assets.balance_of(asset_out, self.address),
        )

    def spot_price(self, asset_in: str, asset_out: str) -> int:
        """Marginal price of ``asset_in`` in ``asset_out`` (18-decimal fixed point)."""
        reserve_in, reserve_out = self.reserves(asset_in, asset_out)
        if reserve_in == 0:
            return 0
        return reserve_out * PRICE_SCALE // reserve_in

    def quote(self, asset_in: str, asset_out: str, amount_in: int) -> tuple[int, int]:
        """Return ``(amount_out, fee)`` for swapping ``amount_in``."""
        reserve_in, reserve_out = self.reserves(asset_in, asset_out)
        fee = amount_in * self.fee_bps // BPS_DENOMINATOR
        net_in = amount_in - fee
        if reserve_in + net_in == 0:
            return 0, fee
        amount_out = net_in * reserve_out // (reserve_in + net_in)
        return amount_out, fee

    def swap(
        self,
        asset_in: str,
        asset_out: str,
        amount_in: int,
        min_out: int,
        *,
        account: str,
    ) -> SwapResult:
        amount_out, fee = self.quote(asset_in, asset_out, amount_in)
        if amount_out < min_out:
            raise VenueError(f"insufficient output: {amount_out} < {min_out}")

        self.assets.transfer_from(asset_in, self.address, account, self.address, amount_in)
        self.assets.transfer(asset_out, self.address, account, amount_out)

        LOGGER.debug(
            "pool swap",
            extra={"amount_in": amount_in, "amount_out": amount_out, "fee": fee},
        )
        return SwapResult(filled=amount_in, received=amount_out, fee=fee)
