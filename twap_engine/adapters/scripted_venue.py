"""Deterministic swap venue used for dry runs and tests.

Results are either queued explicitly or derived from a fixed price and a
haircut in bps. Asset movements follow the reported result, so the asset
ledger stays consistent with what the engine commits.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from twap_engine.core.domain.types import BPS_DENOMINATOR, PRICE_SCALE, SwapResult
from twap_engine.core.ports.asset_ledger import AssetLedger
from twap_engine.core.ports.swap_venue import SwapVenue


@dataclass(frozen=True, slots=True)
class SwapCall:
    asset_in: str
    asset_out: str
    amount_in: int
    min_out: int
    account: str


@dataclass
class ScriptedSwapVenue(SwapVenue):
    """Venue double with scripted outcomes.

    - ``queue_result`` pushes an exact ``SwapResult`` consumed by the next call.
    - otherwise ``received = min_out`` when ``fill_at_min_out`` is set, or
      ``amount_in * price * (10000 - haircut_bps) // 10000 // PRICE_SCALE``.

    Every call is recorded in ``calls`` before any result is produced.
    """

    assets: AssetLedger
    address: str
    price: int = PRICE_SCALE
    haircut_bps: int = 0
    fee_bps: int = 0
    fill_at_min_out: bool = False
    calls: list[SwapCall] = field(default_factory=list)
    _queued: deque[SwapResult] = field(default_factory=deque, repr=False)

    def queue_result(self, result: SwapResult) -> None:
        self._queued.append(result)

    def swap(
        self,
        asset_in: str,
        asset_out: str,
        amount_in: int,
        min_out: int,
        *,
        account: str,
    ) -> SwapResult:
        self.calls.append(
            SwapCall(
                asset_in=asset_in,
                asset_out=asset_out,
                amount_in=amount_in,
                min_out=min_out,
                account=account,
            )
        )

        if self._queued:
            result = self._queued.popleft()
        else:
            if self.fill_at_min_out:
                received = min_out
            else:
                received = (
                    amount_in * self.price * (BPS_DENOMINATOR - self.haircut_bps)
                    // BPS_DENOMINATOR
                    // PRICE_SCALE
                )
            fee = amount_in * self.fee_bps // BPS_DENOMINATOR
            result = SwapResult(filled=amount_in, received=received, fee=fee)

        # Only move what can be moved; a misreported result is the engine's problem.
        pulled = min(max(result.filled, 0), amount_in)
        if pulled:
            self.assets.transfer_from(asset_in, self.address, account, self.address, pulled)
        if result.received > 0 and self.assets.balance_of(asset_out, self.address) >= result.received:
            self.assets.transfer(asset_out, self.address, account, result.received)
        return result
