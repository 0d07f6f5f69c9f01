"""Single-slice execution.

Sequencing contract for one slice:

1. validate lifecycle, schedule and remaining amount
2. query the oracle, run the deviation guard, compute ``min_out``
3. grant the venue an allowance of exactly ``amount_in`` and call it
4. validate the venue-reported result
5. commit the ledger, then emit notifications

Nothing the venue returns can influence steps 1-2, and the ledger is only
written after step 4 succeeds. Steps 3-4 run inside an asset-ledger
transaction, so a rejected result also restores balances and allowances.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from twap_engine.core.domain.errors import LifecycleError, MarketError, ScheduleError
from twap_engine.core.domain.order_state_machine import derive_status, is_terminal_state
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.events.events import FillEvent
from twap_engine.core.guards.guard_evaluator import (
    check_price_deviation,
    compute_min_out,
    require_positive_price,
)
from twap_engine.core.guards.schedule import scheduled_time, slice_count

if TYPE_CHECKING:
    from twap_engine.core.domain.types import StrategyParams, SwapResult
    from twap_engine.engine.context import EngineContext

LOGGER = logging.getLogger(__name__)


class ExecutionEngine:
    """Executes slices of the active strategy."""

    def __init__(self, ctx: EngineContext) -> None:
        self._ctx = ctx

    # pylint: disable=too-many-locals
    def execute_slice(self, slice_id: int, *, caller: str) -> SwapResult:
        ctx = self._ctx
        ctx.require_executor(caller)
        if ctx.paused:
            raise LifecycleError(RejectReason.PAUSED, "engine is paused")

        if is_terminal_state(ctx.status):
            raise LifecycleError(RejectReason.ORDER_INACTIVE, f"order is {ctx.status.name}")
        strategy = ctx.store.require_strategy()

        count = slice_count(strategy)
        if slice_id < 0 or slice_id >= count:
            raise ScheduleError(
                RejectReason.SLICE_OUT_OF_RANGE,
                f"slice {slice_id} outside [0, {count})",
            )
        if ctx.ledger.is_done(slice_id):
            raise ScheduleError(RejectReason.SLICE_ALREADY_DONE, f"slice {slice_id} already done")

        now = ctx.clock.now()
        scheduled = scheduled_time(strategy, slice_id)
        if now < scheduled:
            raise ScheduleError(
                RejectReason.TOO_EARLY,
                f"slice {slice_id} eligible at {scheduled}, now {now}",
            )

        remaining = strategy.total_amount_in - ctx.ledger.filled_amount_in
        amount_in = min(strategy.slice_amount_in, remaining)
        if amount_in <= 0:
            raise LifecycleError(RejectReason.NOTHING_REMAINING, "nothing remaining to fill")

        oracle = ctx.oracle_for(strategy.oracle)
        price = require_positive_price(oracle.get_price(strategy.asset_in, strategy.asset_out))
        check_price_deviation(price, ctx.store.reference_price, strategy.max_price_deviation_bps)
        min_out = compute_min_out(amount_in, price, strategy.max_slippage_bps)

        result = self._swap(strategy, amount_in, min_out)

        # Commit every state change before notifying sinks.
        ctx.ledger.record_fill(filled=result.filled, received=result.received, fee=result.fee)
        ctx.ledger.mark_done(slice_id)
        ctx.status = derive_status(ctx.ledger.filled_amount_in, strategy.total_amount_in)

        ctx.event_bus.emit(
            FillEvent(
                slice_id=slice_id,
                amount_in=result.filled,
                amount_out=result.received,
                fee=result.fee,
            )
        )
        ctx.emit_order_status()

        LOGGER.info(
            "slice executed",
            extra={
                "slice_id": slice_id,
                "amount_in": result.filled,
                "amount_out": result.received,
                "fee": result.fee,
                "price": price,
                "min_out": min_out,
                "status": ctx.status.name,
            },
        )
        return result

    def _swap(self, strategy: StrategyParams, amount_in: int, min_out: int) -> SwapResult:
        ctx = self._ctx
        venue = ctx.venue_for(strategy.venue)

        with ctx.assets.transaction():
            # Reset before set: some assets refuse to change a non-zero allowance.
            ctx.assets.approve(strategy.asset_in, ctx.account, strategy.venue, 0)
            ctx.assets.approve(strategy.asset_in, ctx.account, strategy.venue, amount_in)

            result = venue.swap(
                strategy.asset_in,
                strategy.asset_out,
                amount_in,
                min_out,
                account=ctx.account,
            )

            ctx.assets.approve(strategy.asset_in, ctx.account, strategy.venue, 0)
            self._validate_result(result, amount_in, min_out)

        return result

    @staticmethod
    def _validate_result(result: SwapResult, amount_in: int, min_out: int) -> None:
        if not 0 < result.filled <= amount_in or result.received < 0 or result.fee < 0:
            raise MarketError(
                RejectReason.INVALID_FILL,
                f"venue reported filled={result.filled} received={result.received} "
                f"fee={result.fee} for amount_in={amount_in}",
            )
        if result.received < min_out:
            raise MarketError(
                RejectReason.SLIPPAGE,
                f"venue output {result.received} below minimum {min_out}",
            )
