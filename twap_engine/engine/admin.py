"""Owner-only administrative controls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from twap_engine.core.domain.errors import ConfigurationError, LifecycleError
from twap_engine.core.domain.order_state_machine import OrderStatus, is_terminal_state
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import is_null_address, same_address

if TYPE_CHECKING:
    from twap_engine.engine.context import EngineContext

LOGGER = logging.getLogger(__name__)


class AdminControls:
    """Pause/resume, cancellation, asset recovery and executor rotation.

    These operations never touch the fill ledger.
    """

    def __init__(self, ctx: EngineContext) -> None:
        self._ctx = ctx

    def pause(self, *, caller: str) -> None:
        ctx = self._ctx
        ctx.require_owner(caller)
        if ctx.paused:
            raise LifecycleError(RejectReason.ALREADY_PAUSED, "engine is already paused")
        ctx.paused = True
        LOGGER.info("engine paused")

    def resume(self, *, caller: str) -> None:
        ctx = self._ctx
        ctx.require_owner(caller)
        if not ctx.paused:
            raise LifecycleError(RejectReason.NOT_PAUSED, "engine is not paused")
        ctx.paused = False
        LOGGER.info("engine resumed")

    def cancel(self, *, caller: str) -> None:
        """Terminate the order. Irreversible for the active strategy."""
        ctx = self._ctx
        ctx.require_owner(caller)
        if is_terminal_state(ctx.status):
            raise LifecycleError(RejectReason.ORDER_INACTIVE, f"order is already {ctx.status.name}")

        ctx.status = OrderStatus.CANCELLED
        ctx.paused = True
        ctx.emit_order_status()
        LOGGER.info(
            "order cancelled",
            extra={"filled_amount_in": ctx.ledger.filled_amount_in},
        )

    def sweep(self, asset: str, to: str, *, caller: str) -> int:
        """Transfer the engine's entire balance of ``asset`` to ``to``.

        ``ZERO_ADDRESS`` names the native currency. Allowed in any order
        status. Returns the amount moved.
        """
        ctx = self._ctx
        ctx.require_owner(caller)
        if is_null_address(to):
            raise ConfigurationError(RejectReason.INVALID_RECIPIENT, "sweep recipient must be non-null")

        amount = ctx.assets.balance_of(asset, ctx.account)
        if amount > 0:
            ctx.assets.transfer(asset, ctx.account, to, amount)

        LOGGER.info("swept balance", extra={"asset": asset, "to": to, "amount": amount})
        return amount

    def set_executor(self, new_executor: str, *, caller: str) -> None:
        ctx = self._ctx
        ctx.require_owner(caller)
        if is_null_address(new_executor):
            raise ConfigurationError(RejectReason.INVALID_ADDRESS, "executor must be non-null")
        strategy = ctx.store.strategy
        if strategy is not None and same_address(strategy.venue, new_executor):
            raise ConfigurationError(RejectReason.VENUE_IS_EXECUTOR, "executor must differ from the venue")

        previous = ctx.executor
        ctx.executor = new_executor
        LOGGER.info("executor updated", extra={"previous": previous, "executor": new_executor})
