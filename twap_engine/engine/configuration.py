"""Strategy configuration.

Installs a new strategy atomically: every check (role, quiescence, domain
constraints, oracle price) runs before the first mutation, so a rejected
configuration leaves the previous strategy, ledger and status untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from twap_engine.core.domain.errors import ConfigurationError, LifecycleError
from twap_engine.core.domain.order_state_machine import OrderStatus
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import (
    MAX_PRICE_DEVIATION_BPS,
    MAX_SLIPPAGE_BPS,
    is_null_address,
    same_address,
)
from twap_engine.core.guards.guard_evaluator import require_positive_price

if TYPE_CHECKING:
    from twap_engine.core.domain.types import StrategyParams
    from twap_engine.engine.context import EngineContext

LOGGER = logging.getLogger(__name__)


class ConfigurationManager:
    """Validates and installs strategies on an engine context."""

    def __init__(self, ctx: EngineContext) -> None:
        self._ctx = ctx

    def configure(self, strategy: StrategyParams, *, caller: str) -> int:
        """Install ``strategy`` and return the captured reference price."""
        ctx = self._ctx
        ctx.require_owner(caller)
        if not ctx.paused:
            raise LifecycleError(RejectReason.NOT_PAUSED, "engine must be paused to configure")

        self.validate(strategy)

        oracle = ctx.oracle_for(strategy.oracle)
        reference_price = require_positive_price(
            oracle.get_price(strategy.asset_in, strategy.asset_out)
        )

        # Effects only after every check has passed.
        ctx.ledger.reset()
        ctx.store.install(strategy, reference_price)
        ctx.status = OrderStatus.OPEN
        ctx.emit_order_status()

        LOGGER.info(
            "strategy configured",
            extra={
                "asset_in": strategy.asset_in,
                "asset_out": strategy.asset_out,
                "total_amount_in": strategy.total_amount_in,
                "slice_amount_in": strategy.slice_amount_in,
                "reference_price": reference_price,
            },
        )
        return reference_price

    # pylint: disable=too-many-branches
    def validate(self, strategy: StrategyParams) -> None:
        """Raise ``ConfigurationError`` for the first violated constraint."""
        ctx = self._ctx

        if is_null_address(strategy.asset_in) or is_null_address(strategy.asset_out):
            raise ConfigurationError(RejectReason.INVALID_ASSETS, "assets must be non-null")
        if same_address(strategy.asset_in, strategy.asset_out):
            raise ConfigurationError(RejectReason.SAME_ASSET, "asset_in and asset_out must differ")

        if is_null_address(strategy.venue) or is_null_address(strategy.oracle):
            raise ConfigurationError(RejectReason.INVALID_ADDRESS, "venue and oracle must be non-null")
        # Both identifiers must resolve to an injected capability.
        ctx.venue_for(strategy.venue)
        ctx.oracle_for(strategy.oracle)

        if strategy.total_amount_in == 0 or strategy.slice_amount_in == 0:
            raise ConfigurationError(RejectReason.INVALID_AMOUNTS, "amounts must be positive")

        now = ctx.clock.now()
        if not strategy.end_time > strategy.start_time > now:
            raise ConfigurationError(
                RejectReason.INVALID_TIME_WINDOW,
                f"require end_time > start_time > now ({strategy.end_time}, {strategy.start_time}, {now})",
            )

        if strategy.max_slippage_bps > MAX_SLIPPAGE_BPS:
            raise ConfigurationError(
                RejectReason.INVALID_BPS,
                f"max_slippage_bps {strategy.max_slippage_bps} exceeds {MAX_SLIPPAGE_BPS}",
            )
        if strategy.max_price_deviation_bps > MAX_PRICE_DEVIATION_BPS:
            raise ConfigurationError(
                RejectReason.INVALID_BPS,
                f"max_price_deviation_bps {strategy.max_price_deviation_bps} exceeds {MAX_PRICE_DEVIATION_BPS}",
            )

        if same_address(strategy.venue, ctx.executor):
            raise ConfigurationError(RejectReason.VENUE_IS_EXECUTOR, "venue must differ from the executor")
