"""Time-sliced order execution engine.

``TwapEngine`` is the single entry point for callers. It owns one
``EngineContext`` and serialises every state-changing operation through a
re-entrant lock, so each operation is applied or rejected as a whole and
no observer sees a partially applied mutation.

Roles:
- owner: ``configure``, ``pause``, ``resume``, ``cancel``, ``sweep``, ``set_executor``
- executor: ``execute_slice``

The engine starts paused with no strategy installed.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from twap_engine.core.domain.errors import ConfigurationError, ScheduleError
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import is_null_address
from twap_engine.core.events.sinks.null_event_bus import NullEventBus
from twap_engine.core.guards import schedule
from twap_engine.engine.admin import AdminControls
from twap_engine.engine.configuration import ConfigurationManager
from twap_engine.engine.context import EngineContext
from twap_engine.engine.execution import ExecutionEngine

if TYPE_CHECKING:
    from twap_engine.core.domain.order_state_machine import OrderStatus
    from twap_engine.core.domain.types import StrategyParams, SwapResult
    from twap_engine.core.events.event_bus import EventBus
    from twap_engine.core.ports.asset_ledger import AssetLedger
    from twap_engine.core.ports.clock import Clock
    from twap_engine.core.ports.price_oracle import PriceOracle
    from twap_engine.core.ports.swap_venue import SwapVenue


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    """Read-only view of the engine at one point in time."""

    status: OrderStatus
    paused: bool
    executor: str
    filled_amount_in: int
    received_amount_out: int
    accrued_fee: int
    total_amount_in: int
    total_slices: int
    slices_done: int
    reference_price: int


# pylint: disable=too-many-public-methods
class TwapEngine:
    """Role-gated facade over configuration, execution and admin controls."""

    def __init__(
        self,
        *,
        account: str,
        owner: str,
        executor: str,
        assets: AssetLedger,
        clock: Clock,
        venues: Mapping[str, SwapVenue],
        oracles: Mapping[str, PriceOracle],
        event_bus: EventBus | None = None,
    ) -> None:
        if is_null_address(account) or is_null_address(owner):
            raise ConfigurationError(RejectReason.INVALID_ADDRESS, "account and owner must be non-null")
        if is_null_address(executor):
            raise ConfigurationError(RejectReason.INVALID_ADDRESS, "executor must be non-null")

        self._ctx = EngineContext(
            account=account,
            owner=owner,
            executor=executor,
            assets=assets,
            clock=clock,
            event_bus=event_bus if event_bus is not None else NullEventBus(),
            venues={address.lower(): venue for address, venue in venues.items()},
            oracles={address.lower(): oracle for address, oracle in oracles.items()},
        )
        self._lock = threading.RLock()

        self._configuration = ConfigurationManager(self._ctx)
        self._execution = ExecutionEngine(self._ctx)
        self._admin = AdminControls(self._ctx)

    # ---------------------------------------------------------------------
    # Owner operations
    # ---------------------------------------------------------------------

    def configure(self, strategy: StrategyParams, *, caller: str) -> int:
        """Install a new strategy; returns the captured reference price."""
        with self._lock:
            return self._configuration.configure(strategy, caller=caller)

    def pause(self, *, caller: str) -> None:
        with self._lock:
            self._admin.pause(caller=caller)

    def resume(self, *, caller: str) -> None:
        with self._lock:
            self._admin.resume(caller=caller)

    def cancel(self, *, caller: str) -> None:
        with self._lock:
            self._admin.cancel(caller=caller)

    def sweep(self, asset: str, to: str, *, caller: str) -> int:
        with self._lock:
            return self._admin.sweep(asset, to, caller=caller)

    def set_executor(self, new_executor: str, *, caller: str) -> None:
        with self._lock:
            self._admin.set_executor(new_executor, caller=caller)

    # ---------------------------------------------------------------------
    # Executor operation
    # ---------------------------------------------------------------------

    def execute_slice(self, slice_id: int, *, caller: str) -> SwapResult:
        with self._lock:
            return self._execution.execute_slice(slice_id, caller=caller)

    # ---------------------------------------------------------------------
    # Read-only surface
    # ---------------------------------------------------------------------

    @property
    def account(self) -> str:
        return self._ctx.account

    @property
    def owner(self) -> str:
        return self._ctx.owner

    @property
    def executor(self) -> str:
        return self._ctx.executor

    @property
    def paused(self) -> bool:
        return self._ctx.paused

    @property
    def status(self) -> OrderStatus:
        return self._ctx.status

    @property
    def strategy(self) -> StrategyParams | None:
        return self._ctx.store.strategy

    @property
    def reference_price(self) -> int:
        return self._ctx.store.reference_price

    @property
    def filled_amount_in(self) -> int:
        return self._ctx.ledger.filled_amount_in

    @property
    def received_amount_out(self) -> int:
        return self._ctx.ledger.received_amount_out

    @property
    def accrued_fee(self) -> int:
        return self._ctx.ledger.accrued_fee

    @property
    def event_bus(self) -> EventBus:
        return self._ctx.event_bus

    def slice_done(self, slice_id: int) -> bool:
        return self._ctx.ledger.is_done(slice_id)

    @property
    def total_slices(self) -> int:
        """Slice count of the active strategy (0 when unconfigured)."""
        strategy = self._ctx.store.strategy
        if strategy is None:
            return 0
        return schedule.slice_count(strategy)

    def next_scheduled_time(self, slice_id: int) -> int:
        """Earliest eligible timestamp for ``slice_id`` under the active strategy."""
        strategy = self._ctx.store.require_strategy()
        count = schedule.slice_count(strategy)
        if slice_id < 0 or slice_id >= count:
            raise ScheduleError(
                RejectReason.SLICE_OUT_OF_RANGE,
                f"slice {slice_id} outside [0, {count})",
            )
        return schedule.scheduled_time(strategy, slice_id)

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            ctx = self._ctx
            strategy = ctx.store.strategy
            return EngineSnapshot(
                status=ctx.status,
                paused=ctx.paused,
                executor=ctx.executor,
                filled_amount_in=ctx.ledger.filled_amount_in,
                received_amount_out=ctx.ledger.received_amount_out,
                accrued_fee=ctx.ledger.accrued_fee,
                total_amount_in=0 if strategy is None else strategy.total_amount_in,
                total_slices=self.total_slices,
                slices_done=ctx.ledger.slices_done,
                reference_price=ctx.store.reference_price,
            )
