"""Keeper loop driving slice execution.

The keeper is an external agent: it holds the executor identity, decides
*when* to call ``execute_slice`` and owns retry (a failed attempt is simply
tried again on the next tick). The engine remains the sole arbiter of
whether a slice may execute.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from twap_engine.core.domain.errors import TwapError
from twap_engine.core.domain.order_state_machine import OrderStatus, is_terminal_state
from twap_engine.core.events.events import FillEvent, OrderStatusEvent
from twap_engine.core.guards.schedule import first_pending_slice
from twap_engine.core.ports.asset_ledger import AssetLedgerError
from twap_engine.core.ports.swap_venue import VenueError

if TYPE_CHECKING:
    from twap_engine.core.domain.types import SwapResult
    from twap_engine.core.ports.clock import Clock
    from twap_engine.engine.twap_engine import TwapEngine

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickOutcome:
    """What the keeper did on one tick.

    action is one of: "terminal", "paused", "idle", "waiting", "executed", "rejected".
    """

    now: int
    action: str
    slice_id: int | None = None
    scheduled_time: int | None = None
    result: SwapResult | None = None
    reason: str | None = None


class SliceKeeper:
    """Executes the first pending slice once it becomes eligible."""

    def __init__(self, engine: TwapEngine, executor: str, clock: Clock) -> None:
        self._engine = engine
        self._executor = executor
        self._clock = clock

    def on_tick(self) -> TickOutcome:
        now = self._clock.now()
        engine = self._engine

        if is_terminal_state(engine.status):
            return TickOutcome(now=now, action="terminal")
        if engine.paused or engine.strategy is None:
            return TickOutcome(now=now, action="paused")

        slice_id = first_pending_slice(engine.total_slices, engine.slice_done)
        if slice_id is None:
            return TickOutcome(now=now, action="idle")

        scheduled = engine.next_scheduled_time(slice_id)
        if now < scheduled:
            LOGGER.info(
                "Next slice %d scheduled at %d (in ~%ds)",
                slice_id,
                scheduled,
                scheduled - now,
            )
            return TickOutcome(now=now, action="waiting", slice_id=slice_id, scheduled_time=scheduled)

        LOGGER.info("Eligible slice %d at %d", slice_id, now)
        try:
            result = engine.execute_slice(slice_id, caller=self._executor)
        except TwapError as exc:
            LOGGER.warning("executeSlice(%d) rejected: %s", slice_id, exc, extra={"reason": exc.reason})
            return TickOutcome(
                now=now,
                action="rejected",
                slice_id=slice_id,
                scheduled_time=scheduled,
                reason=exc.reason,
            )
        except (VenueError, AssetLedgerError) as exc:
            # Collaborator refusal; the engine rolled back and the slice stays pending.
            LOGGER.warning("executeSlice(%d) failed at venue: %s", slice_id, exc)
            return TickOutcome(
                now=now,
                action="rejected",
                slice_id=slice_id,
                scheduled_time=scheduled,
                reason=type(exc).__name__,
            )

        return TickOutcome(
            now=now,
            action="executed",
            slice_id=slice_id,
            scheduled_time=scheduled,
            result=result,
        )


class KeeperEventSink:
    """Logs engine notifications and a one-time summary once the order fills."""

    def __init__(self, total_amount_in: int | None = None) -> None:
        self._total_amount_in = total_amount_in
        self.summary_logged = False

    def on_event(self, event: Any) -> None:
        if isinstance(event, FillEvent):
            LOGGER.info(
                "[Event] Fill: slice=%d in=%d out=%d fee=%d",
                event.slice_id,
                event.amount_in,
                event.amount_out,
                event.fee,
            )
        elif isinstance(event, OrderStatusEvent):
            LOGGER.info(
                "[Event] OrderStatus: filled=%d received=%d fee=%d status=%s",
                event.filled_amount_in,
                event.received_amount_out,
                event.fee,
                event.status.name,
            )
            if event.status == OrderStatus.FILLED and not self.summary_logged:
                total = self._total_amount_in if self._total_amount_in is not None else event.filled_amount_in
                LOGGER.info(
                    "TWAP Summary: filled=%d/%d, received=%d, fee=%d, status=%s",
                    event.filled_amount_in,
                    total,
                    event.received_amount_out,
                    event.fee,
                    event.status.name,
                )
                self.summary_logged = True
