"""Preflight report for a configured engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from twap_engine.core.domain.errors import LifecycleError
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.guards.schedule import next_eligible_slice

if TYPE_CHECKING:
    from twap_engine.engine.twap_engine import TwapEngine


@dataclass(frozen=True, slots=True)
class PreflightReport:
    now: int
    total_amount_in: int
    slice_amount_in: int
    start_time: int
    end_time: int
    filled_amount_in: int
    total_slices: int
    next_eligible_slice: int | None

    def lines(self) -> list[str]:
        block_time = datetime.fromtimestamp(self.now, tz=timezone.utc).isoformat()
        next_slice = (
            str(self.next_eligible_slice)
            if self.next_eligible_slice is not None
            else "none (by schedule or all done)"
        )
        return [
            "Preflight:",
            f"- blockTime: {self.now} ({block_time})",
            f"- totalAmountIn: {self.total_amount_in}",
            f"- sliceAmountIn: {self.slice_amount_in}",
            f"- window: {self.start_time} -> {self.end_time}",
            f"- filledAmountIn: {self.filled_amount_in}",
            f"- totalSlices: {self.total_slices}",
            f"- nextEligibleSlice: {next_slice}",
        ]


def build_preflight(engine: TwapEngine, now: int) -> PreflightReport:
    """Summarise the active strategy and the next slice eligible at ``now``.

    Raises ``LifecycleError`` when no strategy is configured.
    """
    snapshot = engine.snapshot()
    strategy = engine.strategy
    if strategy is None:
        raise LifecycleError(RejectReason.NOT_CONFIGURED, "no strategy configured")

    return PreflightReport(
        now=now,
        total_amount_in=strategy.total_amount_in,
        slice_amount_in=strategy.slice_amount_in,
        start_time=strategy.start_time,
        end_time=strategy.end_time,
        filled_amount_in=snapshot.filled_amount_in,
        total_slices=snapshot.total_slices,
        next_eligible_slice=next_eligible_slice(strategy, now, engine.slice_done),
    )
