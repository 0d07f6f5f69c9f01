"""Holder for the active strategy and its captured reference price."""

from __future__ import annotations

from typing import TYPE_CHECKING

from twap_engine.core.domain.errors import LifecycleError
from twap_engine.core.domain.reject_reasons import RejectReason

if TYPE_CHECKING:
    from twap_engine.core.domain.types import StrategyParams


class StrategyStore:
    """At most one strategy is active at a time.

    The strategy and its reference price are replaced together; the store
    is written only by the configuration manager.
    """

    def __init__(self) -> None:
        self._strategy: StrategyParams | None = None
        self._reference_price: int = 0

    @property
    def strategy(self) -> StrategyParams | None:
        return self._strategy

    @property
    def reference_price(self) -> int:
        return self._reference_price

    @property
    def is_configured(self) -> bool:
        return self._strategy is not None

    def require_strategy(self) -> StrategyParams:
        if self._strategy is None:
            raise LifecycleError(RejectReason.NOT_CONFIGURED, "no strategy configured")
        return self._strategy

    def install(self, strategy: StrategyParams, reference_price: int) -> None:
        if reference_price <= 0:
            raise ValueError("reference price must be positive")
        self._strategy = strategy
        self._reference_price = reference_price
