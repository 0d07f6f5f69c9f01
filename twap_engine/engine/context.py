"""Explicit engine context.

All mutable engine state lives on one ``EngineContext`` that is passed by
reference to the configuration manager, execution engine and admin
controls. Collaborators (asset ledger, clock, venues, oracles, event bus)
are injected here rather than looked up from ambient state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping

from twap_engine.core.domain.errors import AuthorizationError, ConfigurationError
from twap_engine.core.domain.ledger import AccountingLedger
from twap_engine.core.domain.order_state_machine import OrderStatus
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.strategy_store import StrategyStore
from twap_engine.core.domain.types import same_address
from twap_engine.core.events.events import OrderStatusEvent

if TYPE_CHECKING:
    from twap_engine.core.events.event_bus import EventBus
    from twap_engine.core.ports.asset_ledger import AssetLedger
    from twap_engine.core.ports.clock import Clock
    from twap_engine.core.ports.price_oracle import PriceOracle
    from twap_engine.core.ports.swap_venue import SwapVenue


# pylint: disable=too-many-instance-attributes
@dataclass(slots=True)
class EngineContext:
    """Shared state of one engine instance.

    - account: identity under which the engine holds assets
    - owner: configuration authority
    - executor: the single authorized slice executor
    - paused: quiescence flag (execution disabled, configuration allowed)
    """

    account: str
    owner: str
    executor: str

    assets: AssetLedger
    clock: Clock
    event_bus: EventBus

    # Keyed by lower-cased address.
    venues: Mapping[str, SwapVenue]
    oracles: Mapping[str, PriceOracle]

    store: StrategyStore = field(default_factory=StrategyStore)
    ledger: AccountingLedger = field(default_factory=AccountingLedger)
    status: OrderStatus = OrderStatus.OPEN
    paused: bool = True

    # ---- Roles ----
    def require_owner(self, caller: str) -> None:
        if not same_address(caller, self.owner):
            raise AuthorizationError(RejectReason.UNAUTHORIZED, f"{caller} is not the owner")

    def require_executor(self, caller: str) -> None:
        if not same_address(caller, self.executor):
            raise AuthorizationError(RejectReason.UNAUTHORIZED, f"{caller} is not the executor")

    # ---- Capabilities ----
    def venue_for(self, address: str) -> SwapVenue:
        venue = self.venues.get(address.lower())
        if venue is None:
            raise ConfigurationError(RejectReason.INVALID_ADDRESS, f"no venue registered at {address}")
        return venue

    def oracle_for(self, address: str) -> PriceOracle:
        oracle = self.oracles.get(address.lower())
        if oracle is None:
            raise ConfigurationError(RejectReason.INVALID_ADDRESS, f"no oracle registered at {address}")
        return oracle

    # ---- Notifications ----
    def emit_order_status(self) -> OrderStatusEvent:
        event = OrderStatusEvent(
            filled_amount_in=self.ledger.filled_amount_in,
            received_amount_out=self.ledger.received_amount_out,
            fee=self.ledger.accrued_fee,
            status=self.status,
        )
        self.event_bus.emit(event)
        return event
