"""Public API for the twap_engine package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Adapters (in-process collaborators)
# ----------------------------------------------------------------------
from twap_engine.adapters.clock import ManualClock, SystemClock
from twap_engine.adapters.constant_product_venue import ConstantProductVenue
from twap_engine.adapters.in_memory_assets import InMemoryAssetLedger
from twap_engine.adapters.oracles import FixedPriceOracle, PoolPriceOracle
from twap_engine.adapters.scripted_venue import ScriptedSwapVenue

# ----------------------------------------------------------------------
# Domain types
# ----------------------------------------------------------------------
from twap_engine.core.domain.errors import (
    AuthorizationError,
    ConfigurationError,
    LifecycleError,
    MarketError,
    ScheduleError,
    TwapError,
)
from twap_engine.core.domain.order_state_machine import OrderStatus
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import (
    NATIVE_ASSET,
    PRICE_SCALE,
    ZERO_ADDRESS,
    StrategyParams,
    SwapResult,
)

# ----------------------------------------------------------------------
# Notifications
# ----------------------------------------------------------------------
from twap_engine.core.events.event_bus import EventBus
from twap_engine.core.events.events import FillEvent, OrderStatusEvent

# ----------------------------------------------------------------------
# Ports
# ----------------------------------------------------------------------
from twap_engine.core.ports.asset_ledger import AssetLedger, AssetLedgerError
from twap_engine.core.ports.clock import Clock
from twap_engine.core.ports.price_oracle import PriceOracle
from twap_engine.core.ports.swap_venue import SwapVenue, VenueError

# ----------------------------------------------------------------------
# Engine + keeper
# ----------------------------------------------------------------------
from twap_engine.engine.twap_engine import EngineSnapshot, TwapEngine
from twap_engine.keeper.preflight import PreflightReport, build_preflight
from twap_engine.keeper.slice_keeper import KeeperEventSink, SliceKeeper, TickOutcome

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Engine
    "TwapEngine",
    "EngineSnapshot",

    # Domain
    "StrategyParams",
    "SwapResult",
    "OrderStatus",
    "RejectReason",
    "ZERO_ADDRESS",
    "NATIVE_ASSET",
    "PRICE_SCALE",

    # Errors
    "TwapError",
    "AuthorizationError",
    "ConfigurationError",
    "ScheduleError",
    "MarketError",
    "LifecycleError",

    # Notifications
    "EventBus",
    "FillEvent",
    "OrderStatusEvent",

    # Ports
    "SwapVenue",
    "PriceOracle",
    "AssetLedger",
    "AssetLedgerError",
    "Clock",

    # Adapters
    "InMemoryAssetLedger",
    "ConstantProductVenue",
    "VenueError",
    "ScriptedSwapVenue",
    "FixedPriceOracle",
    "PoolPriceOracle",
    "ManualClock",
    "SystemClock",

    # Keeper
    "SliceKeeper",
    "KeeperEventSink",
    "TickOutcome",
    "PreflightReport",
    "build_preflight",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("twap-engine")
except PackageNotFoundError:
    __version__ = "0.0.0"
