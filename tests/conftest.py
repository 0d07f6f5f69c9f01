"""Shared fixtures for the semantic test suite.

Every engine built here runs against in-process doubles: an in-memory
asset ledger, a scripted venue, a settable oracle and a manual clock.
"""

# pylint: disable=redefined-outer-name,missing-function-docstring
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pytest

from twap_engine.adapters.clock import ManualClock
from twap_engine.adapters.in_memory_assets import InMemoryAssetLedger
from twap_engine.adapters.oracles import FixedPriceOracle
from twap_engine.adapters.scripted_venue import ScriptedSwapVenue
from twap_engine.core.domain.types import PRICE_SCALE, StrategyParams
from twap_engine.core.events.event_bus import EventBus
from twap_engine.core.events.sinks.memory_recorder import MemoryRecorderSink
from twap_engine.engine.twap_engine import TwapEngine

ENGINE = "0x00000000000000000000000000000000000000e1"
OWNER = "0x00000000000000000000000000000000000000a1"
EXECUTOR = "0x00000000000000000000000000000000000000b1"
VENUE = "0x00000000000000000000000000000000000000c1"
ORACLE = "0x00000000000000000000000000000000000000d1"
STRANGER = "0x00000000000000000000000000000000000000f1"

ASSET_IN = "0x0000000000000000000000000000000000000101"
ASSET_OUT = "0x0000000000000000000000000000000000000202"

NOW = 1_700_000_000
START = NOW + 100
END = START + 400


@dataclass
class Harness:
    engine: TwapEngine
    assets: InMemoryAssetLedger
    venue: ScriptedSwapVenue
    oracle: FixedPriceOracle
    clock: ManualClock
    recorder: MemoryRecorderSink

    def set_price(self, price: int) -> None:
        self.oracle.set_price(ASSET_IN, ASSET_OUT, price)

    def start(self, strategy: StrategyParams) -> None:
        """Configure (engine starts paused) and resume."""
        self.engine.configure(strategy, caller=OWNER)
        self.engine.resume(caller=OWNER)


def build_strategy(**overrides: Any) -> StrategyParams:
    params: dict[str, Any] = {
        "asset_in": ASSET_IN,
        "asset_out": ASSET_OUT,
        "venue": VENUE,
        "oracle": ORACLE,
        "total_amount_in": 10 * PRICE_SCALE,
        "slice_amount_in": 3 * PRICE_SCALE,
        "start_time": START,
        "end_time": END,
        "max_slippage_bps": 100,
        "max_price_deviation_bps": 250,
    }
    params.update(overrides)
    return StrategyParams(**params)


@pytest.fixture
def make_strategy() -> Callable[..., StrategyParams]:
    return build_strategy


@pytest.fixture
def harness() -> Harness:
    assets = InMemoryAssetLedger()
    assets.mint(ASSET_IN, ENGINE, 1_000 * PRICE_SCALE)
    assets.mint(ASSET_OUT, VENUE, 1_000_000 * PRICE_SCALE)

    venue = ScriptedSwapVenue(assets=assets, address=VENUE, fill_at_min_out=True)
    oracle = FixedPriceOracle()
    oracle.set_price(ASSET_IN, ASSET_OUT, PRICE_SCALE)
    clock = ManualClock(current=NOW)
    recorder = MemoryRecorderSink()

    engine = TwapEngine(
        account=ENGINE,
        owner=OWNER,
        executor=EXECUTOR,
        assets=assets,
        clock=clock,
        venues={VENUE: venue},
        oracles={ORACLE: oracle},
        event_bus=EventBus(sinks=[recorder]),
    )
    return Harness(
        engine=engine,
        assets=assets,
        venue=venue,
        oracle=oracle,
        clock=clock,
        recorder=recorder,
    )
