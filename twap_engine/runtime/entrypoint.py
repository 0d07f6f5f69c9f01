from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from twap_engine.adapters.clock import ManualClock
from twap_engine.adapters.constant_product_venue import ConstantProductVenue
from twap_engine.adapters.in_memory_assets import InMemoryAssetLedger
from twap_engine.adapters.oracles import FixedPriceOracle, PoolPriceOracle
from twap_engine.core.domain.errors import TwapError
from twap_engine.core.events.event_bus import EventBus
from twap_engine.core.events.sinks.file_recorder import FileRecorderSink
from twap_engine.core.events.sinks.sink_logging import LoggingEventSink
from twap_engine.core.ports.price_oracle import PriceOracle
from twap_engine.engine.twap_engine import TwapEngine
from twap_engine.keeper.metrics import KeeperMetrics
from twap_engine.keeper.preflight import build_preflight
from twap_engine.keeper.slice_keeper import KeeperEventSink, SliceKeeper
from twap_engine.runtime.simulation_config import SimulationConfig

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    return json.loads(path.read_text(encoding="utf-8"))


@dataclass
class Simulation:
    """Engine plus the in-process collaborators it was wired with."""

    cfg: SimulationConfig
    engine: TwapEngine
    clock: ManualClock
    assets: InMemoryAssetLedger
    pool: ConstantProductVenue
    event_bus: EventBus


def build_simulation(cfg: SimulationConfig, *, events_path: Path | None = None) -> Simulation:
    """Wire an unconfigured engine against in-process collaborators."""
    strategy = cfg.strategy
    engine_account = cfg.identities.engine

    assets = InMemoryAssetLedger()
    assets.mint(strategy.asset_in, cfg.pool.address, cfg.pool.reserve_in)
    assets.mint(strategy.asset_out, cfg.pool.address, cfg.pool.reserve_out)
    assets.mint(strategy.asset_in, engine_account, cfg.funding)

    pool = ConstantProductVenue(
        assets=assets,
        address=cfg.pool.address,
        asset_a=strategy.asset_in,
        asset_b=strategy.asset_out,
        fee_bps=cfg.pool.fee_bps,
    )

    oracle: PriceOracle
    if cfg.oracle.kind == "fixed":
        fixed = FixedPriceOracle()
        fixed.set_price(strategy.asset_in, strategy.asset_out, cfg.oracle.price or 0)
        oracle = fixed
    else:
        oracle = PoolPriceOracle(pool=pool)

    sinks: list[Any] = [
        LoggingEventSink(logging.getLogger("bus")),
        KeeperEventSink(total_amount_in=strategy.total_amount_in),
    ]
    if events_path is not None:
        sinks.append(FileRecorderSink(events_path))
    event_bus = EventBus(sinks=sinks)

    clock = ManualClock(current=cfg.clock.start)
    engine = TwapEngine(
        account=engine_account,
        owner=cfg.identities.owner,
        executor=cfg.identities.executor,
        assets=assets,
        clock=clock,
        venues={pool.address: pool},
        oracles={cfg.oracle.address: oracle},
        event_bus=event_bus,
    )
    return Simulation(
        cfg=cfg,
        engine=engine,
        clock=clock,
        assets=assets,
        pool=pool,
        event_bus=event_bus,
    )


def run_simulation(sim: Simulation) -> int:
    """Configure, resume and drive the keeper until terminal or out of ticks.

    Returns the number of ticks taken.
    """
    cfg = sim.cfg
    owner = cfg.identities.owner

    sim.engine.configure(cfg.strategy, caller=owner)
    sim.engine.resume(caller=owner)

    keeper = SliceKeeper(sim.engine, cfg.identities.executor, sim.clock)
    ticks = 0
    for ticks in range(1, cfg.clock.max_ticks + 1):
        outcome = keeper.on_tick()
        if outcome.action == "terminal":
            break
        sim.clock.advance(cfg.clock.tick_seconds)
    return ticks


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="TWAP engine simulation (preflight or keeper run)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to simulation JSON config.",
    )

    parser.add_argument(
        "--mode",
        choices=("preflight", "simulate"),
        default="preflight",
        help="preflight: configure and print the schedule; simulate: run the keeper.",
    )

    parser.add_argument(
        "--events",
        type=Path,
        default=None,
        help="Optional JSON-lines file receiving every engine notification.",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level for the run.",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = SimulationConfig.from_json_obj(_load_json(args.config))
    sim = build_simulation(cfg, events_path=args.events)

    try:
        if args.mode == "preflight":
            sim.engine.configure(cfg.strategy, caller=cfg.identities.owner)
            report = build_preflight(sim.engine, sim.clock.now())
            for line in report.lines():
                print(line)
            return 0

        ticks = run_simulation(sim)
    except TwapError as exc:
        print(f"Error: {exc} ({exc.reason})", file=sys.stderr)
        return 1
    finally:
        sim.event_bus.close()

    snapshot = sim.engine.snapshot()

    metrics = KeeperMetrics(order_id=cfg.id)
    metrics.observe(snapshot)
    if metrics.is_enabled():
        try:
            metrics.push(job="twap-keeper")
        except OSError:
            LOGGER.exception("Prometheus push failed")

    print()
    print(f"Order {cfg.id}: status={snapshot.status.name} after {ticks} ticks")
    print(f"- filled: {snapshot.filled_amount_in}/{snapshot.total_amount_in}")
    print(f"- received: {snapshot.received_amount_out}")
    print(f"- fee: {snapshot.accrued_fee}")
    print(f"- slices: {snapshot.slices_done}/{snapshot.total_slices}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
