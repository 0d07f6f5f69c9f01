"""
Semantic test: keeper metrics.

Invariant:
Gauges mirror the engine snapshot; pushing is a no-op without a gateway.
"""

from __future__ import annotations

import pytest
from conftest import EXECUTOR, START, Harness, build_strategy

from twap_engine.keeper.metrics import KeeperMetrics


def test_metrics_mirror_snapshot(harness: Harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROMETHEUS_PUSHGATEWAY_URL", raising=False)
    harness.start(build_strategy(total_amount_in=10, slice_amount_in=3, max_slippage_bps=0))
    harness.clock.set(START)
    harness.engine.execute_slice(0, caller=EXECUTOR)

    metrics = KeeperMetrics(order_id="order-1")
    metrics.observe(harness.engine.snapshot())
    metrics.push(job="test")

    registry = metrics.registry
    labels = {"order_id": "order-1"}
    assert not metrics.is_enabled()
    assert registry.get_sample_value("twap_filled_amount_in", labels) == 3.0
    assert registry.get_sample_value("twap_slices_done", labels) == 1.0
    assert registry.get_sample_value("twap_order_status", labels) == 1.0


def test_invalid_grouping_key_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON", "{not json")
    metrics = KeeperMetrics(order_id="order-1")
    assert metrics._grouping_key == {}  # pylint: disable=protected-access
