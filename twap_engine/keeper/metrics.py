from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Gauge, push_to_gateway

if TYPE_CHECKING:
    from twap_engine.engine.twap_engine import EngineSnapshot

LOGGER = logging.getLogger(__name__)


class KeeperMetrics:
    """Prometheus Pushgateway gauges for a keeper run.

    Expected environment:
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object used as grouping key.

    Delivery is best-effort: callers should treat pushing as a side effect
    and never fail a keeper run because of it.
    """

    def __init__(self, *, order_id: str) -> None:
        self._pushgateway_url = os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._registry = CollectorRegistry()
        self._order_id = order_id

        labels = ["order_id"]
        self._filled = Gauge(
            "twap_filled_amount_in",
            "Cumulative input amount filled",
            labelnames=labels,
            registry=self._registry,
        )
        self._received = Gauge(
            "twap_received_amount_out",
            "Cumulative output amount received",
            labelnames=labels,
            registry=self._registry,
        )
        self._fee = Gauge(
            "twap_accrued_fee",
            "Cumulative venue fee",
            labelnames=labels,
            registry=self._registry,
        )
        self._slices_done = Gauge(
            "twap_slices_done",
            "Number of executed slices",
            labelnames=labels,
            registry=self._registry,
        )
        self._status = Gauge(
            "twap_order_status",
            "Order status code (0=open, 1=partial, 2=filled, 3=cancelled)",
            labelnames=labels,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def is_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        grouping: dict[str, str] = {}
        for key, value in data.items():
            if isinstance(key, str) and isinstance(value, str):
                grouping[key] = value
        return grouping

    def observe(self, snapshot: EngineSnapshot) -> None:
        """Record the engine snapshot into the gauges (always, even if disabled)."""
        # Gauges hold floats; 18-decimal amounts lose precision here, which is fine for dashboards.
        self._filled.labels(order_id=self._order_id).set(float(snapshot.filled_amount_in))
        self._received.labels(order_id=self._order_id).set(float(snapshot.received_amount_out))
        self._fee.labels(order_id=self._order_id).set(float(snapshot.accrued_fee))
        self._slices_done.labels(order_id=self._order_id).set(snapshot.slices_done)
        self._status.labels(order_id=self._order_id).set(int(snapshot.status))

    def push(self, *, job: str) -> None:
        if not self._pushgateway_url:
            return

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=job,
            registry=self._registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": job, "grouping_key": self._grouping_key},
        )
