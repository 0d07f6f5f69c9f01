"""
Event sink interface.

Sinks consume notifications emitted by the engine (fills, order status).
"""
from __future__ import annotations

from typing import Any, Protocol


class EventSink(Protocol):
    def on_event(self, event: Any) -> None:
        """Consume an engine notification."""
