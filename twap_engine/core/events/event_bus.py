"""
Simple synchronous event bus.

Notifications are dispatched in emission order to every registered sink
before ``emit`` returns. The engine emits only after its state change is
complete, so a failing sink propagates to the caller without leaving a
half-applied operation behind.
"""
from __future__ import annotations

from typing import Any, Iterable

from twap_engine.core.events.event_sink import EventSink


class EventBus:
    """Dispatches engine notifications to registered sinks."""

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def register(self, sink: EventSink) -> None:
        """Register a new sink. Sinks registered late miss earlier events."""
        self._sinks.append(sink)

    def emit(self, event: Any) -> None:
        """Emit an event to all sinks, in registration order."""
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """
        Finalize all sinks that expose a close() method.
        """
        if self._closed:
            return

        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()

        self._closed = True
