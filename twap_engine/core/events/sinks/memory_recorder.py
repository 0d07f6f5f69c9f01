"""
In-process append-only recorder sink.
"""
from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")


class MemoryRecorderSink:
    """Keeps every notification in emission order."""

    def __init__(self) -> None:
        self._events: list[Any] = []

    def on_event(self, event: Any) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[Any, ...]:
        return tuple(self._events)

    def of_type(self, event_type: type[T]) -> list[T]:
        """Return the recorded events of the given type, oldest first."""
        return [event for event in self._events if isinstance(event, event_type)]
