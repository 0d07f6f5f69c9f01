from __future__ import annotations

from typing import Any

from twap_engine.core.events.event_bus import EventBus


class NullEventBus(EventBus):
    """EventBus that drops every notification.

    Default bus for engines built without observers. Unlike a bus with no
    sinks it also accepts emits after ``close``.
    """

    def __init__(self) -> None:
        super().__init__(sinks=())

    def register(self, sink: Any) -> None:
        return

    def emit(self, event: Any) -> None:
        return
