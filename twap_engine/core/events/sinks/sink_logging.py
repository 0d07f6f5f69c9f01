"""
Logging event sink.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from typing import Any


class LoggingEventSink:
    """Logs each engine notification with its fields as structured extras."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def on_event(self, event: Any) -> None:
        fields = asdict(event) if is_dataclass(event) and not isinstance(event, type) else {}
        self._logger.info(
            "engine_event %s %s",
            type(event).__name__,
            " ".join(f"{key}={value}" for key, value in fields.items()),
            extra={"event": event},
        )
