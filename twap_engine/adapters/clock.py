"""Clock implementations."""

from __future__ import annotations

import time
from dataclasses import dataclass

from twap_engine.core.ports.clock import Clock


class SystemClock(Clock):
    """Wall-clock time in whole seconds."""

    def now(self) -> int:
        return int(time.time())


@dataclass
class ManualClock(Clock):
    """Clock advanced explicitly by the caller."""

    current: int = 0

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("time cannot move backwards")
        self.current += seconds
        return self.current

    def set(self, timestamp: int) -> None:
        if timestamp < self.current:
            raise ValueError("time cannot move backwards")
        self.current = timestamp
