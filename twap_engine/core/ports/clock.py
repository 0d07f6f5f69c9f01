from __future__ import annotations

from typing import Protocol


class Clock(Protocol):
    """Source of the current timestamp (integer seconds)."""

    def now(self) -> int:
        """Return the current time."""
