"""Exception hierarchy for rejected engine operations.

Every failure aborts the whole operation and carries a stable
``RejectReason`` code. Nothing is retried internally.
"""

from __future__ import annotations


class TwapError(Exception):
    """Base class for all engine rejections."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message if message is not None else reason)


class AuthorizationError(TwapError):
    """Wrong caller for a role-gated operation."""


class ConfigurationError(TwapError):
    """Malformed strategy or identity configuration."""


class ScheduleError(TwapError):
    """Slice id out of range, already done, or not yet eligible."""


class MarketError(TwapError):
    """Oracle or venue outcome outside the configured guards."""


class LifecycleError(TwapError):
    """Operation not allowed in the current order or quiescence state."""
