"""Swap venue protocol.

The venue is an external, untrusted capability. The engine validates the
reported result before committing anything, so implementations cannot
force an inconsistent ledger state by misreporting.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from twap_engine.core.domain.types import SwapResult


class VenueError(Exception):
    """Raised by a venue that refuses a swap."""


class SwapVenue(Protocol):
    """Venue-facing execution boundary."""

    def swap(
        self,
        asset_in: str,
        asset_out: str,
        amount_in: int,
        min_out: int,
        *,
        account: str,
    ) -> SwapResult:
        """Swap up to ``amount_in`` of ``asset_in`` held by ``account``.

        The venue pulls the input through the allowance granted by
        ``account`` and delivers the output to ``account``. It must not
        report ``received < min_out``.
        """
