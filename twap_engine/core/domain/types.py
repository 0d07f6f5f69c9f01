"""Core shared data models and constants.

This module defines the canonical models used across the engine: the
strategy parameters installed by a configuration event and the outcome
reported by a swap venue. Amounts and prices are exact integers using
18-decimal fixed point; timestamps are integer seconds.

The Pydantic model here validates *shape* only (types, unsigned ranges).
Domain constraints such as "assets must differ" are enforced by the
configuration manager so that every violation maps to a stable reason.
"""

# pylint: disable=missing-class-docstring
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Null identifier. Also designates the native currency for sweeps.
ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"
NATIVE_ASSET: str = ZERO_ADDRESS

PRICE_SCALE: int = 10**18
BPS_DENOMINATOR: int = 10_000

MAX_SLIPPAGE_BPS: int = 1_500
MAX_PRICE_DEVIATION_BPS: int = 2_500

_UINT16_MAX: int = 2**16 - 1


def is_null_address(address: str | None) -> bool:
    """Return True for the null identifier (or a missing one)."""
    return not address or address.lower() == ZERO_ADDRESS


def same_address(a: str | None, b: str | None) -> bool:
    """Case-insensitive identifier equality (hex addresses may be checksummed)."""
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


# ---------------------------------------------------------------------------
# Strategy
# ---------------------------------------------------------------------------


class StrategyParams(BaseModel):
    """Parameters of one time-sliced sell order.

    JSON example:
        {
          "asset_in": "0xA0b8...",
          "asset_out": "0xC02a...",
          "venue": "0x7a25...",
          "oracle": "0x5f4e...",
          "total_amount_in": 10000000000000000000,
          "slice_amount_in": 3000000000000000000,
          "start_time": 1700000000,
          "end_time": 1700003600,
          "max_slippage_bps": 100,
          "max_price_deviation_bps": 250
        }
    """

    asset_in: str
    asset_out: str
    venue: str
    oracle: str

    total_amount_in: int = Field(..., ge=0)
    slice_amount_in: int = Field(..., ge=0)

    start_time: int = Field(..., ge=0)
    end_time: int = Field(..., ge=0)

    max_slippage_bps: int = Field(..., ge=0, le=_UINT16_MAX)
    max_price_deviation_bps: int = Field(..., ge=0, le=_UINT16_MAX)

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> StrategyParams:
        """Create a StrategyParams instance from a JSON-compatible object."""
        return cls.model_validate(obj)


# ---------------------------------------------------------------------------
# Venue outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SwapResult:
    """Outcome reported by a swap venue for a single swap.

    - filled: amount of the input asset actually consumed
    - received: amount of the output asset delivered to the caller
    - fee: venue fee, denominated in the input asset
    """

    filled: int
    received: int
    fee: int = 0
