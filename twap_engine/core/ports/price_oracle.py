"""Price oracle protocol."""

from __future__ import annotations

from typing import Protocol


class PriceOracle(Protocol):
    def get_price(self, asset_in: str, asset_out: str) -> int:
        """Return the price of one unit of ``asset_in`` in ``asset_out``.

        The value is 18-decimal fixed point and positive when valid.
        """
