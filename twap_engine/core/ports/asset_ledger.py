"""Asset custody protocol.

Balances and allowances of fungible assets keyed by account. The engine
uses it to grant the venue a bounded allowance and to sweep balances.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol


class AssetLedgerError(Exception):
    """Raised by asset ledgers for insufficient balance or allowance."""


class AssetLedger(Protocol):
    def balance_of(self, asset: str, account: str) -> int:
        """Return the balance of ``asset`` held by ``account``."""

    def transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        """Move ``amount`` of ``asset`` from ``sender`` to ``recipient``."""

    def approve(self, asset: str, owner: str, spender: str, amount: int) -> None:
        """Set the allowance of ``spender`` over ``owner``'s ``asset``."""

    def allowance(self, asset: str, owner: str, spender: str) -> int:
        """Return the remaining allowance of ``spender`` over ``owner``'s ``asset``."""

    def transfer_from(
        self,
        asset: str,
        spender: str,
        owner: str,
        recipient: str,
        amount: int,
    ) -> None:
        """Move ``amount`` from ``owner`` to ``recipient`` consuming ``spender``'s allowance."""

    def transaction(self) -> AbstractContextManager[None]:
        """Return a context in which all changes are discarded if an exception escapes."""
