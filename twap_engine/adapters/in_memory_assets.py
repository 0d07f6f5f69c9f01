"""In-memory asset ledger with all-or-nothing transactions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from twap_engine.core.ports.asset_ledger import AssetLedger, AssetLedgerError

LOGGER = logging.getLogger(__name__)


def _key(*identifiers: str) -> tuple[str, ...]:
    # Identifiers are case-insensitive (checksummed hex addresses).
    return tuple(identifier.lower() for identifier in identifiers)


class InMemoryAssetLedger(AssetLedger):
    """Balances and allowances held in dictionaries.

    ``transaction()`` snapshots both mappings and restores them if an
    exception escapes the block, which gives callers the whole-operation
    atomicity a chain transaction would provide. Transactions nest.
    """

    def __init__(self) -> None:
        self._balances: dict[tuple[str, ...], int] = {}
        self._allowances: dict[tuple[str, ...], int] = {}

    # ---- Setup ----
    def mint(self, asset: str, account: str, amount: int) -> None:
        """Credit ``amount`` of ``asset`` to ``account`` out of thin air."""
        if amount < 0:
            raise AssetLedgerError(f"cannot mint a negative amount: {amount}")
        key = _key(asset, account)
        self._balances[key] = self._balances.get(key, 0) + amount

    # ---- Queries ----
    def balance_of(self, asset: str, account: str) -> int:
        return self._balances.get(_key(asset, account), 0)

    def allowance(self, asset: str, owner: str, spender: str) -> int:
        return self._allowances.get(_key(asset, owner, spender), 0)

    # ---- Mutations ----
    def transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise AssetLedgerError(f"cannot transfer a negative amount: {amount}")
        balance = self.balance_of(asset, sender)
        if balance < amount:
            raise AssetLedgerError(
                f"insufficient {asset} balance for {sender}: {balance} < {amount}"
            )
        self._balances[_key(asset, sender)] = balance - amount
        self._balances[_key(asset, recipient)] = self.balance_of(asset, recipient) + amount

    def approve(self, asset: str, owner: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise AssetLedgerError(f"cannot approve a negative amount: {amount}")
        self._allowances[_key(asset, owner, spender)] = amount

    def transfer_from(
        self,
        asset: str,
        spender: str,
        owner: str,
        recipient: str,
        amount: int,
    ) -> None:
        allowed = self.allowance(asset, owner, spender)
        if allowed < amount:
            raise AssetLedgerError(
                f"insufficient {asset} allowance for {spender} over {owner}: {allowed} < {amount}"
            )
        self.transfer(asset, owner, recipient, amount)
        self._allowances[_key(asset, owner, spender)] = allowed - amount

    @contextmanager
    def transaction(self) -> Iterator[None]:
        balances = dict(self._balances)
        allowances = dict(self._allowances)
        try:
            yield
        except BaseException:
            self._balances = balances
            self._allowances = allowances
            LOGGER.debug("asset ledger transaction rolled back")
            raise
