"""Fill accounting for the active strategy.

The ledger holds cumulative totals and per-slice completion flags. It is
mutated only by the execution engine (fills) and the configuration
manager (reset). Totals are monotonically non-decreasing between resets.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class LedgerSnapshot:
    filled_amount_in: int
    received_amount_out: int
    accrued_fee: int
    slices_done: int


class AccountingLedger:
    """Cumulative fill totals plus a slice-completion bitmap.

    Slice completion is stored as the bits of a single integer, so the
    reset on reconfiguration does not depend on the previous slice count.
    """

    def __init__(self) -> None:
        self.filled_amount_in: int = 0
        self.received_amount_out: int = 0
        self.accrued_fee: int = 0
        self._done_bits: int = 0

    # ---- Slice flags ----
    def is_done(self, slice_id: int) -> bool:
        if slice_id < 0:
            return False
        return bool((self._done_bits >> slice_id) & 1)

    def mark_done(self, slice_id: int) -> None:
        """Set the completion flag for a slice. A flag is set exactly once."""
        if slice_id < 0:
            raise ValueError(f"slice_id must be non-negative, got {slice_id}")
        if self.is_done(slice_id):
            raise ValueError(f"slice {slice_id} already marked done")
        self._done_bits |= 1 << slice_id

    @property
    def slices_done(self) -> int:
        return self._done_bits.bit_count()

    # ---- Totals ----
    def record_fill(self, *, filled: int, received: int, fee: int) -> None:
        if filled < 0 or received < 0 or fee < 0:
            raise ValueError("fill deltas must be non-negative")
        self.filled_amount_in += filled
        self.received_amount_out += received
        self.accrued_fee += fee

    def reset(self) -> None:
        """Zero all totals and clear every slice flag."""
        self.filled_amount_in = 0
        self.received_amount_out = 0
        self.accrued_fee = 0
        self._done_bits = 0

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            filled_amount_in=self.filled_amount_in,
            received_amount_out=self.received_amount_out,
            accrued_fee=self.accrued_fee,
            slices_done=self.slices_done,
        )
