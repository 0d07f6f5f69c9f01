"""
Semantic test: asset recovery and executor rotation.

Invariant:
sweep moves the engine's whole balance of one asset (native currency for
the null asset) to a non-null recipient in any order status.
set_executor never accepts the null identity or the configured venue.
"""

from __future__ import annotations

import pytest
from conftest import ASSET_IN, ASSET_OUT, ENGINE, EXECUTOR, OWNER, START, STRANGER, VENUE, Harness, build_strategy

from twap_engine.core.domain.errors import AuthorizationError, ConfigurationError
from twap_engine.core.domain.reject_reasons import RejectReason
from twap_engine.core.domain.types import NATIVE_ASSET, PRICE_SCALE, ZERO_ADDRESS


def test_sweep_moves_entire_balance(harness: Harness) -> None:
    moved = harness.engine.sweep(ASSET_IN, STRANGER, caller=OWNER)

    assert moved == 1_000 * PRICE_SCALE
    assert harness.assets.balance_of(ASSET_IN, ENGINE) == 0
    assert harness.assets.balance_of(ASSET_IN, STRANGER) == 1_000 * PRICE_SCALE


def test_sweep_native_currency(harness: Harness) -> None:
    harness.assets.mint(NATIVE_ASSET, ENGINE, 5)

    assert harness.engine.sweep(ZERO_ADDRESS, OWNER, caller=OWNER) == 5
    assert harness.assets.balance_of(NATIVE_ASSET, OWNER) == 5


def test_sweep_empty_balance_is_a_noop(harness: Harness) -> None:
    assert harness.engine.sweep(ASSET_OUT, STRANGER, caller=OWNER) == 0


def test_sweep_works_in_any_status(harness: Harness) -> None:
    harness.start(build_strategy())
    harness.clock.set(START)
    harness.engine.execute_slice(0, caller=EXECUTOR)
    harness.engine.cancel(caller=OWNER)

    received = harness.engine.received_amount_out
    assert harness.engine.sweep(ASSET_OUT, OWNER, caller=OWNER) == received


def test_sweep_to_null_is_rejected(harness: Harness) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        harness.engine.sweep(ASSET_IN, ZERO_ADDRESS, caller=OWNER)

    assert exc_info.value.reason == RejectReason.INVALID_RECIPIENT
    assert harness.assets.balance_of(ASSET_IN, ENGINE) == 1_000 * PRICE_SCALE


def test_set_executor_rotates_authority(harness: Harness) -> None:
    harness.start(build_strategy())
    harness.clock.set(START)

    harness.engine.set_executor(STRANGER, caller=OWNER)

    assert harness.engine.executor == STRANGER
    with pytest.raises(AuthorizationError):
        harness.engine.execute_slice(0, caller=EXECUTOR)
    harness.engine.execute_slice(0, caller=STRANGER)


def test_set_executor_rejects_null(harness: Harness) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        harness.engine.set_executor(ZERO_ADDRESS, caller=OWNER)

    assert exc_info.value.reason == RejectReason.INVALID_ADDRESS
    assert harness.engine.executor == EXECUTOR


def test_set_executor_rejects_venue(harness: Harness) -> None:
    harness.engine.configure(build_strategy(), caller=OWNER)

    with pytest.raises(ConfigurationError) as exc_info:
        harness.engine.set_executor(VENUE, caller=OWNER)

    assert exc_info.value.reason == RejectReason.VENUE_IS_EXECUTOR
    assert harness.engine.executor == EXECUTOR
