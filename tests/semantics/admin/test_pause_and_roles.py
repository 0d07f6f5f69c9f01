"""
Semantic test: quiescence flag and role gating.

Invariant:
execute_slice requires a non-paused engine and the executor identity;
configuration and admin operations require the owner. The engine starts
paused with no strategy.
"""

from __future__ import annotations

import pytest
from conftest import EXECUTOR, OWNER, START, STRANGER, VENUE, Harness, build_strategy

from twap_engine.core.domain.errors import AuthorizationError, LifecycleError
from twap_engine.core.domain.reject_reasons import RejectReason


def test_engine_starts_paused_and_unconfigured(harness: Harness) -> None:
    assert harness.engine.paused
    assert harness.engine.strategy is None
    assert harness.engine.total_slices == 0


def test_execute_requires_resume(harness: Harness) -> None:
    harness.engine.configure(build_strategy(), caller=OWNER)
    harness.clock.set(START)

    with pytest.raises(LifecycleError) as exc_info:
        harness.engine.execute_slice(0, caller=EXECUTOR)
    assert exc_info.value.reason == RejectReason.PAUSED

    harness.engine.resume(caller=OWNER)
    harness.engine.execute_slice(0, caller=EXECUTOR)

    harness.engine.pause(caller=OWNER)
    with pytest.raises(LifecycleError):
        harness.engine.execute_slice(1, caller=EXECUTOR)


def test_execute_without_strategy_is_rejected(harness: Harness) -> None:
    harness.engine.resume(caller=OWNER)

    with pytest.raises(LifecycleError) as exc_info:
        harness.engine.execute_slice(0, caller=EXECUTOR)

    assert exc_info.value.reason == RejectReason.NOT_CONFIGURED


@pytest.mark.parametrize("caller", [OWNER, STRANGER, VENUE])
def test_only_executor_may_execute(harness: Harness, caller: str) -> None:
    harness.start(build_strategy())
    harness.clock.set(START)

    with pytest.raises(AuthorizationError):
        harness.engine.execute_slice(0, caller=caller)

    assert not harness.engine.slice_done(0)


@pytest.mark.parametrize("caller", [EXECUTOR, STRANGER])
def test_admin_operations_require_owner(harness: Harness, caller: str) -> None:
    harness.engine.configure(build_strategy(), caller=OWNER)

    with pytest.raises(AuthorizationError):
        harness.engine.resume(caller=caller)
    with pytest.raises(AuthorizationError):
        harness.engine.cancel(caller=caller)
    with pytest.raises(AuthorizationError):
        harness.engine.sweep(STRANGER, STRANGER, caller=caller)
    with pytest.raises(AuthorizationError):
        harness.engine.set_executor(STRANGER, caller=caller)

    harness.engine.resume(caller=OWNER)
    with pytest.raises(AuthorizationError):
        harness.engine.pause(caller=caller)


def test_redundant_pause_and_resume_are_rejected(harness: Harness) -> None:
    with pytest.raises(LifecycleError) as exc_info:
        harness.engine.pause(caller=OWNER)
    assert exc_info.value.reason == RejectReason.ALREADY_PAUSED

    harness.engine.resume(caller=OWNER)
    with pytest.raises(LifecycleError) as exc_info:
        harness.engine.resume(caller=OWNER)
    assert exc_info.value.reason == RejectReason.NOT_PAUSED
