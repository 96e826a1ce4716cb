"""Unit tests for cancellation tokens.

Covers idempotent cancel, cascade to children, callback registration,
timeout-bound tokens, linked tokens and the async ``wait``.
"""
from __future__ import annotations

import asyncio
import gc
import threading
import time

import pytest

from asyncio_demo.base.cancellation import (
    TIMEOUT_REASON,
    CancellationToken,
    CancelledError,
    create_cancellation_token,
    linked_token,
)
from asyncio_demo.base.errors import AsyncDemoError, ErrorCode


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"
    assert child1.cancelled is True and child1.reason == "stop"
    assert child2.cancelled is True and child2.reason == "stop"


def test_parent_does_not_keep_children_alive():
    parent = CancellationToken()
    child = parent.child()
    assert len(parent._children) == 1
    del child
    gc.collect()
    assert len(parent._children) == 0


def test_parent_forgets_children_once_cancelled():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("stop")
    assert child.cancelled is True
    assert len(parent._children) == 0


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"


def test_raise_if_cancelled_carries_reason():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError) as info:
        token.raise_if_cancelled()
    assert info.value.reason == "terminate"
    assert not isinstance(info.value, asyncio.CancelledError)


def test_register_runs_once_and_unregister_prevents_call():
    token = CancellationToken()
    calls = []
    token.register(lambda: calls.append("a"))
    unregister = token.register(lambda: calls.append("b"))
    unregister()

    token.cancel()
    token.cancel()

    assert calls == ["a"]


def test_register_on_cancelled_token_runs_immediately():
    token = CancellationToken()
    token.cancel()
    calls = []
    release = token.register(lambda: calls.append(1))
    release()
    assert calls == [1]


def test_callback_error_is_raised_after_all_callbacks_ran():
    token = CancellationToken()
    calls = []

    def _boom():
        raise ValueError("callback failed")

    token.register(_boom)
    token.register(lambda: calls.append("after"))
    with pytest.raises(ValueError):
        token.cancel()
    assert calls == ["after"]
    assert token.cancelled is True


def test_concurrent_cancel_from_many_threads_is_safe():
    token = CancellationToken()
    calls = []
    token.register(lambda: calls.append(1))
    threads = [threading.Thread(target=token.cancel, args=(f"t{i}",)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert token.cancelled is True
    assert calls == [1]


def test_manual_token_never_fires_on_its_own():
    token = create_cancellation_token()
    time.sleep(0.05)
    assert token.cancelled is False
    assert token.deadline is None


def test_zero_timeout_fires_during_construction():
    token = create_cancellation_token(0)
    assert token.cancelled is True
    assert token.reason == TIMEOUT_REASON


@pytest.mark.parametrize("bad", [-1, 1.5, "10", True])
def test_invalid_timeout_is_rejected(bad):
    with pytest.raises(AsyncDemoError) as info:
        create_cancellation_token(bad)
    assert info.value.code is ErrorCode.VALIDATION


def test_deadline_is_observed_without_waiting_for_timer(monkeypatch):
    token = CancellationToken(timeout_seconds=60)
    real = time.monotonic
    monkeypatch.setattr(time, "monotonic", lambda: real() + 120)
    assert token.cancelled is True
    assert token.reason == TIMEOUT_REASON


def test_close_disarms_pending_timeout():
    token = create_cancellation_token(30)
    token.close()
    time.sleep(0.08)
    assert token.cancelled is False


def test_linked_token_fires_when_any_source_fires():
    a, b = CancellationToken(), CancellationToken()
    linked, release = linked_token(a, None, b)
    b.cancel("from b")
    assert linked.cancelled is True and linked.reason == "from b"
    assert a.cancelled is False
    release()
    release()


def test_released_linked_token_stops_following_sources():
    source = CancellationToken()
    linked, release = linked_token(source)
    release()
    source.cancel()
    assert linked.cancelled is False


def test_linked_token_polls_source_deadline(monkeypatch):
    source = CancellationToken(timeout_seconds=60)
    linked, _release = linked_token(source)
    real = time.monotonic
    monkeypatch.setattr(time, "monotonic", lambda: real() + 120)
    assert linked.cancelled is True
    assert linked.reason == TIMEOUT_REASON


@pytest.mark.asyncio
async def test_timeout_token_fires_after_timeout():
    started = time.perf_counter()
    token = create_cancellation_token(50)
    reason = await asyncio.wait_for(token.wait(), timeout=2.0)
    elapsed = time.perf_counter() - started
    assert reason == TIMEOUT_REASON
    assert 0.045 <= elapsed < 1.0


@pytest.mark.asyncio
async def test_wait_wakes_when_cancelled_from_another_thread():
    token = CancellationToken()
    threading.Timer(0.02, token.cancel, args=("remote",)).start()
    assert await asyncio.wait_for(token.wait(), timeout=2.0) == "remote"


@pytest.mark.asyncio
async def test_wait_on_cancelled_token_returns_immediately():
    token = CancellationToken()
    token.cancel("early")
    assert await asyncio.wait_for(token.wait(), timeout=0.5) == "early"
