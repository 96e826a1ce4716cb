"""Cancellable delay wait used between sequence elements."""
from __future__ import annotations

import asyncio
import threading
import time

import pytest

from asyncio_demo.base.cancellation import CancellationToken, CancelledError, wait_for_delay


@pytest.mark.asyncio
async def test_delay_elapses_without_cancellation():
    token = CancellationToken()
    started = time.perf_counter()
    await wait_for_delay(0.03, token)
    assert time.perf_counter() - started >= 0.03
    assert token._callbacks == {}


@pytest.mark.asyncio
async def test_zero_delay_returns_immediately():
    token = CancellationToken()
    await wait_for_delay(0.0, token)
    assert token.cancelled is False


@pytest.mark.asyncio
async def test_delay_without_token():
    started = time.perf_counter()
    await wait_for_delay(0.01)
    assert time.perf_counter() - started >= 0.01


@pytest.mark.asyncio
async def test_pre_cancelled_token_raises_before_waiting():
    token = CancellationToken()
    token.cancel("early")
    started = time.perf_counter()
    with pytest.raises(CancelledError) as info:
        await wait_for_delay(5.0, token)
    assert info.value.reason == "early"
    assert time.perf_counter() - started < 1.0


@pytest.mark.asyncio
async def test_cancel_from_another_thread_ends_wait_early():
    token = CancellationToken()
    threading.Timer(0.02, token.cancel, args=("remote",)).start()
    started = time.perf_counter()
    with pytest.raises(CancelledError) as info:
        await asyncio.wait_for(wait_for_delay(5.0, token), timeout=2.0)
    assert info.value.reason == "remote"
    assert time.perf_counter() - started < 1.0
    assert token._callbacks == {}
