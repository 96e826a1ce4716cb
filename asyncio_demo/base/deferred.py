"""Deferred value producers.

Three shapes of the same contract: after at least ``delay_ms`` milliseconds
the result is ``factory(delay_ms)`` (the raw delay or an ``IntWrapper`` of
it). None of them takes a cancellation token; the only way to interrupt one
is to cancel the awaiting task or future through asyncio itself.

- ``deferred_value``: plain coroutine.
- ``create_promise``: an ``asyncio.Future`` completed by a loop timer, with no
  coroutine running in between (completion-source style).
- ``create_task``: the coroutine scheduled as an ``asyncio.Task``.

A negative or non-integer delay is rejected before any timer is scheduled.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, TypeVar

from .dto import DeferredRequest, parse_request
from .logging import LogContext, get_logger, normalized_log_event

T = TypeVar("T")

_logger = get_logger("asyncio_demo.deferred")


def _log_resolved(mode: str, factory: Callable[[int], object], request: DeferredRequest, started: float) -> None:
    ctx = LogContext(operation="deferred", element_type=getattr(factory, "__name__", None), extra={"mode": mode})
    normalized_log_event(
        _logger,
        "deferred.resolve",
        ctx,
        phase="complete",
        emitted=1,
        elapsed_ms=(time.perf_counter() - started) * 1000.0,
        delay_ms=request.delay_ms,
    )


async def _resolve_after(request: DeferredRequest, factory: Callable[[int], T], mode: str) -> T:
    started = time.perf_counter()
    await asyncio.sleep(request.delay_seconds)
    result = factory(request.delay_ms)
    _log_resolved(mode, factory, request, started)
    return result


async def deferred_value(delay_ms: int, factory: Callable[[int], T] = int) -> T:  # type: ignore[assignment]
    """Wait ``delay_ms`` then return ``factory(delay_ms)``."""
    request = parse_request(DeferredRequest, "deferred", delay_ms=delay_ms)
    return await _resolve_after(request, factory, "coroutine")


def create_promise(delay_ms: int, factory: Callable[[int], T] = int) -> "asyncio.Future[T]":  # type: ignore[assignment]
    """Return a future the running loop resolves to ``factory(delay_ms)``.

    Must be called with a running event loop. Cancelling the future also
    cancels its timer.
    """
    request = parse_request(DeferredRequest, "deferred", delay_ms=delay_ms)
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()
    started = time.perf_counter()

    def _complete() -> None:
        if future.done():
            return
        try:
            result = factory(request.delay_ms)
        except Exception as exc:  # noqa: BLE001 - surfaced through the future
            future.set_exception(exc)
            return
        future.set_result(result)
        _log_resolved("promise", factory, request, started)

    handle = loop.call_later(request.delay_seconds, _complete)
    future.add_done_callback(lambda _f: handle.cancel())
    return future


def create_task(delay_ms: int, factory: Callable[[int], T] = int) -> "asyncio.Task[T]":  # type: ignore[assignment]
    """Schedule ``deferred_value`` on the running loop and return the task.

    The delay is validated eagerly so a bad argument raises here rather than
    from inside the task.
    """
    request = parse_request(DeferredRequest, "deferred", delay_ms=delay_ms)
    return asyncio.get_running_loop().create_task(_resolve_after(request, factory, "task"))


__all__ = ["deferred_value", "create_promise", "create_task"]
