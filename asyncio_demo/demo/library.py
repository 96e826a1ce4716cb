"""Host-facing library object.

Purpose
-------
Group the primitives behind one object whose methods a host process (an
embedding runtime, a REPL, the CLI) can call by name: deferred values in
promise and task form, cancellable sequences of ``int`` and ``IntWrapper``,
cancellation tokens, and drains. Each pair of ``*_int``/``*_wrapper`` methods
is the same generic operation instantiated with a different element factory.

External dependencies
---------------------
None beyond the base package. No I/O; only loop timers and a timer thread for
timeout-bound tokens.

Failure modes
-------------
- ``AsyncDemoError(validation)`` for negative counts, delays or timeouts,
  raised by the call itself.
- ``CancelledError`` from iterating or draining a cancelled sequence.
- Promise and task methods require a running event loop (``RuntimeError``
  from asyncio otherwise).
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from ..base.cancellation import CancellationToken, create_cancellation_token
from ..base.deferred import create_promise, create_task
from ..base.models import IntWrapper
from ..base.streaming import CancellableSequence, drain, int_sequence, wrapper_sequence


class AsyncioDemoLibrary:
    """Deferred values, cancellable lazy sequences and drains for a host."""

    # Promise-based futures ---------------------------------------------
    def create_promise_returning_int(self, delay_ms: int) -> "asyncio.Future[int]":
        """Future resolving to ``delay_ms`` after ``delay_ms`` milliseconds."""
        return create_promise(delay_ms, int)

    def create_promise_returning_wrapper(self, delay_ms: int) -> "asyncio.Future[IntWrapper]":
        """Future resolving to ``IntWrapper(delay_ms)`` after the delay."""
        return create_promise(delay_ms, IntWrapper)

    # Task-returning methods --------------------------------------------
    def get_task_returning_int(self, delay_ms: int) -> "asyncio.Task[int]":
        return create_task(delay_ms, int)

    def get_task_returning_wrapper(self, delay_ms: int) -> "asyncio.Task[IntWrapper]":
        return create_task(delay_ms, IntWrapper)

    # Cancellable sequences ---------------------------------------------
    def get_async_enumerable_int(
        self, count: int, delay_ms: int, token: Optional[CancellationToken] = None
    ) -> CancellableSequence[int]:
        """Lazy sequence ``0 .. count - 1`` with ``delay_ms`` between elements."""
        return int_sequence(count, delay_ms, token)

    def get_async_enumerable_wrapper(
        self, count: int, delay_ms: int, token: Optional[CancellationToken] = None
    ) -> CancellableSequence[IntWrapper]:
        """Lazy sequence of ``IntWrapper(0) .. IntWrapper(count - 1)``."""
        return wrapper_sequence(count, delay_ms, token)

    # Utilities -----------------------------------------------------------
    def create_cancellation_token(self, timeout_ms: Optional[int] = None) -> CancellationToken:
        """Manual token, or one that fires ``timeout_ms`` after creation."""
        return create_cancellation_token(timeout_ms)

    async def collect_async_enumerable_int(
        self, source: CancellableSequence[int], token: Optional[CancellationToken] = None
    ) -> List[int]:
        """Drain ``source``; all elements or ``CancelledError``."""
        return await drain(source, token)

    async def collect_async_enumerable_wrapper(
        self, source: CancellableSequence[IntWrapper], token: Optional[CancellationToken] = None
    ) -> List[IntWrapper]:
        return await drain(source, token)


__all__ = ["AsyncioDemoLibrary"]
