"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class shared between callers and the
sequence engine. A token is a write-once signal: once cancelled it stays
cancelled. Tokens may carry a deadline, in which case a daemon timer fires
them without further action from the caller.
"""

from __future__ import annotations

import asyncio
import threading
import time
import weakref
from contextlib import suppress
from itertools import count
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..logging import get_logger, log_event
from .cancelled_error import CancelledError
from .state import State

TIMEOUT_REASON = "timeout"

_logger = get_logger("asyncio_demo.cancellation")


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel``/``cancelled``/``register`` from any thread.
    Child tokens inherit cancellation when the parent is cancelled; the parent
    holds them weakly and forgets them once it has cancelled them. Callbacks
    registered with :meth:`register` run exactly once, on the thread that
    cancels the token.
    """

    def __init__(
        self,
        *,
        parent: "CancellationToken | None" = None,
        timeout_seconds: float | None = None,
        sources: Iterable["CancellationToken"] = (),
    ) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: "weakref.WeakSet[CancellationToken]" = weakref.WeakSet()
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._ids = count()
        self._timer: Optional[threading.Timer] = None
        self._sources: Tuple[CancellationToken, ...] = tuple(sources)
        if parent is not None:
            parent.link_child(self)
        if timeout_seconds is not None:
            self.cancel_after(timeout_seconds)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested (or the deadline passed).

        Reading the flag also polls the deadline and any source tokens, so a
        timeout is observed on time even if its timer thread has not run yet.
        """
        if not self._state.cancelled:
            if self._deadline_passed():
                self.cancel(TIMEOUT_REASON)
            else:
                for source in self._sources:
                    if source.cancelled:
                        self.cancel(source.reason)
                        break
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    @property
    def deadline(self) -> float | None:  # noqa: D401 - short form
        """Monotonic deadline of a timeout-bound token, ``None`` otherwise."""
        return self._state.deadline

    def _deadline_passed(self) -> bool:
        deadline = self._state.deadline
        return deadline is not None and time.monotonic() >= deadline

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks, cascade to children.

        Idempotent: only the first call has an effect and its ``reason`` wins.
        Exceptions raised by callbacks are re-raised after every callback and
        child has been notified.
        """
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            self._children.clear()
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        log_event(_logger, "token.cancel", reason=reason, callbacks=len(callbacks), children=len(children))
        errors: List[BaseException] = []
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:  # noqa: BLE001 - re-raised below
                errors.append(exc)
        for child in children:
            child.cancel(reason)
        if errors:
            raise errors[0]

    def cancel_after(self, seconds: float) -> None:
        """Arm (or re-arm) the deadline; ``seconds <= 0`` cancels immediately.

        Has no effect on a token that is already cancelled.
        """
        if seconds <= 0:
            self.cancel(TIMEOUT_REASON)
            return
        timer = threading.Timer(seconds, self.cancel, args=(TIMEOUT_REASON,))
        timer.daemon = True
        with self._lock:
            if self._state.cancelled:
                return
            self._state.deadline = time.monotonic() + seconds
            previous, self._timer = self._timer, timer
        if previous is not None:
            previous.cancel()
        timer.start()

    def close(self) -> None:
        """Disarm a pending deadline without cancelling the token."""
        with self._lock:
            timer, self._timer = self._timer, None
            if not self._state.cancelled:
                self._state.deadline = None
        if timer is not None:
            timer.cancel()

    def register(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run once when the token is cancelled.

        Returns a function that removes the registration. When the token is
        already cancelled the callback runs immediately and the returned
        function is a no-op.
        """
        if not self.cancelled:
            with self._lock:
                if not self._state.cancelled:
                    key = next(self._ids)
                    self._callbacks[key] = callback

                    def _unregister() -> None:
                        with self._lock:
                            self._callbacks.pop(key, None)

                    return _unregister
        callback()
        return lambda: None

    async def wait(self) -> str | None:
        """Suspend until the token is cancelled and return its reason.

        Safe to await from any event loop; the wake-up is marshalled onto the
        waiting loop with ``call_soon_threadsafe``.
        """
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()

        def _resolve() -> None:
            if not waiter.done():
                waiter.set_result(None)

        def _wake() -> None:
            # loop may already be closed when a timer thread fires late
            with suppress(RuntimeError):
                loop.call_soon_threadsafe(_resolve)

        release = self.register(_wake)
        try:
            await waiter
        finally:
            release()
        return self._state.reason

    def detach(self) -> None:
        """Stop following the source tokens this token was linked from."""
        self._sources = ()

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.add(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self.cancelled:
            raise CancelledError(self._state.reason)

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken", "TIMEOUT_REASON"]
