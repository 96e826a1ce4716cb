"""Cancellable lazy sequence engine.

``CancellableSequence`` is a pull-driven async iterator producing
``factory(0) .. factory(count - 1)`` with a cancellable pause before every
element except the first. Each pull runs check, then wait, then produce;
nothing is computed ahead of the consumer asking for it.

The sequence never owns the caller's tokens. It links them (plus any token
added later through ``with_cancellation`` and an internal close token) into a
private combined token for the duration of the iteration and releases the
links as soon as the sequence reaches a terminal state.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import Callable, Generic, List, Optional, TypeVar

from ..cancellation import CancellationToken, CancelledError, linked_token, wait_for_delay
from ..dto import SequenceRequest, parse_request
from ..errors import AsyncDemoError, ErrorCode, classify_exception
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import IntWrapper
from .sequence_state import SequenceState

T = TypeVar("T")

CLOSED_REASON = "closed"
TASK_CANCELLED_REASON = "task cancelled"

_logger = get_logger("asyncio_demo.sequence")


class CancellableSequence(Generic[T]):
    """Finite, lazy, non-restartable async sequence of ``count`` elements.

    Parameters
    ----------
    count: int
        Number of elements, ``>= 0``.
    delay_ms: int
        Pause before each element after the first, ``>= 0``.
    token: CancellationToken | None
        Optional caller-owned token observed before every element and during
        every pause.
    factory: Callable[[int], T]
        Builds the element for an index (``int`` or ``IntWrapper``).

    Raises
    ------
    AsyncDemoError
        ``validation`` for a negative or non-integer ``count``/``delay_ms``;
        raised here, before any suspension.
    """

    def __init__(
        self,
        count: int,
        delay_ms: int,
        token: Optional[CancellationToken] = None,
        *,
        factory: Callable[[int], T],
    ) -> None:
        self._request = parse_request(SequenceRequest, "sequence", count=count, delay_ms=delay_ms)
        self._factory = factory
        self._tokens: List[CancellationToken] = [token] if token is not None else []
        self._close_token = CancellationToken()
        self._active: Optional[CancellationToken] = None
        self._release: Callable[[], None] = lambda: None
        self._state = SequenceState.IDLE
        self._index = 0
        self._iterated = False
        self._started_at: Optional[float] = None
        self._sequence_id = uuid.uuid4().hex[:12]
        self._ctx = LogContext(
            operation="sequence",
            sequence_id=self._sequence_id,
            element_type=getattr(factory, "__name__", type(factory).__name__),
        )

    # Introspection --------------------------------------------------------
    @property
    def request(self) -> SequenceRequest:
        return self._request

    @property
    def state(self) -> SequenceState:
        return self._state

    @property
    def produced(self) -> int:
        """Number of elements handed to the consumer so far."""
        return self._index

    @property
    def sequence_id(self) -> str:
        return self._sequence_id

    @property
    def element_type(self) -> str | None:
        return self._ctx.element_type

    # Configuration -------------------------------------------------------
    def with_cancellation(self, token: Optional[CancellationToken]) -> "CancellableSequence[T]":
        """Also honour ``token``; either it or the construction token cancels.

        Only allowed before iteration starts (``None`` just asserts that).
        Returns the sequence itself.
        """
        if self._iterated or self._state is not SequenceState.IDLE:
            raise AsyncDemoError(
                code=ErrorCode.INVALID_STATE,
                message="cannot add a cancellation token to a sequence that has started",
                operation="sequence",
            )
        if token is not None:
            self._tokens.append(token)
        return self

    # Async iterator protocol --------------------------------------------
    def __aiter__(self) -> "CancellableSequence[T]":
        if self._iterated:
            raise AsyncDemoError(
                code=ErrorCode.INVALID_STATE,
                message=f"sequence {self._sequence_id} is not restartable",
                operation="sequence",
            )
        self._iterated = True
        return self

    async def __anext__(self) -> T:
        if self._state.terminal:
            raise StopAsyncIteration
        if self._state is SequenceState.IDLE:
            self._start()
        index = self._index
        if index >= self._request.count:
            self._finish(SequenceState.COMPLETED)
            raise StopAsyncIteration

        try:
            self._active.raise_if_cancelled()
            if index > 0:
                self._state = SequenceState.AWAITING_DELAY
                await wait_for_delay(self._request.delay_seconds, self._active)
            value = self._factory(index)
        except CancelledError as exc:
            self._finish(SequenceState.CANCELLED, reason=exc.reason)
            raise
        except asyncio.CancelledError:
            self._finish(SequenceState.CANCELLED, reason=TASK_CANCELLED_REASON)
            raise
        except Exception as exc:
            self._finish(SequenceState.FAULTED, error=exc)
            raise

        self._index = index + 1
        self._state = SequenceState.YIELDING
        log_event(_logger, "sequence.element", self._ctx, level=logging.DEBUG, index=index)
        if self._index == self._request.count:
            self._finish(SequenceState.COMPLETED)
        return value

    async def aclose(self) -> None:
        """Abandon the sequence; a non-terminal sequence ends as cancelled.

        Interrupts a pause in progress on another task. Idempotent.
        """
        if self._state.terminal:
            return
        self._close_token.cancel(CLOSED_REASON)
        self._finish(SequenceState.CANCELLED, reason=CLOSED_REASON)

    # Internals -------------------------------------------------------------
    def _start(self) -> None:
        self._started_at = time.perf_counter()
        self._active, self._release = linked_token(self._close_token, *self._tokens)
        normalized_log_event(
            _logger,
            "sequence.start",
            self._ctx,
            phase="start",
            emitted=0,
            elapsed_ms=0.0,
            count=self._request.count,
            delay_ms=self._request.delay_ms,
        )

    def _elapsed_ms(self) -> float | None:
        if self._started_at is None:
            return None
        return (time.perf_counter() - self._started_at) * 1000.0

    def _finish(
        self,
        state: SequenceState,
        *,
        reason: str | None = None,
        error: BaseException | None = None,
    ) -> None:
        if self._state.terminal:
            return
        self._state = state
        self._release()
        if state is SequenceState.COMPLETED:
            normalized_log_event(
                _logger, "sequence.complete", self._ctx,
                phase="complete", emitted=self._index, elapsed_ms=self._elapsed_ms(),
            )
        elif state is SequenceState.CANCELLED:
            normalized_log_event(
                _logger, "sequence.cancelled", self._ctx,
                phase="cancelled", emitted=self._index, elapsed_ms=self._elapsed_ms(),
                error_code=ErrorCode.CANCELLED.value, reason=reason,
            )
        else:
            normalized_log_event(
                _logger, "sequence.fault", self._ctx,
                phase="fault", emitted=self._index, elapsed_ms=self._elapsed_ms(),
                error_code=classify_exception(error).value if error is not None else None,
                error=repr(error), level=logging.WARNING,
            )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellableSequence(id={self._sequence_id}, count={self._request.count}, "
            f"delay_ms={self._request.delay_ms}, state={self._state.value}, produced={self._index})"
        )


def int_sequence(
    count: int, delay_ms: int, token: Optional[CancellationToken] = None
) -> CancellableSequence[int]:
    """Sequence of raw integers ``0 .. count - 1``."""
    return CancellableSequence(count, delay_ms, token, factory=int)


def wrapper_sequence(
    count: int, delay_ms: int, token: Optional[CancellationToken] = None
) -> CancellableSequence[IntWrapper]:
    """Sequence of ``IntWrapper(0) .. IntWrapper(count - 1)``."""
    return CancellableSequence(count, delay_ms, token, factory=IntWrapper)


__all__ = ["CancellableSequence", "int_sequence", "wrapper_sequence", "CLOSED_REASON"]
