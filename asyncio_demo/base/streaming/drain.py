"""Drain a cancellable sequence into a list, all or nothing.

``drain`` is the aggregate counterpart of iterating a sequence directly. It
returns the ordered elements only on normal completion; a cancellation (from
the sequence's own token or from the token given to ``drain``) or a fault
propagates and the partially accumulated list is dropped. The sequence is
closed on every exit path, so it cannot be resumed afterwards.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, TypeVar

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from .lazy_sequence import CancellableSequence

T = TypeVar("T")

_logger = get_logger("asyncio_demo.drain")


async def drain(
    sequence: CancellableSequence[T],
    token: Optional[CancellationToken] = None,
) -> List[T]:
    """Consume ``sequence`` and return its elements in order.

    Parameters
    ----------
    sequence: CancellableSequence[T]
        A sequence that has not been iterated yet.
    token: Optional[CancellationToken]
        Extra token for this drain, independent of the sequence's own token;
        whichever fires first ends the drain.

    Raises
    ------
    CancelledError
        When either token fires before the sequence is exhausted.
    AsyncDemoError
        ``invalid_state`` when ``sequence`` was already iterated.
    """
    sequence.with_cancellation(token)
    ctx = LogContext(operation="drain", sequence_id=sequence.sequence_id, element_type=sequence.element_type)
    started = time.perf_counter()
    normalized_log_event(_logger, "drain.start", ctx, phase="start", emitted=0, elapsed_ms=0.0)

    results: List[T] = []
    try:
        async for item in sequence:
            results.append(item)
    except CancelledError as exc:
        normalized_log_event(
            _logger, "drain.cancelled", ctx,
            phase="cancelled", emitted=len(results),
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
            error_code=ErrorCode.CANCELLED.value, reason=exc.reason,
        )
        raise
    except Exception as exc:
        normalized_log_event(
            _logger, "drain.fault", ctx,
            phase="fault", emitted=len(results),
            elapsed_ms=(time.perf_counter() - started) * 1000.0,
            error_code=classify_exception(exc).value, level=logging.WARNING,
        )
        raise
    finally:
        await sequence.aclose()

    normalized_log_event(
        _logger, "drain.complete", ctx,
        phase="complete", emitted=len(results),
        elapsed_ms=(time.perf_counter() - started) * 1000.0,
    )
    return results


__all__ = ["drain"]
