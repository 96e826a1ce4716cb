"""
Base package.

Exports the primitives the host-facing facade is built from:
- Cancellation: tokens, the cancellable delay wait, ``CancelledError``
- Streaming: the cancellable lazy sequence engine and ``drain``
- Deferred: promise, task and coroutine forms of a delayed value
- Models/DTOs: ``IntWrapper`` and the validated request models
- Errors: normalized taxonomy
"""

from .cancellation import (
    CancellationToken,
    CancelledError,
    create_cancellation_token,
    linked_token,
    wait_for_delay,
)
from .deferred import create_promise, create_task, deferred_value
from .dto import DeferredRequest, SequenceRequest
from .errors import AsyncDemoError, ErrorCode, classify_exception
from .models import IntWrapper
from .streaming import (
    CancellableSequence,
    SequenceState,
    drain,
    int_sequence,
    wrapper_sequence,
)

__all__ = [
    # Cancellation
    "CancellationToken",
    "CancelledError",
    "create_cancellation_token",
    "linked_token",
    "wait_for_delay",
    # Deferred
    "deferred_value",
    "create_promise",
    "create_task",
    # Models
    "IntWrapper",
    "DeferredRequest",
    "SequenceRequest",
    # Errors
    "AsyncDemoError",
    "ErrorCode",
    "classify_exception",
    # Streaming
    "CancellableSequence",
    "SequenceState",
    "drain",
    "int_sequence",
    "wrapper_sequence",
]
