"""asyncio_demo package

Asynchronous primitives meant to be driven from a host process: deferred
values, cancellable lazy sequences produced on a delay schedule, and an
all-or-nothing drain.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`AsyncioDemoLibrary`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`,
      :func:`create_cancellation_token`
    - Sequences: :class:`CancellableSequence`, :class:`SequenceState`,
      :func:`int_sequence`, :func:`wrapper_sequence`, :func:`drain`
    - Deferred values: :func:`deferred_value`, :func:`create_promise`,
      :func:`create_task`
    - Elements: :class:`IntWrapper`
    - Errors: :class:`AsyncDemoError`, :class:`ErrorCode`

Example::

    lib = AsyncioDemoLibrary()
    token = lib.create_cancellation_token(timeout_ms=120)
    async for value in lib.get_async_enumerable_int(5, 50, token):
        print(value)   # 0, 1, 2 then CancelledError
"""

from .base.cancellation import CancellationToken, CancelledError, create_cancellation_token
from .base.deferred import create_promise, create_task, deferred_value
from .base.errors import AsyncDemoError, ErrorCode
from .base.models import IntWrapper
from .base.streaming import (
    CancellableSequence,
    SequenceState,
    drain,
    int_sequence,
    wrapper_sequence,
)
from .demo import AsyncioDemoLibrary

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AsyncioDemoLibrary",
    "CancellationToken",
    "CancelledError",
    "create_cancellation_token",
    "CancellableSequence",
    "SequenceState",
    "drain",
    "int_sequence",
    "wrapper_sequence",
    "deferred_value",
    "create_promise",
    "create_task",
    "IntWrapper",
    "AsyncDemoError",
    "ErrorCode",
]
