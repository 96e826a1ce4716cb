"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``asyncio_demo.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is the shared signal observed by sequences and drains.
- ``CancelledError`` is raised by operations that observe a cancellation request.
- ``create_cancellation_token`` builds manual or timeout-bound tokens.
- ``wait_for_delay`` is the cancellable sleep the sequence engine suspends on.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import TIMEOUT_REASON, CancellationToken
from .cancellation_parts.delay import wait_for_delay
from .cancellation_parts.token_factory import create_cancellation_token, linked_token

__all__ = [
    "CancellationToken",
    "CancelledError",
    "TIMEOUT_REASON",
    "create_cancellation_token",
    "linked_token",
    "wait_for_delay",
]
