"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Used by the logging paths of the sequence engine and drain helper so that a
fault event always carries a stable ``error_code`` field.
"""
from __future__ import annotations

import asyncio

from pydantic import ValidationError

from ..cancellation_parts.cancelled_error import CancelledError
from .demo_error import AsyncDemoError
from .error_code import ErrorCode


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. AsyncDemoError passthrough.
        2. Cooperative or host-task cancellation.
        3. Timeout exceptions (sync/async).
        4. Pydantic validation failures.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, AsyncDemoError):
        return exc.code
    if isinstance(exc, (CancelledError, asyncio.CancelledError)):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (ValidationError, ValueError)):
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


__all__ = ["classify_exception"]
