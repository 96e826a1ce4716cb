"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``asyncio_demo.base.errors_parts`` to maintain a stable import path.
``CancelledError`` is re-exported here as well because cancellation is part of
the taxonomy even though it is not a fault.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.demo_error import AsyncDemoError
from .errors_parts.classification import classify_exception
from .cancellation_parts.cancelled_error import CancelledError

__all__ = ["ErrorCode", "AsyncDemoError", "CancelledError", "classify_exception"]
