"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the sequence engine, the drain
helper, and the deferred producers. Values are lowercase snake_case and are
considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    VALIDATION = "validation"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    INVALID_STATE = "invalid_state"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
