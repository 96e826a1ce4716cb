"""
Structured error exception type.

Carries a normalized `ErrorCode` for contract violations (rejected arguments)
and misuse (for example iterating a consumed sequence) so callers and logs can
tell them apart from cancellation and from genuine faults.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class AsyncDemoError(Exception):
    """Represents a structured library error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        operation: Name of the operation that rejected the call
            (e.g., ``"sequence"``, ``"deferred"``).
        retryable: Hint for callers; these primitives never retry on their own.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    operation: str
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining operation, code, and message."""
        return f"{self.operation} {self.code.value}: {self.message}"


__all__ = ["AsyncDemoError"]
