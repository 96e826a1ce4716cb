"""Cancellation error type.

Defines the public ``CancelledError`` raised when a sequence, a delay wait, or
a drain observes a cancellation request. Kept isolated so the error taxonomy
can import it without pulling in the token implementation.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    This specialized error distinguishes a requested cancellation from other
    runtime failures and from ``asyncio.CancelledError`` (which signals that
    the consuming task itself was cancelled by its event loop).

    Attributes:
        reason: Reason string supplied to ``CancellationToken.cancel``.
    """

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or "operation cancelled")
        self.reason = reason


__all__ = ["CancelledError"]
