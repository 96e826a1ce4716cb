"""Construction helpers for cancellation tokens.

``create_cancellation_token`` is the host-facing constructor (manual or
timeout-bound). ``linked_token`` combines several tokens into one that fires
when any of them fires; the sequence engine uses it to honour both the token
a sequence was built with and the token supplied when it is consumed.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from ..errors_parts.demo_error import AsyncDemoError
from ..errors_parts.error_code import ErrorCode
from .cancellation_token import CancellationToken


def create_cancellation_token(timeout_ms: Optional[int] = None) -> CancellationToken:
    """Return a new token, optionally auto-cancelled after ``timeout_ms``.

    Parameters
    ----------
    timeout_ms: Optional[int]
        ``None`` yields a token that only fires through ``cancel()``. A
        non-negative value arms a one-shot deadline that fires the token with
        reason ``"timeout"``; ``0`` fires it before this function returns.

    Raises
    ------
    AsyncDemoError
        With code ``validation`` when ``timeout_ms`` is negative or not an int.
    """
    if timeout_ms is None:
        return CancellationToken()
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms < 0:
        raise AsyncDemoError(
            code=ErrorCode.VALIDATION,
            message=f"timeout_ms must be a non-negative integer, got {timeout_ms!r}",
            operation="cancellation",
        )
    return CancellationToken(timeout_seconds=timeout_ms / 1000.0)


def linked_token(*tokens: Optional[CancellationToken]) -> Tuple[CancellationToken, Callable[[], None]]:
    """Return ``(token, release)`` where ``token`` fires when any source fires.

    ``None`` entries are ignored. ``release`` drops the registrations on the
    sources so long-lived tokens do not accumulate callbacks; it is safe to
    call more than once.
    """
    sources = [t for t in tokens if t is not None]
    linked = CancellationToken(sources=sources)
    releases: List[Callable[[], None]] = []
    for source in sources:
        releases.append(source.register(lambda src=source: linked.cancel(src.reason)))

    def _release() -> None:
        linked.detach()
        while releases:
            releases.pop()()

    return linked, _release


__all__ = ["create_cancellation_token", "linked_token"]
