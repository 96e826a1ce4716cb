"""Cancellable delay wait.

The only suspension point of the sequence engine. The wait races the delay
against ``CancellationToken.wait()``, so a token fired from any thread
(including a timeout timer thread) ends the wait early instead of letting it
run to completion.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Optional

from .cancellation_token import CancellationToken


async def wait_for_delay(seconds: float, token: Optional[CancellationToken] = None) -> None:
    """Suspend for ``seconds`` unless ``token`` fires first.

    Raises
    ------
    CancelledError
        When the token is already cancelled on entry or fires during the wait.
    """
    if token is None:
        await asyncio.sleep(seconds)
        return
    token.raise_if_cancelled()
    # the timeout expiring is the delay elapsing
    with contextlib.suppress(asyncio.TimeoutError):
        await asyncio.wait_for(token.wait(), timeout=max(0.0, seconds))
    token.raise_if_cancelled()


__all__ = ["wait_for_delay"]
