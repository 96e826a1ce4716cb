"""Lifecycle states of a cancellable lazy sequence."""

from __future__ import annotations

from enum import Enum


class SequenceState(str, Enum):
    """States of ``CancellableSequence``.

    ``IDLE`` until the first pull; ``AWAITING_DELAY`` while suspended on the
    inter-element delay; ``YIELDING`` after an element was handed out and more
    remain. ``CANCELLED``, ``COMPLETED`` and ``FAULTED`` are terminal.
    """

    IDLE = "idle"
    AWAITING_DELAY = "awaiting_delay"
    YIELDING = "yielding"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    FAULTED = "faulted"

    @property
    def terminal(self) -> bool:
        return self in (SequenceState.CANCELLED, SequenceState.COMPLETED, SequenceState.FAULTED)


__all__ = ["SequenceState"]
