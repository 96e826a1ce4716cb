"""Streaming package: the cancellable lazy sequence engine and its drain."""

from .sequence_state import SequenceState
from .lazy_sequence import CLOSED_REASON, CancellableSequence, int_sequence, wrapper_sequence
from .drain import drain

__all__ = [
    "SequenceState",
    "CancellableSequence",
    "CLOSED_REASON",
    "int_sequence",
    "wrapper_sequence",
    "drain",
]
