"""
Reference-type integer wrapper.

``IntWrapper`` is the by-reference element type that flows through the same
deferred, sequence and drain contracts as plain ``int`` results. Downstream
code relies on value-based equality and hashing for membership tests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True, repr=False)
class IntWrapper:
    """Immutable holder of a single integer.

    Attributes:
        value: The wrapped integer.

    Two wrappers are equal iff their values are equal; the hash follows the
    value. Comparison with any other type (including ``int``) is unequal.
    """

    value: int

    def __repr__(self) -> str:
        return f"IntWrapper({self.value})"

    __str__ = __repr__

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {"type": "IntWrapper", "value": self.value}


__all__ = ["IntWrapper"]
