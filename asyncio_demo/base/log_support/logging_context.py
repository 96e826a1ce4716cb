"""Structured logging context object.

This module defines :class:`LogContext`, a dataclass carrying the fields that
identify what an event belongs to (operation name, sequence id, element
type) plus free-form metadata. ``to_dict`` merges ``extra`` and prunes
``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for sequence, drain and deferred logging events."""

    operation: Optional[str] = None
    sequence_id: Optional[str] = None
    element_type: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
