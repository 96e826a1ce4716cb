"""Host-facing facade over the base primitives."""

from .library import AsyncioDemoLibrary

__all__ = ["AsyncioDemoLibrary"]
