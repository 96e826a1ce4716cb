"""
Element models public surface.

Re-exports the one-class-per-file implementations under
``asyncio_demo.base.models_parts``.
"""

from .models_parts.int_wrapper import IntWrapper

__all__ = ["IntWrapper"]
