"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `asyncio_demo.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .demo_error import AsyncDemoError
from .classification import classify_exception

__all__ = ["ErrorCode", "AsyncDemoError", "classify_exception"]
