"""
Pydantic DTOs for the parameters of deferred values and lazy sequences.

Purpose
-------
Validate caller-supplied counts and delays once, at construction, so that a
contract violation is never discovered mid-iteration. Both models are frozen:
a request is immutable for the lifetime of the operation it parameterizes.

Failure modes
-------------
``parse_request`` converts pydantic's ``ValidationError`` into
``AsyncDemoError(code=validation)``, keeping the original error as ``raw``.
"""

from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors_parts.demo_error import AsyncDemoError
from ..errors_parts.error_code import ErrorCode

RequestT = TypeVar("RequestT", bound=BaseModel)


class DeferredRequest(BaseModel):
    """Parameters of a deferred value.

    Attributes:
        delay_ms: Milliseconds to wait before resolving; must be >= 0.
    """

    model_config = ConfigDict(frozen=True)

    delay_ms: int = Field(ge=0, strict=True)

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


class SequenceRequest(BaseModel):
    """Parameters of a cancellable lazy sequence.

    Attributes:
        count: Number of elements to produce; ``0`` yields an empty sequence.
        delay_ms: Pause before every element except the first; must be >= 0.

    The cancellation token is deliberately not part of the request: the
    request is data, the token is a shared signal the caller keeps owning.
    """

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0, strict=True)
    delay_ms: int = Field(ge=0, strict=True)

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


def parse_request(model: Type[RequestT], operation: str, **values: Any) -> RequestT:
    """Validate ``values`` into ``model`` or raise ``AsyncDemoError``."""
    try:
        return model(**values)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise AsyncDemoError(
            code=ErrorCode.VALIDATION,
            message=f"invalid {operation} parameters: {fields}",
            operation=operation,
            raw=exc,
        ) from exc


__all__ = ["DeferredRequest", "SequenceRequest", "parse_request"]
