"""DTO validation package."""

from .sequence_request import DeferredRequest, SequenceRequest, parse_request

__all__ = ["DeferredRequest", "SequenceRequest", "parse_request"]
