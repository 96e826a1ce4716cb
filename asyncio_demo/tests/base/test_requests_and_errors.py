"""Validation of request DTOs and the error taxonomy."""
from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from asyncio_demo.base.cancellation import CancelledError
from asyncio_demo.base.dto import DeferredRequest, SequenceRequest, parse_request
from asyncio_demo.base.errors import AsyncDemoError, ErrorCode, classify_exception


def test_sequence_request_accepts_zero_values():
    req = parse_request(SequenceRequest, "sequence", count=0, delay_ms=0)
    assert req.count == 0
    assert req.delay_seconds == 0.0


def test_delay_seconds_conversion():
    assert DeferredRequest(delay_ms=250).delay_seconds == pytest.approx(0.25)


@pytest.mark.parametrize(
    "values,field",
    [
        ({"count": -1, "delay_ms": 10}, "count"),
        ({"count": 3, "delay_ms": -5}, "delay_ms"),
        ({"count": 1.5, "delay_ms": 10}, "count"),
        ({"count": "3", "delay_ms": 10}, "count"),
    ],
)
def test_invalid_sequence_request_raises_validation_error(values, field):
    with pytest.raises(AsyncDemoError) as info:
        parse_request(SequenceRequest, "sequence", **values)
    err = info.value
    assert err.code is ErrorCode.VALIDATION
    assert err.operation == "sequence"
    assert field in err.message
    assert isinstance(err.raw, ValidationError)
    assert err.retryable is False


def test_requests_are_frozen():
    req = SequenceRequest(count=1, delay_ms=1)
    with pytest.raises(ValidationError):
        req.count = 2  # type: ignore[misc]


@pytest.mark.parametrize(
    "exc,code",
    [
        (AsyncDemoError(code=ErrorCode.INVALID_STATE, message="x", operation="sequence"), ErrorCode.INVALID_STATE),
        (CancelledError("stop"), ErrorCode.CANCELLED),
        (asyncio.CancelledError(), ErrorCode.CANCELLED),
        (TimeoutError(), ErrorCode.TIMEOUT),
        (ValueError("bad"), ErrorCode.VALIDATION),
        (RuntimeError("boom"), ErrorCode.UNKNOWN),
    ],
)
def test_classify_exception(exc, code):
    assert classify_exception(exc) is code


def test_cancelled_error_default_message():
    err = CancelledError()
    assert str(err) == "operation cancelled"
    assert err.reason is None
    assert isinstance(err, RuntimeError)
