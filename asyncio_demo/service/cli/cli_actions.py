"""CLI action handlers.

Purpose
-------
Subcommand handlers for the asyncio-demo CLI. Each handler runs one coroutine
on a fresh event loop (``asyncio.run``) and writes JSON lines to stdout.

Exit codes
----------
- ``0``: the operation completed.
- ``3``: the operation was cancelled (``--timeout-ms`` elapsed).

Validation errors are raised as ``AsyncDemoError`` and mapped to exit code
``1`` by ``main``. Exit code ``2`` stays reserved for argparse usage errors.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import time
from typing import Any, Callable, Dict

from ...base.cancellation import CancelledError, create_cancellation_token
from ...base.deferred import create_promise, create_task, deferred_value
from ...base.models import IntWrapper
from ...base.streaming import CancellableSequence, drain

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 3


def encode_element(value: Any) -> Any:
    """Return a JSON-friendly form of a sequence element."""
    return value.to_dict() if isinstance(value, IntWrapper) else value


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False), flush=True)


def _factory(args: argparse.Namespace) -> Callable[[int], Any]:
    return IntWrapper if args.wrapper else int


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 3)


def handle_deferred(args: argparse.Namespace) -> int:
    """Await one deferred value in the requested ``--mode`` and print it."""
    factory = _factory(args)

    async def _run() -> Any:
        if args.mode == "promise":
            return await create_promise(args.delay_ms, factory)
        if args.mode == "task":
            return await create_task(args.delay_ms, factory)
        return await deferred_value(args.delay_ms, factory)

    started = time.perf_counter()
    result = asyncio.run(_run())
    _emit({"event": "resolved", "mode": args.mode, "value": encode_element(result), "elapsed_ms": _elapsed_ms(started)})
    return EXIT_OK


def handle_stream(args: argparse.Namespace) -> int:
    """Iterate a sequence, printing each element and a terminal line."""
    factory = _factory(args)

    async def _run() -> int:
        token = create_cancellation_token(args.timeout_ms)
        sequence = CancellableSequence(args.count, args.delay_ms, token, factory=factory)
        started = time.perf_counter()
        try:
            async for value in sequence:
                _emit({"event": "element", "value": encode_element(value), "elapsed_ms": _elapsed_ms(started)})
        except CancelledError as exc:
            _emit({"event": "cancelled", "reason": exc.reason, "produced": sequence.produced, "elapsed_ms": _elapsed_ms(started)})
            return EXIT_CANCELLED
        finally:
            token.close()
        _emit({"event": "completed", "produced": sequence.produced, "elapsed_ms": _elapsed_ms(started)})
        return EXIT_OK

    return asyncio.run(_run())


def handle_drain(args: argparse.Namespace) -> int:
    """Drain a sequence and print the whole list, or the cancellation."""
    factory = _factory(args)

    async def _run() -> int:
        token = create_cancellation_token(args.timeout_ms)
        sequence = CancellableSequence(args.count, args.delay_ms, factory=factory)
        started = time.perf_counter()
        try:
            values = await drain(sequence, token)
        except CancelledError as exc:
            _emit({"event": "cancelled", "reason": exc.reason, "elapsed_ms": _elapsed_ms(started)})
            return EXIT_CANCELLED
        finally:
            token.close()
        _emit({"event": "drained", "values": [encode_element(v) for v in values], "elapsed_ms": _elapsed_ms(started)})
        return EXIT_OK

    return asyncio.run(_run())


HANDLERS: Dict[str, Callable[[argparse.Namespace], int]] = {
    "deferred": handle_deferred,
    "stream": handle_stream,
    "drain": handle_drain,
}


__all__ = [
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_CANCELLED",
    "HANDLERS",
    "encode_element",
    "handle_deferred",
    "handle_stream",
    "handle_drain",
]
