"""CLI parser construction for asyncio-demo.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ...config import DemoConfig

SUBCOMMANDS = ("deferred", "stream", "drain")


def _non_negative_int(value: str) -> int:
    """argparse ``type`` accepting integers >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {parsed}")
    return parsed


def _add_common_flags(parser: argparse.ArgumentParser, cfg: DemoConfig) -> None:
    parser.add_argument("--delay-ms", type=_non_negative_int, default=cfg.delay_ms)
    parser.add_argument("--wrapper", action="store_true", help="produce IntWrapper elements instead of int")
    parser.add_argument("--log-level", default=None, help="override the configured log level")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")


def _add_sequence_flags(parser: argparse.ArgumentParser, cfg: DemoConfig) -> None:
    parser.add_argument("--count", type=_non_negative_int, default=cfg.count)
    parser.add_argument(
        "--timeout-ms",
        type=_non_negative_int,
        default=cfg.timeout_ms,
        help="cancel after this many milliseconds (default: never)",
    )


def build_parser(cfg: DemoConfig) -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Parameters
    ----------
    cfg: DemoConfig
        Source of the default ``--count``/``--delay-ms``/``--timeout-ms`` values.

    Returns
    -------
    argparse.ArgumentParser
        Parser with ``deferred``, ``stream`` and ``drain`` subcommands.
    """
    p = argparse.ArgumentParser(
        prog="asyncio-demo", description="Drive deferred values and cancellable sequences from the shell"
    )
    sub = p.add_subparsers(dest="cmd")

    p_def = sub.add_parser("deferred", help="Await a single delayed value")
    _add_common_flags(p_def, cfg)
    p_def.add_argument("--mode", choices=("promise", "task", "coroutine"), default="promise")

    p_stream = sub.add_parser("stream", help="Iterate a sequence, printing elements as they arrive (default)")
    _add_common_flags(p_stream, cfg)
    _add_sequence_flags(p_stream, cfg)

    p_drain = sub.add_parser("drain", help="Drain a sequence into a list (all or nothing)")
    _add_common_flags(p_drain, cfg)
    _add_sequence_flags(p_drain, cfg)

    return p


__all__ = ["build_parser", "SUBCOMMANDS"]
