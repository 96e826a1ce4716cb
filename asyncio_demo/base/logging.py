"""Base structured logging utilities for the package.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across the sequence engine, drain
  helper and deferred producers.

Every module obtains its logger through ``get_logger``; all of them are
children of the shared ``asyncio_demo`` logger, which owns the only console
handler. ``normalized_log_event`` guarantees a fixed set of keys on lifecycle
events so sequence and drain logs can be filtered uniformly.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "asyncio_demo"
LOG_LEVEL_ENV = "ASYNCIO_DEMO_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_asyncio_demo_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_asyncio_demo_console_handler"
_FILE_HANDLER_ATTR = "_asyncio_demo_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _console_handler(json_mode: bool, level: int) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``asyncio_demo`` logger.

    On repeat calls the console handler is re-pointed at the current
    ``sys.stderr`` (pytest swaps it per test) and its formatter is aligned with
    ``json_mode``. A console handler whose stream has been closed is replaced
    by a fresh one.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # a closed stream cannot be flushed by setStream; replace the handler
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_console_handler(json_mode, desired_level))
                continue
            existing.setLevel(desired_level)
            if isinstance(existing, logging.StreamHandler) and stream_obj is not sys.stderr:
                with contextlib.suppress(Exception):
                    existing.setStream(sys.stderr)
            if json_mode != isinstance(existing.formatter, JsonFormatter):
                existing.setFormatter(_formatter(json_mode))
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(json_mode, desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``asyncio_demo`` hierarchy.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so reconfiguring the base (``configure_logger``) affects them all.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level (numeric or name such as ``"DEBUG"``). ``None``
        preserves the current level.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (or reused if it already points there). When ``None``, any
        file handler previously attached by this function is removed.
    json_mode: bool
        JSON formatter (default) or plain text for the managed handlers.

    Returns
    -------
    logging.Logger
        The configured base logger.

    Notes
    -----
    Handlers not created by this module are left untouched.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)

    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for h in logger.handlers:
            h.setLevel(resolved)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is not None and getattr(h, "baseFilename", None) == abs_path:
            h.setFormatter(_formatter(json_mode))
            h.setLevel(logger.level)
            continue
        logger.removeHandler(h)
        with contextlib.suppress(OSError):
            h.close()
    if abs_path is None or any(getattr(h, "baseFilename", None) == abs_path for h in logger.handlers):
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    keep_none: bool = False,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (obtained from ``get_logger``).
    event: str
        Event name (e.g. ``sequence.start``).
    ctx: LogContext | None
        Operation context; merged shallowly.
    keep_none: bool
        When ``True``, preserve keys whose values are ``None``; otherwise drop them.
    level: int
        Logging level of the emitted record.
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "emitted",
    "elapsed_ms",
)


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    emitted: int | None = None,
    elapsed_ms: float | None = None,
    error_code: str | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a lifecycle event with the normalized key set.

    ``phase``, ``emitted`` (elements delivered so far) and ``elapsed_ms`` are
    always present, ``None`` values included. ``error_code`` is present only
    when set. ``extra_fields`` never overwrite the normalized keys.
    """
    base_fields: Dict[str, Any] = {
        "phase": phase,
        "emitted": emitted,
        "elapsed_ms": round(elapsed_ms, 3) if elapsed_ms is not None else None,
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, keep_none=True, level=level, **base_fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "REQUIRED_NORMALIZED_KEYS",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
]
