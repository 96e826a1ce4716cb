"""Structured logging helpers: levels, normalized events, file handler, formatter."""
from __future__ import annotations

import io
import json
import logging
import sys
import tempfile

from asyncio_demo.base.logging import (
    BASE_LOGGER_NAME,
    LOG_LEVEL_ENV,
    LogContext,
    REQUIRED_NORMALIZED_KEYS,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from asyncio_demo.base.log_support import JsonFormatter


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_logger().level == logging.DEBUG
    monkeypatch.setenv(LOG_LEVEL_ENV, "nonsense")
    assert get_logger().level == logging.INFO


def test_child_loggers_propagate_to_base():
    child = get_logger("asyncio_demo.unit")
    assert child.propagate is True
    assert child.handlers == []
    base = logging.getLogger(BASE_LOGGER_NAME)
    assert base.propagate is False
    assert len([h for h in base.handlers if isinstance(h, logging.StreamHandler)]) >= 1


def test_normalized_event_always_has_required_keys(log_events):
    logger = get_logger("asyncio_demo.unit")
    normalized_log_event(logger, "unit.start", LogContext(operation="unit"), phase="start", phase_extra=None)
    event = log_events()[-1]
    assert event["event"] == "unit.start"
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event
    assert event["emitted"] is None
    assert event["elapsed_ms"] is None
    assert "error_code" not in event
    assert "phase_extra" not in event


def test_normalized_event_extra_cannot_override_required(log_events):
    logger = get_logger("asyncio_demo.unit")
    normalized_log_event(logger, "unit.x", phase="fault", emitted=3, elapsed_ms=1.23456, error_code="unknown", detail="d")
    event = log_events()[-1]
    assert event["phase"] == "fault"
    assert event["emitted"] == 3
    assert event["elapsed_ms"] == 1.235
    assert event["error_code"] == "unknown"
    assert event["detail"] == "d"


def test_log_event_drops_none_unless_kept(log_events):
    logger = get_logger("asyncio_demo.unit")
    log_event(logger, "unit.a", a=None, b=1)
    log_event(logger, "unit.b", keep_none=True, a=None)
    first, second = log_events()[-2:]
    assert "a" not in first and first["b"] == 1
    assert "a" in second and second["a"] is None


def test_debug_events_suppressed_at_info(log_events):
    logger = get_logger("asyncio_demo.unit")
    log_event(logger, "unit.hidden", level=logging.DEBUG)
    assert all(e["event"] != "unit.hidden" for e in log_events())


def test_log_context_prunes_none_and_merges_extra():
    ctx = LogContext(operation="drain", extra={"mode": "task", "skip": None})
    assert ctx.to_dict() == {"operation": "drain", "mode": "task"}


def test_configure_logger_manages_file_handler(tmp_path):
    target = tmp_path / "logs" / "demo.log"
    try:
        logger = configure_logger(level="INFO", file_path=str(target))
        configure_logger(level="INFO", file_path=str(target))
        file_handlers = [h for h in logger.handlers if getattr(h, "baseFilename", None)]
        assert len(file_handlers) == 1
        log_event(get_logger("asyncio_demo.unit"), "unit.file", value=7)
        for h in file_handlers:
            h.flush()
        lines = [json.loads(line) for line in target.read_text(encoding="utf-8").splitlines()]
        assert any(line["event"] == "unit.file" and line["value"] == 7 for line in lines)
    finally:
        logger = configure_logger(file_path=None)
    assert not [h for h in logger.handlers if getattr(h, "baseFilename", None)]


def test_formatter_hoists_json_message_and_extras():
    record = logging.LogRecord(
        "asyncio_demo.unit", logging.WARNING, __file__, 1, json.dumps({"event": "e", "n": 2}), None, None
    )
    record.mode = "promise"
    data = json.loads(JsonFormatter().format(record))
    assert data["event"] == "e"
    assert data["n"] == 2
    assert data["level"] == "WARNING"
    assert data["logger"] == "asyncio_demo.unit"
    assert data["mode"] == "promise"
    assert data["ts"].endswith("Z")


def test_formatter_plain_message():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    data = json.loads(JsonFormatter().format(record))
    assert data["msg"] == "hello world"
    assert "event" not in data


def test_closed_console_stream_is_replaced(log_events):
    original = sys.stderr
    stream = io.TextIOWrapper(tempfile.TemporaryFile(), encoding="utf-8")
    sys.stderr = stream
    try:
        get_logger()
    finally:
        sys.stderr = original
        stream.close()

    base = configure_logger(level="INFO")
    consoles = [h for h in base.handlers if getattr(h, "_asyncio_demo_console_handler", False)]
    assert len(consoles) == 1
    assert consoles[0].stream is sys.stderr
    log_event(get_logger("asyncio_demo.unit"), "unit.after_close")
    assert any(e["event"] == "unit.after_close" for e in log_events())
