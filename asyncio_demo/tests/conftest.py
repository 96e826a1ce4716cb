"""Pytest configuration for the asyncio_demo test suite.

Isolates every test from ``ASYNCIO_DEMO_*`` environment variables and the
cached configuration, points the shared console handler at the stderr of the
running test, and provides a fixture that returns the structured log
events written to stderr.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterator, List

import pytest

from asyncio_demo.base.logging import get_logger
from asyncio_demo.config import reset_demo_config_cache
from asyncio_demo.config.defaults import (
    ENV_CONFIG_FILE,
    ENV_COUNT,
    ENV_DELAY_MS,
    ENV_LOG_JSON,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT_MS,
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear package env vars and the config cache around each test."""

    for name in (ENV_CONFIG_FILE, ENV_COUNT, ENV_DELAY_MS, ENV_TIMEOUT_MS, ENV_LOG_LEVEL, ENV_LOG_JSON):
        monkeypatch.delenv(name, raising=False)
    reset_demo_config_cache()
    get_logger()
    yield
    reset_demo_config_cache()


def pytest_runtest_call(item: pytest.Item) -> None:
    """Re-point the console handler at the call-phase ``sys.stderr``.

    pytest installs a different ``sys.stderr`` for the call phase than the one
    seen during fixture setup, so ``log_events`` users are re-pointed here.
    """

    if "log_events" in getattr(item, "fixturenames", ()):
        get_logger()


@pytest.fixture()
def log_events(capsys: pytest.CaptureFixture[str]) -> Callable[[], List[Dict[str, Any]]]:
    """Return a reader of the JSON log events emitted since the last read.

    Calling ``get_logger`` re-points the shared console handler at the
    ``sys.stderr`` pytest installed for this test.
    """

    get_logger()
    capsys.readouterr()

    def _read() -> List[Dict[str, Any]]:
        events = []
        for line in capsys.readouterr().err.splitlines():
            line = line.strip()
            if not line.startswith("{"):
                continue
            data = json.loads(line)
            if "event" in data:
                events.append(data)
        return events

    return _read
