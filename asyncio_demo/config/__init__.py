"""Configuration layer.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional JSON or YAML file named by ``ASYNCIO_DEMO_CONFIG_FILE``
    3. Environment variables (``ASYNCIO_DEMO_COUNT``, ``ASYNCIO_DEMO_DELAY_MS``,
       ``ASYNCIO_DEMO_TIMEOUT_MS``, ``ASYNCIO_DEMO_LOG_LEVEL``,
       ``ASYNCIO_DEMO_LOG_JSON``)

A value that fails to parse (or is negative) is ignored and the previous layer
wins. The result is cached per process and recomputed when any of the
variables above changes, which keeps ``monkeypatch.setenv`` usable in tests.

External config file example (YAML)::

    count: 10
    delay_ms: 25
    timeout_ms: 120
    log_level: DEBUG
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    DEFAULT_COUNT,
    DEFAULT_DELAY_MS,
    DEFAULT_LOG_JSON,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_MS,
    ENV_CONFIG_FILE,
    ENV_COUNT,
    ENV_DELAY_MS,
    ENV_LOG_JSON,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT_MS,
)


@dataclass(frozen=True)
class DemoConfig:
    """Normalized configuration values.

    Attributes:
        count: Default number of sequence elements.
        delay_ms: Default per-element (and deferred) delay in milliseconds.
        timeout_ms: Default token timeout; ``None`` means a manual token.
        log_level: Level name for the shared logger.
        log_json: Whether console logs are JSON lines.
    """

    count: int = DEFAULT_COUNT
    delay_ms: int = DEFAULT_DELAY_MS
    timeout_ms: Optional[int] = DEFAULT_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = DEFAULT_LOG_JSON


_CACHED: DemoConfig | None = None
_ENV_GUARD: str | None = None
_WATCHED = (ENV_CONFIG_FILE, ENV_COUNT, ENV_DELAY_MS, ENV_TIMEOUT_MS, ENV_LOG_LEVEL, ENV_LOG_JSON)


def _parse_non_negative_int(raw: Any, default: Optional[int]) -> Optional[int]:
    if raw is None or isinstance(raw, bool) or raw == "":
        return default
    try:
        val = int(raw)
    except (TypeError, ValueError):
        return default
    return val if val >= 0 else default


def _parse_bool(raw: Any, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return default
    val = str(raw).strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else default


def _load_config_file(path: str | None) -> Dict[str, Any]:
    """Load a JSON (preferred) or YAML mapping; missing/invalid files yield ``{}``."""
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            data = None
    return data if isinstance(data, dict) else {}


def _merge(base: DemoConfig, source: Dict[str, Any]) -> DemoConfig:
    timeout = base.timeout_ms
    if "timeout_ms" in source:
        raw = source["timeout_ms"]
        timeout = None if raw is None or str(raw).strip().lower() in {"", "none"} else _parse_non_negative_int(raw, timeout)
    level = source.get("log_level")
    return DemoConfig(
        count=_parse_non_negative_int(source.get("count"), base.count),
        delay_ms=_parse_non_negative_int(source.get("delay_ms"), base.delay_ms),
        timeout_ms=timeout,
        log_level=str(level).strip().upper() if level else base.log_level,
        log_json=_parse_bool(source.get("log_json"), base.log_json),
    )


def _env_source() -> Dict[str, Any]:
    mapping = {
        "count": ENV_COUNT,
        "delay_ms": ENV_DELAY_MS,
        "timeout_ms": ENV_TIMEOUT_MS,
        "log_level": ENV_LOG_LEVEL,
        "log_json": ENV_LOG_JSON,
    }
    return {field: os.environ[name] for field, name in mapping.items() if name in os.environ}


def get_demo_config() -> DemoConfig:
    """Return the process-cached ``DemoConfig``, refreshed on env changes."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    guard = "\x1f".join(os.getenv(name, "") for name in _WATCHED)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    cfg = DemoConfig()
    cfg = _merge(cfg, _load_config_file(os.getenv(ENV_CONFIG_FILE)))
    cfg = _merge(cfg, _env_source())
    _CACHED = cfg
    _ENV_GUARD = guard
    return cfg


def reset_demo_config_cache() -> None:
    """Drop the cached configuration (tests that rewrite the config file)."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603
    _CACHED = None
    _ENV_GUARD = None


__all__ = ["DemoConfig", "get_demo_config", "reset_demo_config_cache"]
