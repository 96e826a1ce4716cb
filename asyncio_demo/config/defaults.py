"""asyncio_demo.config.defaults
===========================

Central place for the small, stable defaults used by the CLI and the config
loader. Every value can be overridden through the environment or an external
config file (see ``asyncio_demo.config``).

This module intentionally imports nothing from the rest of the package.
"""

from __future__ import annotations

# ---- Sequence defaults ----
# Elements produced by the CLI ``stream``/``drain`` commands when --count is omitted.
DEFAULT_COUNT = 5
# Pause between elements (and the deferred delay) when --delay-ms is omitted.
DEFAULT_DELAY_MS = 10
# No timeout unless configured: tokens are manual by default.
DEFAULT_TIMEOUT_MS = None

# ---- Logging ----
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_JSON = True

# ---- Environment variable names ----
ENV_CONFIG_FILE = "ASYNCIO_DEMO_CONFIG_FILE"
ENV_COUNT = "ASYNCIO_DEMO_COUNT"
ENV_DELAY_MS = "ASYNCIO_DEMO_DELAY_MS"
ENV_TIMEOUT_MS = "ASYNCIO_DEMO_TIMEOUT_MS"
ENV_LOG_LEVEL = "ASYNCIO_DEMO_LOG_LEVEL"
ENV_LOG_JSON = "ASYNCIO_DEMO_LOG_JSON"


__all__ = [
    "DEFAULT_COUNT",
    "DEFAULT_DELAY_MS",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_LOG_JSON",
    "ENV_CONFIG_FILE",
    "ENV_COUNT",
    "ENV_DELAY_MS",
    "ENV_TIMEOUT_MS",
    "ENV_LOG_LEVEL",
    "ENV_LOG_JSON",
]
