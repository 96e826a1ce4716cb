"""Implementation modules behind ``asyncio_demo.base.models``."""
