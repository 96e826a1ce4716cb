"""Implementation modules behind ``asyncio_demo.base.cancellation``."""
