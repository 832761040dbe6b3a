"""Latency sources for TESSERA services."""

import asyncio

from tessera.interfaces.latency import Latency

# pylint: disable=too-few-public-methods


class AsyncioLatency(Latency):
    """Scaled `asyncio.sleep` latency.

    A scale of 1.0 sleeps for the nominal duration, 0.5 for half of it, and 0
    only yields to the event loop without sleeping.

    Args:
        scale: Non-negative multiplier applied to every requested duration.

    Raises:
        ValueError: If `scale` is negative.
    """

    def __init__(self, scale: float = 1.0) -> None:
        if scale < 0:
            raise ValueError(f"Latency scale must be non-negative, got {scale}")
        self.scale = scale

    async def pause(self, milliseconds: float) -> None:
        """Sleep for `milliseconds * scale`."""
        await asyncio.sleep(milliseconds * self.scale / 1000)


class RecordingLatency(Latency):
    """Zero-delay latency that records each requested duration.

    Note:
        Primarily for tests: `calls` shows exactly where an operation would
        have waited on a real store.
    """

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def pause(self, milliseconds: float) -> None:
        """Record the request and yield once to the event loop."""
        self.calls.append(milliseconds)
        await asyncio.sleep(0)
