"""Fixtures for latency contract tests."""

from collections.abc import Iterable

import pytest

from tessera.adapters.latency import AsyncioLatency, RecordingLatency
from tessera.interfaces.latency import Latency


@pytest.fixture(params=["asyncio", "asyncio-zero", "recording"])
def latency_source(request: pytest.FixtureRequest) -> Iterable[Latency]:
    """Return a fresh Latency instance for the requested backend.

    Supported params:
      - `"asyncio"` → AsyncioLatency with a tiny scale (real but short sleeps)
      - `"asyncio-zero"` → AsyncioLatency(scale=0)
      - `"recording"` → RecordingLatency

    Extend by adding new identifiers to `params` and branching below to
    construct the corresponding backend.
    """

    match request.param:
        case "asyncio":
            yield AsyncioLatency(scale=0.001)
        case "asyncio-zero":
            yield AsyncioLatency(scale=0)
        case "recording":
            yield RecordingLatency()
        case _:
            raise ValueError(f"unknown latency type: {request.param}")
