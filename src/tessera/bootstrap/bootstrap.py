"""Bootstrap the services with their latency source."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tessera import config
from tessera.adapters.latency import AsyncioLatency
from tessera.interfaces.latency import Latency
from tessera.logging import configure_logging
from tessera.service_layer import DataProcessingService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    user_service: UserService
    data_processing_service: DataProcessingService


def build_latency() -> Latency:
    """Build the latency source configured by the environment."""
    return AsyncioLatency(scale=config.get_latency_scale())


def bootstrap(latency: Latency | None = None) -> AppContainer:
    """Build fresh services sharing one latency source.

    When `TESSERA_LOG_LEVEL` is set, console logging for `tessera` is
    configured at that level first.

    Args:
        latency: Latency source to inject. When omitted, one is built from
            `TESSERA_LATENCY_SCALE`.

    Raises:
        InvalidLatencyScaleError: If the configured latency scale is invalid.
        InvalidLogLevelError: If the configured log level is not a level name.
    """
    if (log_level := config.get_log_level()) is not None:
        configure_logging(log_level)

    latency = latency if latency is not None else build_latency()
    serialize_writes = config.get_serialize_writes()
    logger.debug(
        "Bootstrapping with latency=%s serialize_writes=%s",
        type(latency).__name__,
        serialize_writes,
    )

    return AppContainer(
        user_service=UserService(latency, serialize_writes=serialize_writes),
        data_processing_service=DataProcessingService(latency),
    )
