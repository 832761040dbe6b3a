"""Configuration utilities for TESSERA.

This module centralizes the environment-driven settings and the nominal
durations (in milliseconds) of every simulated datastore step.
"""

import logging
import os

LATENCY_SCALE_ENVVAR = "TESSERA_LATENCY_SCALE"  # pragma: no mutate
SERIALIZE_WRITES_ENVVAR = "TESSERA_SERIALIZE_WRITES"  # pragma: no mutate
LOG_LEVEL_ENVVAR = "TESSERA_LOG_LEVEL"  # pragma: no mutate

DEFAULT_LATENCY_SCALE = 1.0

_TRUTHY = frozenset({"1", "true", "yes", "on"})

# User service
CREATE_LOOKUP_MS = 100
CREATE_SAVE_MS = 50
VALIDATE_LOOKUP_MS = 75
VALIDATE_CHECK_MS = 25
UPDATE_LOOKUP_MS = 100
UPDATE_SAVE_MS = 75
GET_LOOKUP_MS = 50
GET_ALL_QUERY_MS = 150

# Data processing service
PROCESS_NUMBERS_DEFAULT_MS = 100
BATCH_STEP_MS = 50
AGGREGATE_MS = 75
POTENTIAL_FAILURE_DEFAULT_MS = 100


class InvalidLatencyScaleError(Exception):
    """Raised when TESSERA_LATENCY_SCALE is not a non-negative number."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"{LATENCY_SCALE_ENVVAR} must be a non-negative number, got {raw!r}."
        )
        self.raw = raw


def get_latency_scale() -> float:
    """Get the latency scale from the environment.

    Returns:
        The value of `TESSERA_LATENCY_SCALE` as a float, or 1.0 when unset or empty.

    Raises:
        InvalidLatencyScaleError: If the value is not a number or is negative.
    """
    if not (raw := os.environ.get(LATENCY_SCALE_ENVVAR, "").strip()):
        return DEFAULT_LATENCY_SCALE
    try:
        scale = float(raw)
    except ValueError as e:
        raise InvalidLatencyScaleError(raw) from e
    if not scale >= 0:  # also rejects NaN
        raise InvalidLatencyScaleError(raw)
    return scale


def get_serialize_writes() -> bool:
    """Whether user-service writes should be serialized behind a lock.

    Returns:
        True when `TESSERA_SERIALIZE_WRITES` is one of 1/true/yes/on
        (case-insensitive), otherwise False.
    """
    return os.environ.get(SERIALIZE_WRITES_ENVVAR, "").strip().lower() in _TRUTHY


class InvalidLogLevelError(Exception):
    """Raised when TESSERA_LOG_LEVEL is not a standard logging level name."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"{LOG_LEVEL_ENVVAR} must be a logging level name, got {raw!r}."
        )
        self.raw = raw


def get_log_level() -> int | None:
    """Get the console log level requested by the environment.

    Returns:
        The numeric level named by `TESSERA_LOG_LEVEL` (e.g. "debug", "INFO"),
        or None when unset or empty, meaning logging is left unconfigured.

    Raises:
        InvalidLogLevelError: If the value is not a level name.
    """
    if not (raw := os.environ.get(LOG_LEVEL_ENVVAR, "").strip()):
        return None
    if not isinstance(level := getattr(logging, raw.upper(), None), int):
        raise InvalidLogLevelError(raw)
    return level
