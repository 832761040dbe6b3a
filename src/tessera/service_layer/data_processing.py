"""Collection processing operations reporting through `ProcessingResult`.

The synchronous operations transform their input immediately. The async
variants first wait on the injected latency source, as a remote worker would.
"""

from __future__ import annotations

import logging
import statistics
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from tessera import config
from tessera.adapters.latency import AsyncioLatency
from tessera.domain.result import ProcessingResult
from tessera.domain.stopwatch import Stopwatch

if TYPE_CHECKING:
    from tessera.interfaces.latency import Latency

logger = logging.getLogger(__name__)

T = TypeVar("T")

NUMBERS_REQUIRED = "Input numbers cannot be null"
STRINGS_REQUIRED = "Input strings cannot be null"
DATA_REQUIRED = "Input data cannot be null"
INVALID_BATCH_SIZE = "Batch size must be greater than zero"
EMPTY_AGGREGATE = "Cannot aggregate empty collection"

AGGREGATIONS: dict[str, Callable[[list[int]], float]] = {
    "sum": lambda xs: float(sum(xs)),
    "average": statistics.fmean,
    "max": lambda xs: float(max(xs)),
    "min": lambda xs: float(min(xs)),
}


class UnknownOperationError(ValueError):
    """Raised internally when an aggregation name is not recognised."""

    def __init__(self, operation: str | None) -> None:
        super().__init__(f"Unknown operation: {operation}")
        self.operation = operation


def _convert_case(value: str | None, to_upper_case: bool) -> str:
    if not value:
        return ""
    return value.upper() if to_upper_case else value.lower()


def _failed(
    message: str, stopwatch: Stopwatch, *, unexpected: bool = False
) -> ProcessingResult[T]:
    if unexpected:
        logger.exception(message)
    else:
        logger.warning(message)
    return ProcessingResult.fail(message, stopwatch.stop())


class DataProcessingService:
    """Transform, filter and aggregate collections.

    Args:
        latency: Source of the simulated processing delays used by the async
            operations. Defaults to real, unscaled `asyncio` sleeps.
    """

    def __init__(self, latency: Latency | None = None) -> None:
        self._latency = latency if latency is not None else AsyncioLatency()

    @property
    def latency(self) -> Latency:
        """The latency source used by the async operations."""
        return self._latency

    # ------------------------------------------------------------------
    # Synchronous operations
    # ------------------------------------------------------------------

    def process_numbers(
        self, numbers: Iterable[int] | None, multiplier: int
    ) -> ProcessingResult[list[int]]:
        """Multiply every number by `multiplier`."""
        stopwatch = Stopwatch()
        try:
            if numbers is None:
                return _failed(NUMBERS_REQUIRED, stopwatch)
            processed = [n * multiplier for n in numbers]
            return ProcessingResult.ok(processed, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Error processing numbers: {exc}", stopwatch, unexpected=True
            )

    def process_strings(
        self, strings: Iterable[str | None] | None, to_upper_case: bool = True
    ) -> ProcessingResult[list[str]]:
        """Upper- or lower-case every string; missing or empty items become ""."""
        stopwatch = Stopwatch()
        try:
            if strings is None:
                return _failed(STRINGS_REQUIRED, stopwatch)
            processed = [_convert_case(s, to_upper_case) for s in strings]
            return ProcessingResult.ok(processed, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Error processing strings: {exc}", stopwatch, unexpected=True
            )

    def filter_numbers(
        self, numbers: Iterable[int] | None, min_value: int
    ) -> ProcessingResult[list[int]]:
        """Keep the numbers greater than or equal to `min_value`, in order."""
        stopwatch = Stopwatch()
        try:
            if numbers is None:
                return _failed(NUMBERS_REQUIRED, stopwatch)
            filtered = [n for n in numbers if n >= min_value]
            return ProcessingResult.ok(filtered, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Error filtering numbers: {exc}", stopwatch, unexpected=True
            )

    def process_with_potential_failure(
        self,
        data: Iterable[T] | None,
        should_fail: bool = False,
        failure_message: str = "Simulated processing failure",
    ) -> ProcessingResult[list[T]]:
        """Copy `data` into a list, or fail on request with `failure_message`."""
        stopwatch = Stopwatch()
        try:
            if should_fail:
                return _failed(failure_message, stopwatch)
            if data is None:
                return _failed(DATA_REQUIRED, stopwatch)
            return ProcessingResult.ok(list(data), stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(f"Unexpected error: {exc}", stopwatch, unexpected=True)

    # ------------------------------------------------------------------
    # Asynchronous operations
    # ------------------------------------------------------------------

    async def process_numbers_async(
        self,
        numbers: Iterable[int] | None,
        multiplier: int,
        delay_ms: float = config.PROCESS_NUMBERS_DEFAULT_MS,
    ) -> ProcessingResult[list[int]]:
        """Multiply every number by `multiplier` after `delay_ms`.

        An empty input succeeds immediately without waiting.
        """
        stopwatch = Stopwatch()
        try:
            if numbers is None:
                return _failed(NUMBERS_REQUIRED, stopwatch)
            if not (values := list(numbers)):
                return ProcessingResult.ok([], stopwatch.stop())

            await self._latency.pause(delay_ms)

            processed = [n * multiplier for n in values]
            return ProcessingResult.ok(processed, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Error processing numbers asynchronously: {exc}",
                stopwatch,
                unexpected=True,
            )

    async def process_strings_batch_async(
        self,
        strings: Iterable[str | None] | None,
        batch_size: int = 5,
        to_upper_case: bool = True,
    ) -> ProcessingResult[list[str]]:
        """Case-convert strings in batches of `batch_size`, pausing once per batch."""
        stopwatch = Stopwatch()
        try:
            if strings is None:
                return _failed(STRINGS_REQUIRED, stopwatch)
            if batch_size <= 0:
                return _failed(INVALID_BATCH_SIZE, stopwatch)

            values = list(strings)
            processed: list[str] = []
            for start in range(0, len(values), batch_size):
                await self._latency.pause(config.BATCH_STEP_MS)
                processed.extend(
                    _convert_case(s, to_upper_case)
                    for s in values[start : start + batch_size]
                )
            return ProcessingResult.ok(processed, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Error processing strings in batches: {exc}",
                stopwatch,
                unexpected=True,
            )

    async def aggregate_numbers_async(
        self, numbers: Iterable[int] | None, operation: str | None
    ) -> ProcessingResult[float]:
        """Reduce `numbers` with `operation` (sum, average, max or min).

        The operation name is case-insensitive. An unrecognised name yields a
        failed result mentioning the name.
        """
        stopwatch = Stopwatch()
        try:
            if numbers is None:
                return _failed(NUMBERS_REQUIRED, stopwatch)
            if not (values := list(numbers)):
                return _failed(EMPTY_AGGREGATE, stopwatch)

            await self._latency.pause(config.AGGREGATE_MS)

            if (aggregate := AGGREGATIONS.get((operation or "").lower())) is None:
                raise UnknownOperationError(operation)
            return ProcessingResult.ok(aggregate(values), stopwatch.stop())
        except UnknownOperationError as exc:
            return _failed(f"Error aggregating numbers: {exc}", stopwatch)
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Error aggregating numbers: {exc}", stopwatch, unexpected=True
            )

    async def process_with_potential_failure_async(
        self,
        data: Iterable[T] | None,
        should_fail: bool = False,
        failure_message: str = "Simulated async processing failure",
        delay_ms: float = config.POTENTIAL_FAILURE_DEFAULT_MS,
    ) -> ProcessingResult[list[T]]:
        """Async variant of `process_with_potential_failure`; always waits first."""
        stopwatch = Stopwatch()
        try:
            await self._latency.pause(delay_ms)

            if should_fail:
                return _failed(failure_message, stopwatch)
            if data is None:
                return _failed(DATA_REQUIRED, stopwatch)
            return ProcessingResult.ok(list(data), stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return _failed(
                f"Unexpected async error: {exc}", stopwatch, unexpected=True
            )
