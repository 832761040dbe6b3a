"""Elapsed-time measurement for result envelopes."""

import time
from datetime import timedelta

# pylint: disable=too-few-public-methods


class Stopwatch:
    """Monotonic stopwatch started on construction.

    `elapsed` keeps running until `stop()` is called, after which it is frozen.
    """

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._stop: float | None = None

    def stop(self) -> timedelta:
        """Stop the stopwatch (idempotent) and return the elapsed time."""
        if self._stop is None:
            self._stop = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> timedelta:
        """Time since start, or until `stop()` if it has been called."""
        end = self._stop if self._stop is not None else time.perf_counter()
        return timedelta(seconds=end - self._start)
