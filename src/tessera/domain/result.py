"""Generic envelope describing the outcome of a service operation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ProcessingResult(Generic[T]):
    """Outcome of a single operation: success flag, payload, error text and duration.

    Expected failures (bad input, not found, duplicates) are reported through a
    failed envelope rather than raised. Callers must check `success` before
    touching `data`.

    Use `ProcessingResult.ok` and `ProcessingResult.fail` to build instances.

    Raises:
        ValueError: If constructed directly with a success flag that contradicts
            the payload or error message.
    """

    success: bool
    data: T | None = None
    error_message: str = ""
    processing_time: timedelta = timedelta(0)

    def __post_init__(self) -> None:
        if self.success and self.error_message:
            raise ValueError("A successful result cannot carry an error message.")
        if not self.success and self.data is not None:
            raise ValueError("A failed result cannot carry data.")

    @classmethod
    def ok(cls, data: T, processing_time: timedelta) -> ProcessingResult[T]:
        """Build a successful result carrying `data`."""
        return cls(success=True, data=data, processing_time=processing_time)

    @classmethod
    def fail(
        cls, error_message: str | None, processing_time: timedelta
    ) -> ProcessingResult[T]:
        """Build a failed result; a missing message is stored as an empty string."""
        return cls(
            success=False,
            error_message=error_message or "",
            processing_time=processing_time,
        )

    @property
    def processing_time_ms(self) -> float:
        """Elapsed time in (fractional) milliseconds."""
        return self.processing_time / timedelta(milliseconds=1)

    def __str__(self) -> str:
        if self.success:
            return (
                f"ProcessingResult {{ Success: {self.success}, Data: {self.data}, "
                f"ProcessingTime: {self.processing_time_ms}ms }}"
            )
        return (
            f"ProcessingResult {{ Success: {self.success}, "
            f"ErrorMessage: {self.error_message}, "
            f"ProcessingTime: {self.processing_time_ms}ms }}"
        )
