"""Interface for simulated I/O latency."""

import abc

# pylint: disable=too-few-public-methods


class Latency(abc.ABC):
    """Contract for a latency source.

    Services await `pause` wherever a real datastore call would block. Every
    implementation must suspend the calling coroutine at least once so that
    concurrently scheduled operations can interleave.
    """

    @abc.abstractmethod
    async def pause(self, milliseconds: float) -> None:
        """Suspend the caller for the nominal duration `milliseconds`."""
