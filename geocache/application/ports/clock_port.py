"""Port interface for time — lets tests drive pacing and TTL deterministically."""

from abc import ABC, abstractmethod


class ClockPort(ABC):
    @abstractmethod
    def monotonic(self) -> float:
        """Seconds from an arbitrary origin; only differences are meaningful."""
        ...

    @abstractmethod
    def now_ms(self) -> int:
        """Wall-clock epoch milliseconds, used for cache timestamps."""
        ...

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        ...
