"""Port interface for the persistent geocode cache."""

from abc import ABC, abstractmethod

from geocache.domain.entities.place import CacheEntry


class CacheStorePort(ABC):
    @abstractmethod
    async def load(self) -> None:
        """Load persisted entries. Idempotent; never raises on I/O errors."""
        ...

    @abstractmethod
    def get(self, key: str) -> CacheEntry | None:
        ...

    @abstractmethod
    async def put(self, key: str, entry: CacheEntry) -> None:
        """Store *entry* in memory and flush the whole cache."""
        ...

    @abstractmethod
    async def save(self) -> None:
        """Best-effort flush; write failures are logged, not raised."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...
