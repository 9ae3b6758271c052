"""InFlightRegistry — coalesce concurrent lookups for the same cache key."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InFlightRegistry(Generic[T]):
    """At most one pending fetch per key at any instant.

    ``get_or_schedule`` does its check-and-insert without awaiting, so under
    asyncio no other coroutine can slip in between the two.
    """

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Future[T]] = {}

    def get_or_schedule(
        self, key: str, start_fetch: Callable[[], asyncio.Future[T]]
    ) -> asyncio.Future[T]:
        existing = self._pending.get(key)
        if existing is not None:
            logger.debug("Joining in-flight fetch for %s", key)
            return existing

        future = start_fetch()
        self._pending[key] = future
        future.add_done_callback(lambda f: self._discard(key, f))
        return future

    def _discard(self, key: str, future: asyncio.Future[T]) -> None:
        if self._pending.get(key) is future:
            del self._pending[key]

    def __contains__(self, key: str) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)
