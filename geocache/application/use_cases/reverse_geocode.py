"""ReverseGeocodeUseCase — cache → coalesce → rate limit → provider → cache."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from geocache.application.ports.cache_store_port import CacheStorePort
from geocache.application.ports.clock_port import ClockPort
from geocache.application.ports.reverse_geocoder_port import ReverseGeocoderPort
from geocache.application.scheduling.inflight_registry import InFlightRegistry
from geocache.application.scheduling.rate_limiter import RateLimitedScheduler
from geocache.domain.entities.place import CacheEntry, ReverseGeocodeResult
from geocache.domain.value_objects.cache_key import (
    DEFAULT_LANGUAGE,
    CacheKey,
    normalize_language,
)
from geocache.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

CACHE_TTL = timedelta(days=365)


class ReverseGeocodeUseCase:
    """Resolves coordinates to a place, at most one provider call per location.

    Owns the in-flight table and shares the cache store, scheduler and
    clock passed in. Never raises for provider or cache failures: invalid
    coordinates give None, failed lookups give an all-null result which
    is cached like any other.
    """

    def __init__(
        self,
        geocoder: ReverseGeocoderPort,
        cache: CacheStorePort,
        scheduler: RateLimitedScheduler,
        clock: ClockPort,
        language: str = DEFAULT_LANGUAGE,
        ttl: timedelta = CACHE_TTL,
    ):
        self._geocoder = geocoder
        self._cache = cache
        self._scheduler = scheduler
        self._clock = clock
        self._language = normalize_language(language)
        self._ttl_ms = int(ttl.total_seconds() * 1000)
        self._inflight: InFlightRegistry[ReverseGeocodeResult] = InFlightRegistry()

    async def execute(self, latitude: float, longitude: float) -> ReverseGeocodeResult | None:
        """Reverse geocode using the configured language."""
        return await self.reverse_geocode(latitude, longitude)

    async def reverse_geocode(
        self, latitude: float, longitude: float, language: str | None = None
    ) -> ReverseGeocodeResult | None:
        """Resolve a point to city/province/country.

        Steps:
        1. Validate + round to the cache key (None on NaN / ±inf)
        2. Return a fresh cache entry (positive or negative)
        3. Join a pending fetch for the same key, or schedule a new one
        """
        key = CacheKey.from_point(
            GeoPoint(latitude=latitude, longitude=longitude),
            normalize_language(language, self._language),
        )
        if key is None:
            logger.debug("Rejecting non-finite coordinates (%r, %r)", latitude, longitude)
            return None

        await self._cache.load()

        # No await between the cache check and the registry insert
        entry = self._cache.get(key.value)
        if entry is not None and entry.is_fresh(self._clock.now_ms(), self._ttl_ms):
            logger.debug("Cache hit for %s", key)
            return entry.value

        future = self._inflight.get_or_schedule(
            key.value,
            lambda: self._scheduler.enqueue(lambda: self._fetch_and_store(key)),
        )
        # Shielded so one cancelled caller can't cancel the shared fetch
        return await asyncio.shield(future)

    async def _fetch_and_store(self, key: CacheKey) -> ReverseGeocodeResult:
        try:
            result = await self._geocoder.reverse(key.rounded_point(), key.language)
        except Exception:
            logger.exception("Unexpected error while reverse geocoding %s", key)
            result = None

        if result is None:
            logger.warning("Reverse geocoding failed for %s, caching negative result", key)
            result = ReverseGeocodeResult.negative()

        # Negative results get the full TTL too, to avoid retry storms
        await self._cache.put(key.value, CacheEntry(value=result, timestamp_ms=self._clock.now_ms()))
        return result

    def stats(self) -> dict[str, int]:
        return {
            "cache_entries": len(self._cache),
            "in_flight": len(self._inflight),
            "queued": self._scheduler.pending,
        }

    async def aclose(self) -> None:
        await self._scheduler.aclose()
