"""Dependency wiring — builds the reverse geocoding service from settings."""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

from geocache.adapters.cache.json_file_store import JsonFileCacheStore
from geocache.adapters.clock.system_clock import SystemClock
from geocache.adapters.geocoder.nominatim_adapter import NominatimAdapter
from geocache.application.scheduling.rate_limiter import RateLimitedScheduler
from geocache.application.use_cases.reverse_geocode import ReverseGeocodeUseCase
from geocache.config import Settings, settings

logger = logging.getLogger(__name__)


def build_reverse_geocode_uc(
    config: Settings | None = None, cache_file: str | Path | None = None
) -> ReverseGeocodeUseCase:
    """Construct a fully wired use case. Each call owns a fresh store and queue."""
    config = config or settings
    clock = SystemClock()
    cache_path = Path(cache_file or config.cache_file)
    logger.debug("Geocode cache file: %s", cache_path)
    return ReverseGeocodeUseCase(
        geocoder=NominatimAdapter(
            user_agent=config.geocoder_user_agent,
            base_url=config.geocoder_base_url,
            timeout=config.geocoder_timeout,
        ),
        cache=JsonFileCacheStore(cache_path),
        scheduler=RateLimitedScheduler(clock, min_interval=config.geocoder_min_interval),
        clock=clock,
        language=config.geocoder_language,
        ttl=timedelta(days=config.cache_ttl_days),
    )


# Process-wide instance: one cache file, one rate limit
_reverse_geocode_uc: ReverseGeocodeUseCase | None = None


def get_reverse_geocode_uc() -> ReverseGeocodeUseCase:
    global _reverse_geocode_uc
    if _reverse_geocode_uc is None:
        _reverse_geocode_uc = build_reverse_geocode_uc()
    return _reverse_geocode_uc


async def shutdown_reverse_geocode_uc() -> None:
    global _reverse_geocode_uc
    if _reverse_geocode_uc is not None:
        await _reverse_geocode_uc.aclose()
        _reverse_geocode_uc = None
