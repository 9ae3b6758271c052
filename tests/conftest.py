"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio

import pytest

from geocache.application.ports.cache_store_port import CacheStorePort
from geocache.application.ports.clock_port import ClockPort
from geocache.application.ports.reverse_geocoder_port import ReverseGeocoderPort
from geocache.domain.entities.place import CacheEntry, ReverseGeocodeResult

START_MS = 1_700_000_000_000

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeClock(ClockPort):
    """Time only moves when a test (or a sleep) advances it."""

    def __init__(self, start_ms: int = START_MS):
        self._elapsed = 0.0
        self._start_ms = start_ms
        self.sleeps: list[float] = []

    def monotonic(self):
        return self._elapsed

    def now_ms(self):
        return self._start_ms + int(self._elapsed * 1000)

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self._elapsed += seconds
        await asyncio.sleep(0)

    def advance(self, seconds: float) -> None:
        self._elapsed += seconds


class FakeGeocoder(ReverseGeocoderPort):
    def __init__(self, clock: FakeClock, result: ReverseGeocodeResult | None = None):
        self._clock = clock
        self.result = result
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[float, float, str]] = []
        self.dispatched_at: list[float] = []

    async def reverse(self, point, language):
        self.calls.append((point.latitude, point.longitude, language))
        self.dispatched_at.append(self._clock.monotonic())
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.result


class InMemoryCacheStore(CacheStorePort):
    def __init__(self, entries: dict[str, CacheEntry] | None = None):
        self.entries: dict[str, CacheEntry] = dict(entries or {})
        self.loads = 0
        self.gets = 0
        self.puts = 0

    async def load(self):
        self.loads += 1

    def get(self, key):
        self.gets += 1
        return self.entries.get(key)

    async def put(self, key, entry):
        self.puts += 1
        self.entries[key] = entry

    async def save(self):
        pass

    def __len__(self):
        return len(self.entries)


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def new_york():
    return ReverseGeocodeResult(
        city="New York",
        province="New York",
        country="United States",
        display_name="New York, United States",
    )


@pytest.fixture
def fake_geocoder(fake_clock, new_york):
    return FakeGeocoder(fake_clock, result=new_york)


@pytest.fixture
def memory_cache():
    return InMemoryCacheStore()


@pytest.fixture
def nominatim_new_york_payload():
    return {
        "display_name": "New York, United States",
        "address": {
            "city": "New York",
            "state": "New York",
            "country": "United States",
            "country_code": "us",
        },
    }
