"""Place entities — reverse geocoding results and their cache records."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Expected string or null, got {type(value).__name__}")
    return value or None


@dataclass(frozen=True)
class ReverseGeocodeResult:
    city: str | None = None
    province: str | None = None
    country: str | None = None
    display_name: str | None = None

    @classmethod
    def negative(cls) -> ReverseGeocodeResult:
        """All-null result, used for failed or unresolvable lookups."""
        return cls()

    def is_negative(self) -> bool:
        return (
            self.city is None
            and self.province is None
            and self.country is None
            and self.display_name is None
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "city": self.city,
            "province": self.province,
            "country": self.country,
            "displayName": self.display_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReverseGeocodeResult:
        if not isinstance(data, dict):
            raise TypeError("Result must be a JSON object")
        return cls(
            city=_str_or_none(data.get("city")),
            province=_str_or_none(data.get("province")),
            country=_str_or_none(data.get("country")),
            display_name=_str_or_none(data.get("displayName")),
        )


@dataclass(frozen=True)
class CacheEntry:
    """A cached result plus the instant (epoch millis) it was written."""

    value: ReverseGeocodeResult
    timestamp_ms: int

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        return now_ms - self.timestamp_ms < ttl_ms

    def to_dict(self) -> dict[str, Any]:
        return {"v": self.value.to_dict(), "t": self.timestamp_ms}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CacheEntry:
        """Parse a persisted ``{"v": {...}, "t": millis}`` record.

        Raises:
            KeyError, TypeError, ValueError: if the record is malformed.
        """
        if not isinstance(data, dict):
            raise TypeError("Cache entry must be a JSON object")
        timestamp = data["t"]
        if (
            isinstance(timestamp, bool)
            or not isinstance(timestamp, (int, float))
            or not math.isfinite(timestamp)
        ):
            raise ValueError(f"Invalid cache timestamp: {timestamp!r}")
        return cls(value=ReverseGeocodeResult.from_dict(data["v"]), timestamp_ms=int(timestamp))
