"""CacheKey value object — rounded coordinates + language tag.

Points are rounded to 3 decimals (~111 m at the equator), so nearby
points fold onto the same cache entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from geocache.domain.value_objects.geo_point import GeoPoint

COORD_DECIMALS = 3
DEFAULT_LANGUAGE = "en"

_QUANTUM = Decimal(1).scaleb(-COORD_DECIMALS)
_ROUNDING_PRECISION = 400


def round_coord(value: float) -> Decimal:
    """Round half away from zero on the decimal representation of *value*.

    ``repr`` is used instead of the binary float so that ``0.0005`` rounds
    to ``0.001`` the way a person reading the number would expect.
    """
    # Default 28-digit precision overflows from ~1e25; the largest double has 309 digits
    with localcontext() as ctx:
        ctx.prec = _ROUNDING_PRECISION
        return Decimal(repr(float(value))).quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def format_coord(value: Decimal) -> str:
    """Render without trailing zeros: ``40.710`` → ``40.71``, ``-0.000`` → ``0``."""
    if value == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = _ROUNDING_PRECISION
        return format(value.normalize(), "f")


def normalize_language(language: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    """Strip the tag; empty or missing tags fall back to *default*."""
    language = (language or "").strip()
    return language or default


@dataclass(frozen=True)
class CacheKey:
    latitude: str
    longitude: str
    language: str

    @classmethod
    def from_point(cls, point: GeoPoint, language: str | None = None) -> CacheKey | None:
        """Build the key for *point*, or None if the point is not finite."""
        if not point.is_valid():
            return None
        return cls(
            latitude=format_coord(round_coord(point.latitude)),
            longitude=format_coord(round_coord(point.longitude)),
            language=normalize_language(language),
        )

    @property
    def value(self) -> str:
        return f"{self.latitude},{self.longitude}@{self.language}"

    def rounded_point(self) -> GeoPoint:
        """The rounded coordinates; this is what gets sent to the provider."""
        return GeoPoint(latitude=float(self.latitude), longitude=float(self.longitude))

    def __str__(self) -> str:
        return self.value
