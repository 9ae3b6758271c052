"""EXIF GPS conversion — signed decimal GeoPoint from raw EXIF GPS fields."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from geocache.domain.value_objects.geo_point import GeoPoint

SOUTH_REFS = frozenset({"S", "South"})
WEST_REFS = frozenset({"W", "West"})


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def convert_exif_gps_to_decimal(exif: Mapping[str, Any] | None) -> GeoPoint | None:
    """Convert ``GPSLatitude``/``GPSLongitude`` + hemisphere refs into a GeoPoint.

    Values may be numbers or numeric strings; they are taken as absolute
    degrees and signed by ``GPSLatitudeRef`` (S/South) and
    ``GPSLongitudeRef`` (W/West).

    Returns:
        GeoPoint, or None if either coordinate is missing, non-numeric
        or not finite.
    """
    if not exif:
        return None

    latitude = _to_float(exif.get("GPSLatitude"))
    longitude = _to_float(exif.get("GPSLongitude"))
    if latitude is None or longitude is None:
        return None

    lat = -abs(latitude) if exif.get("GPSLatitudeRef") in SOUTH_REFS else abs(latitude)
    lon = -abs(longitude) if exif.get("GPSLongitudeRef") in WEST_REFS else abs(longitude)

    if not math.isfinite(lat) or not math.isfinite(lon):
        return None
    return GeoPoint(latitude=lat, longitude=lon)
