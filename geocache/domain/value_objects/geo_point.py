"""GeoPoint value object — immutable (lat, lon) pair."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Both coordinates must be finite real numbers (no NaN / ±inf)."""
        try:
            return math.isfinite(self.latitude) and math.isfinite(self.longitude)
        except TypeError:
            return False
