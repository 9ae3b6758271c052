"""Port interface for reverse geocoding coordinates to a place."""

from abc import ABC, abstractmethod

from geocache.domain.entities.place import ReverseGeocodeResult
from geocache.domain.value_objects.geo_point import GeoPoint


class ReverseGeocoderPort(ABC):
    @abstractmethod
    async def reverse(self, point: GeoPoint, language: str) -> ReverseGeocodeResult | None:
        """Resolve lat/lon coordinates to city/province/country.

        Makes exactly one provider request. Returns None if the request
        fails (HTTP error, transport error, unparseable body).
        """
        ...
