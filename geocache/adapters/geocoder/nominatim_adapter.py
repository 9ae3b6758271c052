"""Nominatim reverse geocoder adapter — implements ReverseGeocoderPort."""

from __future__ import annotations

import logging

import httpx

from geocache.application.ports.reverse_geocoder_port import ReverseGeocoderPort
from geocache.config import settings
from geocache.domain.entities.place import ReverseGeocodeResult
from geocache.domain.policies.address_fields import extract_place
from geocache.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


class NominatimAdapter(ReverseGeocoderPort):
    """Single-attempt Nominatim ``/reverse`` lookups.

    Pacing, caching and de-duplication live in the use case; this adapter
    only builds the request and parses the response.
    """

    def __init__(
        self,
        user_agent: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._user_agent = user_agent or settings.geocoder_user_agent
        self._base_url = (base_url or settings.geocoder_base_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.geocoder_timeout
        self._client = client

    @property
    def reverse_url(self) -> str:
        return f"{self._base_url}/reverse"

    async def reverse(self, point: GeoPoint, language: str) -> ReverseGeocodeResult | None:
        """Query Nominatim. Returns None on any HTTP, transport or parse failure."""
        try:
            if self._client is not None:
                response = await self._get(self._client, point, language)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._get(client, point, language)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Nominatim returned HTTP %d for (%f, %f)",
                e.response.status_code, point.latitude, point.longitude,
            )
            return None
        except httpx.HTTPError as e:
            logger.warning(
                "Nominatim request failed for (%f, %f): %r",
                point.latitude, point.longitude, e,
            )
            return None
        except ValueError:
            logger.warning(
                "Nominatim returned malformed JSON for (%f, %f)",
                point.latitude, point.longitude,
            )
            return None

        if not isinstance(data, dict):
            logger.warning(
                "Nominatim returned unexpected payload for (%f, %f): %s",
                point.latitude, point.longitude, type(data).__name__,
            )
            return None

        result = extract_place(data)
        logger.info(
            "Nominatim resolved (%f, %f) → %s, %s, %s",
            point.latitude, point.longitude, result.city, result.province, result.country,
        )
        return result

    async def _get(
        self, client: httpx.AsyncClient, point: GeoPoint, language: str
    ) -> httpx.Response:
        params: dict[str, str | float] = {
            "lat": point.latitude,
            "lon": point.longitude,
            "format": "json",
        }
        headers = {
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }
        if language:
            params["accept-language"] = language
            headers["Accept-Language"] = language
        return await client.get(
            self.reverse_url,
            params=params,
            headers=headers,
            timeout=self._timeout,
        )
