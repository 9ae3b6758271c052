"""Reverse geocoding endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocache.application.use_cases.reverse_geocode import ReverseGeocodeUseCase
from geocache.infrastructure.api.dependencies import get_reverse_geocode_uc

router = APIRouter(tags=["geocoding"])


@router.get("/reverse-geocode")
async def reverse_geocode(
    lat: float = Query(..., description="Latitude in decimal degrees"),
    lon: float = Query(..., description="Longitude in decimal degrees"),
    lang: str | None = Query(None, description="Language tag, defaults to the configured one"),
    uc: ReverseGeocodeUseCase = Depends(get_reverse_geocode_uc),
):
    """Resolve coordinates to city / province / country.

    Provider failures are not errors: they come back as an all-null place.
    """
    result = await uc.reverse_geocode(lat, lon, lang)
    if result is None:
        raise HTTPException(status_code=422, detail="Coordinates must be finite numbers")
    return result.to_dict()
