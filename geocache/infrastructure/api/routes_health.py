"""Health check endpoint."""

from fastapi import APIRouter, Depends

from geocache.application.use_cases.reverse_geocode import ReverseGeocodeUseCase
from geocache.infrastructure.api.dependencies import get_reverse_geocode_uc

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(uc: ReverseGeocodeUseCase = Depends(get_reverse_geocode_uc)):
    """Report service status and cache / queue sizes."""
    return {
        "status": "ok",
        "service": "geocache - cached reverse geocoding",
        **uc.stats(),
    }
