"""geocache — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from geocache.config import settings
from geocache.infrastructure.api.dependencies import shutdown_reverse_geocode_uc
from geocache.infrastructure.api.routes_geocode import router as geocode_router
from geocache.infrastructure.api.routes_health import router as health_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Geocode cache file: %s", settings.cache_file)
    yield
    await shutdown_reverse_geocode_uc()


def create_app() -> FastAPI:
    app = FastAPI(
        title="geocache",
        description="Cached, rate-limited reverse geocoding",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(geocode_router, prefix="/api")

    return app


app = create_app()
