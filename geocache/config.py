"""Application configuration via Pydantic Settings.

NOTE: Every field maps to an explicit environment variable name
(GEOCODER_*, GEOCODE_CACHE_*) to avoid silent misconfiguration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Provider
    geocoder_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        validation_alias="GEOCODER_BASE_URL",
    )
    geocoder_user_agent: str = Field(
        default="geocache/0.1",
        validation_alias="GEOCODER_USER_AGENT",
    )
    geocoder_language: str = Field(default="en", validation_alias="GEOCODER_LANGUAGE")
    geocoder_timeout: float = Field(default=10.0, gt=0, validation_alias="GEOCODER_TIMEOUT")
    geocoder_min_interval: float = Field(
        default=1.0, ge=0, validation_alias="GEOCODER_MIN_INTERVAL"
    )

    # Cache
    cache_file: str = Field(
        default="data/.geocode-cache.json",
        validation_alias="GEOCODE_CACHE_FILE",
    )
    cache_ttl_days: int = Field(default=365, gt=0, validation_alias="GEOCODE_CACHE_TTL_DAYS")

    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
