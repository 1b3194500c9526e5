"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from drinkr.domain.analytics import TimeRange

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    default_timezone: str = "UTC"
    default_time_range: TimeRange = TimeRange.ONE_MONTH
    analytics_cache_ttl_seconds: int = 60
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("analytics_cache_ttl_seconds")
    @classmethod
    def _non_negative_ttl(cls, value: int) -> int:
        if value < 0:
            raise ValueError("analytics_cache_ttl_seconds must be >= 0")
        return value
