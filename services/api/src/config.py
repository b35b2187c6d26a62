"""API service configuration.

Requires: DATABASE_URL
Optional: DATABASE_ECHO, LOG_FORMAT, LOG_LEVEL
"""

from functools import lru_cache

from pydantic import Field

from shared.config import BaseSettings, database_url_field


class Settings(BaseSettings):
    """API service settings."""

    service_name: str = "api"

    # Required
    database_url: str = database_url_field(required=True)

    database_echo: bool = Field(default=False, description="Log emitted SQL statements")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Validates required env vars on first call.
    Raises ValidationError if DATABASE_URL is missing.
    """
    return Settings()
