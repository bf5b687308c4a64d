"""Settings for the shared calendar, loaded from ``SHARED_CALENDAR_*`` env vars."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared_calendar.domain.models import DEFAULT_MAX_USERS


class Settings(BaseSettings):
    """Registry settings and configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SHARED_CALENDAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    max_users: int = Field(
        default=DEFAULT_MAX_USERS, gt=0, description="Roster capacity"
    )

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json or text)")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
