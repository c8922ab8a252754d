"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from debitor_store.configs.base import BaseSettings
from debitor_store.configs.database import DatabaseSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached after the first call.
    Environment variables and .env are read once.

    Returns:
        Settings: Application settings instance

    Usage:
        from debitor_store.configs import get_settings
        settings = get_settings()
    """
    return Settings()
