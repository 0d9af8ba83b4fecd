"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the runner
"""

from functools import lru_cache

from pydantic import Field

from beaker_runner.configs.base import BaseSettings
from beaker_runner.configs.beaker import BeakerSettings
from beaker_runner.configs.watch import WatchSettings


class Settings(BaseSettings):
    """Unified runner settings aggregating all config modules."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    beaker: BeakerSettings = Field(default_factory=BeakerSettings)
    watch: WatchSettings = Field(default_factory=WatchSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get runner settings singleton.

    Environment variables are loaded once, on first call.

    Returns:
        Settings: Runner settings instance

    Usage:
        from beaker_runner.configs import get_settings
        settings = get_settings()
    """
    return Settings()
