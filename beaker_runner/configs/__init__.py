"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from beaker_runner.configs.beaker import BeakerSettings
from beaker_runner.configs.settings import Settings, get_settings
from beaker_runner.configs.watch import WatchSettings

__all__ = ["BeakerSettings", "Settings", "WatchSettings", "get_settings"]
