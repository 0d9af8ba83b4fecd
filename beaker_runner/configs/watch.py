"""
Job watch configuration settings.

Poll cadence, optional wait deadline and the transient failure ceiling.

Dependencies: pydantic, pydantic_settings
System role: Watcher tuning
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from beaker_runner.configs.base import BaseSettings
from beaker_runner.core.watch.status_poller import DEFAULT_INITIAL_DELAY, DEFAULT_PERIOD


class WatchSettings(BaseSettings):
    """Status polling and waiting configuration."""

    model_config = SettingsConfigDict(env_prefix="BEAKER_WATCH_")

    initial_delay: float = Field(
        default=DEFAULT_INITIAL_DELAY,
        gt=0,
        description="Seconds before the first status poll",
    )
    period: float = Field(
        default=DEFAULT_PERIOD,
        gt=0,
        description="Seconds between consecutive status polls",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Give up waiting after this many seconds (None waits forever)",
    )
    max_consecutive_failures: int | None = Field(
        default=None,
        ge=1,
        description="Fail the run after this many failed polls in a row (None retries forever)",
    )
    stop_join_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for an in-flight poll when stopping",
    )
