"""
Beaker server configuration settings.

Connection and credential settings for the Beaker XML-RPC endpoint.
Passed explicitly to the client at construction; the watcher never reads them.

Dependencies: pydantic, pydantic_settings
System role: Remote service configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from beaker_runner.configs.base import BaseSettings


class BeakerSettings(BaseSettings):
    """Beaker server connection configuration."""

    model_config = SettingsConfigDict(env_prefix="BEAKER_")

    url: str = Field(
        default="http://localhost/RPC2",
        description="Beaker XML-RPC endpoint URL",
    )
    login: str = Field(default="", description="Beaker user name")
    password: str = Field(default="", description="Beaker password")
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Socket timeout for a single XML-RPC call in seconds",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.login)
