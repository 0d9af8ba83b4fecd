"""
Observability module.

Provides logging configuration and safe structured logging helpers.
"""

from beaker_runner.observability.logger import configure_logging

__all__ = ["configure_logging"]
