"""
Beaker server integration.

Exports: BeakerClient, RemoteJobClient
"""

from beaker_runner.boundary.beaker.client import BeakerClient, RemoteJobClient

__all__ = ["BeakerClient", "RemoteJobClient"]
