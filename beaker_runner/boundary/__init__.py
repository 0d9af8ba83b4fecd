"""
Boundary layer for external system integrations.

Handles all interactions with the remote Beaker service.
"""
