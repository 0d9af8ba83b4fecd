"""
Beaker job runner.

Submits a job to a Beaker server and blocks until it reaches a terminal
status, reporting each status change on the way.
"""

__version__ = "0.1.0"
