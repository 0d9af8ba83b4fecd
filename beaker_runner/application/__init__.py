"""
Application layer.

Job description preparation and the prepare/submit/watch runner.
"""

from beaker_runner.application.job_runner import JobRunner
from beaker_runner.application.job_source import FileJobSource, JobSource, StringJobSource

__all__ = ["FileJobSource", "JobRunner", "JobSource", "StringJobSource"]
