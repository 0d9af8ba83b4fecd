"""
Core business logic module.

Contains the exception hierarchy and the job-completion watcher.
"""

from beaker_runner.core.exceptions import (
    AuthenticationError,
    BeakerRunnerException,
    PreparationError,
    QueryError,
    SubmissionError,
)

__all__ = [
    "AuthenticationError",
    "BeakerRunnerException",
    "PreparationError",
    "QueryError",
    "SubmissionError",
]
