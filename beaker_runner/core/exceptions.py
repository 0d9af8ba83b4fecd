"""
Exception hierarchy for the Beaker job runner.

Provides layered exception structure for preparation, submission and
status query failures. All exceptions include context for debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the runner
"""

from typing import Any


class BeakerRunnerException(Exception):
    """Base exception for all Beaker runner errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PreparationError(BeakerRunnerException):
    """Raised when the job description cannot be produced or located."""

    def __init__(
        self,
        message: str,
        job_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize preparation error.

        Args:
            message: Error message
            job_path: Path of the job file that could not be prepared
            details: Additional context
        """
        details = details or {}
        if job_path:
            details["job_path"] = job_path
        super().__init__(message, details)


class SubmissionError(BeakerRunnerException):
    """Raised when the remote service rejects a job or is unreachable on submit."""

    pass


class QueryError(BeakerRunnerException):
    """Raised when a single status query fails to reach the remote service."""

    def __init__(
        self,
        message: str,
        job_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize query error.

        Args:
            message: Error message
            job_id: Identifier of the job being queried
            details: Additional context
        """
        details = details or {}
        if job_id:
            details["job_id"] = job_id
        super().__init__(message, details)


class AuthenticationError(BeakerRunnerException):
    """Raised when the remote service rejects the configured credentials."""

    def __init__(
        self,
        message: str,
        login: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if login:
            details["login"] = login
        super().__init__(message, details)
