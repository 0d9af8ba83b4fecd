"""
Job domain models and schemas.

Job handle returned by submission plus the outward run result reported to
the surrounding build system.

Dependencies: pydantic
System role: Job lifecycle contracts
"""

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from beaker_runner.models.task_status import TaskStatus

if TYPE_CHECKING:
    from beaker_runner.boundary.beaker.client import RemoteJobClient


@dataclass(frozen=True)
class Job:
    """
    Handle to a job scheduled on the remote service.

    Attributes:
        job_id: Remote job identifier (e.g. "J:1234"), immutable
        client: Client that scheduled the job and is used to query it
    """

    job_id: str
    client: "RemoteJobClient" = field(repr=False, compare=False)

    def query_status(self) -> TaskStatus:
        """Fetch the current remote status of this job."""
        return self.client.query_status(self)


class RunnerState(str, enum.Enum):
    """
    Job runner lifecycle states.

    PREPARING: job description is being written and verified
    SUBMITTED: job description handed to the remote service
    WATCHING: job scheduled; poller and coordinator are running
    SUCCEEDED / FAILED / CANCELLED: terminal outcomes of the run
    """

    PREPARING = "preparing"
    SUBMITTED = "submitted"
    WATCHING = "watching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class RunOutcome(str, enum.Enum):
    """Structured outcome of one runner invocation."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class RunResult(BaseModel):
    """Result of one prepare/submit/watch run."""

    outcome: RunOutcome
    job_id: str | None = Field(default=None, description="Remote job identifier, if scheduled")
    final_status: TaskStatus | None = Field(
        default=None,
        description="Last status observed on the remote service",
    )
    previous_status: TaskStatus | None = Field(
        default=None,
        description="Status held before the last observed change",
    )
    error: str | None = Field(default=None, description="Diagnostic message for failed runs")
    error_type: str | None = Field(
        default=None,
        description="Exception class behind the failure (PreparationError, SubmissionError, QueryError)",
    )

    @property
    def succeeded(self) -> bool:
        return self.outcome == RunOutcome.SUCCEEDED
