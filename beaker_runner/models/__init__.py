"""
Domain models for the Beaker job runner.

Exports: TaskStatus, Job, RunnerState, RunOutcome, RunResult
"""

from beaker_runner.models.job import Job, RunnerState, RunOutcome, RunResult
from beaker_runner.models.task_status import TaskStatus

__all__ = ["Job", "RunnerState", "RunOutcome", "RunResult", "TaskStatus"]
