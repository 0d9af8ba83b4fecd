"""
Job runner orchestrator.

Sequences job preparation, submission and the blocking watch, and maps
each failure to a run outcome:
PREPARING → SUBMITTED → WATCHING → SUCCEEDED / FAILED / CANCELLED

Dependencies: beaker_runner.application.job_source, beaker_runner.core.watch,
    beaker_runner.boundary.beaker
System role: Build step orchestration (coordinates only)
"""

import logging
import threading
from pathlib import Path

from beaker_runner.application.job_source import JobSource
from beaker_runner.boundary.beaker.client import RemoteJobClient
from beaker_runner.configs.watch import WatchSettings
from beaker_runner.core.exceptions import PreparationError, QueryError, SubmissionError
from beaker_runner.core.watch import (
    StatusObserver,
    StatusPoller,
    StopReason,
    WaitCoordinator,
    WaitResult,
    WatchState,
)
from beaker_runner.models.job import Job, RunnerState, RunOutcome, RunResult
from beaker_runner.models.task_status import TaskStatus
from beaker_runner.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class JobRunner:
    """
    Run one Beaker job to completion.

    Manages exactly one job per run() call; submission is never retried.
    cancel() may be called from another thread (e.g. a signal handler).
    """

    def __init__(
        self,
        client: RemoteJobClient,
        job_source: JobSource,
        settings: WatchSettings | None = None,
        observer: StatusObserver | None = None,
        initial_status: TaskStatus | None = TaskStatus.NEW,
    ) -> None:
        """
        Initialize job runner.

        Args:
            client: Remote job service used to schedule and query the job
            job_source: Provider of the job description
            settings: Poll cadence, deadline and failure ceiling (defaults if None)
            observer: Called with (previous, current) on every status change
            initial_status: Status assumed before the first poll
        """
        self._client = client
        self._job_source = job_source
        self._settings = settings or WatchSettings()
        self._observer = observer
        self._initial_status = initial_status

        self._lock = threading.Lock()
        self._state = RunnerState.PREPARING
        self._transitions: list[RunnerState] = [RunnerState.PREPARING]
        self._coordinator: WaitCoordinator | None = None
        self._cancel_requested = False
        self._job: Job | None = None

    @property
    def state(self) -> RunnerState:
        with self._lock:
            return self._state

    @property
    def transitions(self) -> list[RunnerState]:
        """Every state the runner has entered, in order."""
        with self._lock:
            return list(self._transitions)

    @property
    def job(self) -> Job | None:
        return self._job

    def run(self, workspace: Path) -> RunResult:
        """
        Prepare, submit and wait for the job.

        Args:
            workspace: Directory the job file is written to / read from

        Returns:
            RunResult: Outcome with job id, final status and diagnostics
        """
        try:
            job_xml = self._job_source.prepare_job_file(Path(workspace))
        except PreparationError as e:
            log_exception_with_context(logger, "run - Job preparation failed", e, stage="preparing")
            return self._fail(e)

        with self._lock:
            cancel_requested = self._cancel_requested
        if cancel_requested:
            logger.info("run - Cancelled before submission, nothing scheduled")
            self._enter(RunnerState.CANCELLED)
            return RunResult(outcome=RunOutcome.CANCELLED)

        self._enter(RunnerState.SUBMITTED)
        try:
            logger.debug("run - Scheduling Beaker job from file %s", self._job_source.default_job_path)
            job = self._client.submit_job(job_xml)
        except SubmissionError as e:
            log_exception_with_context(logger, "run - Job submission failed", e, stage="submitted")
            return self._fail(e)

        self._job = job
        return self._watch(job)

    def cancel(self) -> None:
        """Abort the wait; before submission the job is never scheduled."""
        with self._lock:
            self._cancel_requested = True
            coordinator = self._coordinator
        if coordinator is not None:
            coordinator.cancel()

    def _watch(self, job: Job) -> RunResult:
        state = WatchState(initial_status=self._initial_status)
        poller = StatusPoller(
            job,
            state,
            initial_delay=self._settings.initial_delay,
            period=self._settings.period,
            max_consecutive_failures=self._settings.max_consecutive_failures,
            stop_join_timeout=self._settings.stop_join_timeout,
        )
        coordinator = WaitCoordinator(
            state,
            poller,
            observer=self._observer,
            timeout=self._settings.timeout,
        )

        with self._lock:
            self._coordinator = coordinator
            cancel_requested = self._cancel_requested
            self._state = RunnerState.WATCHING
            self._transitions.append(RunnerState.WATCHING)

        if cancel_requested:
            state.stop(StopReason.CANCELLED)
        else:
            poller.start()

        log_with_context(logger, logging.INFO, f"Waiting for job {job.job_id}", job_id=job.job_id)
        try:
            result = coordinator.wait()
        finally:
            with self._lock:
                self._coordinator = None

        return self._finish(job, result)

    def _finish(self, job: Job, result: WaitResult) -> RunResult:
        if result.cancelled:
            self._enter(RunnerState.CANCELLED)
            outcome = RunOutcome.CANCELLED
            error = "Wait deadline expired" if result.reason == StopReason.TIMED_OUT else None
            error_type = None
        elif result.reason == StopReason.UNREACHABLE:
            self._enter(RunnerState.FAILED)
            outcome = RunOutcome.FAILED
            error = str(result.error) if result.error else "Beaker server unreachable"
            error_type = type(result.error).__name__ if result.error else QueryError.__name__
        elif result.status is not None and result.status.is_success:
            self._enter(RunnerState.SUCCEEDED)
            outcome = RunOutcome.SUCCEEDED
            error = None
            error_type = None
        else:
            self._enter(RunnerState.FAILED)
            outcome = RunOutcome.FAILED
            status = result.status.value if result.status else None
            error = f"Job {job.job_id} finished with status {status}"
            error_type = None

        log_with_context(
            logger,
            logging.INFO,
            f"Job {job.job_id} {outcome.value}",
            job_id=job.job_id,
            outcome=outcome,
            final_status=result.status,
        )
        return RunResult(
            outcome=outcome,
            job_id=job.job_id,
            final_status=result.status,
            previous_status=result.previous_status,
            error=error,
            error_type=error_type,
        )

    def _fail(self, exc: Exception) -> RunResult:
        self._enter(RunnerState.FAILED)
        return RunResult(
            outcome=RunOutcome.FAILED,
            error=str(exc),
            error_type=type(exc).__name__,
        )

    def _enter(self, state: RunnerState) -> None:
        with self._lock:
            self._state = state
            self._transitions.append(state)
