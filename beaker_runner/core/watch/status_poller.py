"""
Periodic remote status poller.

Queries the remote job status at a fixed rate on a daemon thread and
publishes changes into the shared WatchState.

Dependencies: threading, time (stdlib)
System role: Writer side of the job-completion watcher
"""

import logging
import threading
import time

from beaker_runner.core.exceptions import QueryError
from beaker_runner.core.watch.watch_state import StopReason, WatchState
from beaker_runner.models.job import Job

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_DELAY = 5.0
DEFAULT_PERIOD = 30.0


class StatusPoller:
    """Fixed-rate status poller bound to one job and one watch state."""

    def __init__(
        self,
        job: Job,
        state: WatchState,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        period: float = DEFAULT_PERIOD,
        max_consecutive_failures: int | None = None,
        stop_join_timeout: float = 5.0,
    ) -> None:
        """
        Initialize status poller.

        Args:
            job: Job handle whose status is polled
            state: Shared watch state to publish changes into
            initial_delay: Seconds before the first poll
            period: Seconds between the starts of consecutive polls
            max_consecutive_failures: Give up after this many failed polls
                in a row (None retries forever)
            stop_join_timeout: Seconds stop() waits for an in-flight poll
        """
        if initial_delay < 0:
            raise ValueError("initial_delay must not be negative")
        if period <= 0:
            raise ValueError("period must be positive")
        if max_consecutive_failures is not None and max_consecutive_failures < 1:
            raise ValueError("max_consecutive_failures must be at least 1")

        self._job = job
        self._state = state
        self._initial_delay = initial_delay
        self._period = period
        self._max_consecutive_failures = max_consecutive_failures
        self._stop_join_timeout = stop_join_timeout

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._counter_lock = threading.Lock()
        self._consecutive_failures = 0
        self._tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def tick_count(self) -> int:
        """Number of polls that started (successful or not)."""
        with self._counter_lock:
            return self._tick_count

    @property
    def consecutive_failures(self) -> int:
        with self._counter_lock:
            return self._consecutive_failures

    def start(self) -> None:
        """Start ticking on a daemon thread."""
        if self._thread is not None:
            raise RuntimeError("StatusPoller can only be started once")

        self._thread = threading.Thread(
            target=self._run,
            name=f"status-poller-{self._job.job_id}",
            daemon=True,
        )
        self._thread.start()
        logger.debug(
            "start - Polling job %s every %.2fs after %.2fs",
            self._job.job_id,
            self._period,
            self._initial_delay,
        )

    def stop(self) -> None:
        """
        Stop ticking. No new poll starts once this returns.

        A poll already in flight may still finish its remote call, but its
        result is discarded when the watch state has already been stopped.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(self._stop_join_timeout)
            if thread.is_alive():
                logger.warning(
                    "stop - Poller for job %s still busy after %.1fs",
                    self._job.job_id,
                    self._stop_join_timeout,
                )

    def tick(self) -> bool:
        """
        Poll the remote status once and publish it.

        Returns:
            bool: True if the status changed
        """
        if self._stop_event.is_set() or self._state.finished:
            return False

        with self._counter_lock:
            self._tick_count += 1
        try:
            status = self._job.query_status()
        except QueryError as e:
            with self._counter_lock:
                self._consecutive_failures += 1
                failures = self._consecutive_failures
            logger.warning(
                "tick - Status query for job %s failed (%d in a row): %s",
                self._job.job_id,
                failures,
                e,
            )
            if self._max_consecutive_failures is not None and failures >= self._max_consecutive_failures:
                logger.error(
                    "tick - Giving up on job %s after %d failed status queries",
                    self._job.job_id,
                    failures,
                )
                self._state.stop(StopReason.UNREACHABLE, e)
            return False
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("tick - Unexpected error polling job %s", self._job.job_id)
            error = QueryError(f"Unexpected error polling job: {e}", self._job.job_id)
            error.__cause__ = e
            self._state.stop(StopReason.UNREACHABLE, error)
            return False

        with self._counter_lock:
            self._consecutive_failures = 0
        logger.debug("tick - Job %s reports %s", self._job.job_id, status.value)
        return self._state.record(status)

    def _run(self) -> None:
        next_run = time.monotonic() + self._initial_delay
        while not self._stop_event.wait(max(0.0, next_run - time.monotonic())):
            self.tick()
            if self._state.finished:
                break
            # Fixed rate; a slow poll shifts the schedule instead of bursting.
            next_run = max(next_run + self._period, time.monotonic())
        logger.debug("_run - Poller for job %s exited", self._job.job_id)
