"""
Blocking wait for a watched job.

Turns the asynchronously polled job into a synchronous "wait until done"
call that stays responsive to cancellation and an optional deadline.

Dependencies: threading, time (stdlib)
System role: Reader side of the job-completion watcher
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from beaker_runner.core.watch.status_poller import StatusPoller
from beaker_runner.core.watch.watch_state import StatusChange, StopReason, WatchState
from beaker_runner.models.task_status import TaskStatus

logger = logging.getLogger(__name__)

StatusObserver = Callable[[TaskStatus | None, TaskStatus], None]


@dataclass(frozen=True)
class WaitResult:
    """Outcome of WaitCoordinator.wait()."""

    reason: StopReason
    status: TaskStatus | None
    previous_status: TaskStatus | None
    error: Exception | None = None

    @property
    def cancelled(self) -> bool:
        """True when the wait ended without the job reaching a terminal status by itself."""
        return self.reason in (StopReason.CANCELLED, StopReason.TIMED_OUT)

    @property
    def finished(self) -> bool:
        return self.reason == StopReason.TERMINAL


class WaitCoordinator:
    """Block the calling thread until the poller reports a finished watch."""

    def __init__(
        self,
        state: WatchState,
        poller: StatusPoller,
        observer: StatusObserver | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize wait coordinator.

        Args:
            state: Watch state shared with the poller
            poller: Poller to stop once the wait ends
            observer: Called with (previous, current) for every observed
                change, from the waiting thread and outside the monitor.
                Exceptions it raises are logged and do not end the wait
            timeout: Default deadline in seconds for wait() (None waits forever)
        """
        self._state = state
        self._poller = poller
        self._observer = observer
        self._timeout = timeout

    def wait(self, timeout: float | None = None) -> WaitResult:
        """
        Block until the watch finishes, is cancelled or the deadline expires.

        A KeyboardInterrupt raised while waiting is turned into a cancelled
        result. The poller is always stopped before this returns.

        Args:
            timeout: Deadline in seconds, overriding the default

        Returns:
            WaitResult: Why the wait ended plus the last observed statuses
        """
        timeout = self._timeout if timeout is None else timeout
        deadline = None if timeout is None else time.monotonic() + timeout
        monitor = self._state.monitor

        try:
            while True:
                with monitor:
                    while not self._state.finished and not self._state.has_pending_changes:
                        remaining = None if deadline is None else deadline - time.monotonic()
                        if remaining is not None and remaining <= 0:
                            self._state.stop(StopReason.TIMED_OUT)
                            break
                        monitor.wait(remaining)
                    changes = self._state.drain_changes()
                    snapshot = self._state.snapshot()

                self._report(changes)
                if snapshot.finished:
                    break
        except KeyboardInterrupt:
            self._state.stop(StopReason.CANCELLED)
            snapshot = self._state.snapshot()
            logger.info("wait - Interrupted while waiting, job aborted")
        finally:
            self._poller.stop()

        if snapshot.stop_reason == StopReason.TIMED_OUT:
            logger.warning("wait - Deadline of %ss expired, job aborted", timeout)
        elif snapshot.stop_reason == StopReason.CANCELLED:
            logger.info("wait - Job aborted")
        elif snapshot.stop_reason == StopReason.TERMINAL:
            logger.info("wait - Job finished with status %s", snapshot.current_status.value)

        return WaitResult(
            reason=snapshot.stop_reason,
            status=snapshot.current_status,
            previous_status=snapshot.previous_status,
            error=snapshot.error,
        )

    def cancel(self) -> None:
        """Cancel the wait from any thread and stop the poller."""
        if self._state.stop(StopReason.CANCELLED):
            logger.info("cancel - Cancellation requested")
        self._poller.stop()

    def _report(self, changes: list[StatusChange]) -> None:
        for change in changes:
            previous = change.previous.value if change.previous else None
            logger.info("Job has changed state from %s to %s", previous, change.current.value)
            if self._observer is None:
                continue
            try:
                self._observer(change.previous, change.current)
            except Exception:  # pylint: disable=broad-except
                # Progress reporting must not end the watch
                logger.exception(
                    "_report - Status observer failed on %s -> %s",
                    previous,
                    change.current.value,
                )
