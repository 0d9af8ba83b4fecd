"""
Shared watch state guarded by a single monitor.

The poller thread writes status changes, the waiting thread reads them.
Every field is read and written while holding `monitor`, so a waiter that
observes `finished` always sees the matching `current_status`.

Dependencies: threading (stdlib)
System role: Synchronization point between StatusPoller and WaitCoordinator
"""

import enum
import threading
from dataclasses import dataclass

from beaker_runner.models.task_status import TaskStatus


class StopReason(str, enum.Enum):
    """
    Why a watch finished.

    TERMINAL: remote job reached a terminal status
    CANCELLED: caller cancelled or was interrupted while waiting
    TIMED_OUT: wait deadline expired
    UNREACHABLE: status queries kept failing and the watch gave up
    """

    TERMINAL = "terminal"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class StatusChange:
    """One observed transition, as delivered to status observers."""

    previous: TaskStatus | None
    current: TaskStatus


@dataclass(frozen=True)
class WatchSnapshot:
    """Consistent copy of the watch state taken under the monitor."""

    previous_status: TaskStatus | None
    current_status: TaskStatus | None
    finished: bool
    stop_reason: StopReason | None
    error: Exception | None


class WatchState:
    """Mutable status record shared by the poller (writer) and the waiter (reader)."""

    def __init__(self, initial_status: TaskStatus | None = TaskStatus.NEW) -> None:
        """
        Initialize watch state.

        Args:
            initial_status: Status assumed before the first poll. None makes
                the first observed status count as a change.
        """
        self._monitor = threading.Condition()
        self._previous_status: TaskStatus | None = None
        self._current_status = initial_status
        self._stop_reason: StopReason | None = None
        self._error: Exception | None = None
        self._pending: list[StatusChange] = []

        if initial_status is not None and initial_status.is_terminal:
            self._stop_reason = StopReason.TERMINAL

    @property
    def monitor(self) -> threading.Condition:
        return self._monitor

    @property
    def previous_status(self) -> TaskStatus | None:
        with self._monitor:
            return self._previous_status

    @property
    def current_status(self) -> TaskStatus | None:
        with self._monitor:
            return self._current_status

    @property
    def finished(self) -> bool:
        with self._monitor:
            return self._stop_reason is not None

    @property
    def stop_reason(self) -> StopReason | None:
        with self._monitor:
            return self._stop_reason

    @property
    def has_pending_changes(self) -> bool:
        with self._monitor:
            return bool(self._pending)

    def record(self, status: TaskStatus) -> bool:
        """
        Record a polled status and wake waiters if it changed.

        A finished watch ignores further updates, so terminal states never
        transition and nothing mutates the state after a cancel.

        Args:
            status: Status returned by the latest poll

        Returns:
            bool: True if the status changed and waiters were notified
        """
        with self._monitor:
            if self._stop_reason is not None or status == self._current_status:
                return False

            change = StatusChange(previous=self._current_status, current=status)
            self._previous_status = self._current_status
            self._current_status = status
            self._pending.append(change)
            if status.is_terminal:
                self._stop_reason = StopReason.TERMINAL
            self._monitor.notify_all()
            return True

    def stop(self, reason: StopReason, error: Exception | None = None) -> bool:
        """
        Finish the watch without a terminal status.

        Args:
            reason: Why the watch is being stopped
            error: Optional error to surface to the waiter

        Returns:
            bool: False if the watch had already finished (first stop wins)
        """
        with self._monitor:
            if self._stop_reason is not None:
                return False
            self._stop_reason = reason
            self._error = error
            self._monitor.notify_all()
            return True

    def drain_changes(self) -> list[StatusChange]:
        """Take all transitions recorded since the last drain."""
        with self._monitor:
            changes, self._pending = self._pending, []
            return changes

    def snapshot(self) -> WatchSnapshot:
        with self._monitor:
            return WatchSnapshot(
                previous_status=self._previous_status,
                current_status=self._current_status,
                finished=self._stop_reason is not None,
                stop_reason=self._stop_reason,
                error=self._error,
            )
