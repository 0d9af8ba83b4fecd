"""
Unit tests for WatchState.

Dependencies: pytest, beaker_runner.core.watch
System role: Shared watch state invariants
"""

import threading

from beaker_runner.core.watch import StatusChange, StopReason, WatchState
from beaker_runner.models.task_status import TaskStatus


class TestRecord:
    """Test suite for WatchState.record."""

    def test_change_updates_previous_and_current(self):
        state = WatchState()

        changed = state.record(TaskStatus.QUEUED)

        assert changed is True
        assert state.previous_status == TaskStatus.NEW
        assert state.current_status == TaskStatus.QUEUED
        assert state.finished is False

    def test_unchanged_status_is_not_written(self):
        state = WatchState()
        state.record(TaskStatus.QUEUED)

        changed = state.record(TaskStatus.QUEUED)

        assert changed is False
        assert state.previous_status == TaskStatus.NEW
        assert state.drain_changes() == [StatusChange(TaskStatus.NEW, TaskStatus.QUEUED)]

    def test_terminal_status_finishes_watch(self):
        state = WatchState()

        state.record(TaskStatus.COMPLETED)

        assert state.finished is True
        assert state.stop_reason == StopReason.TERMINAL

    def test_terminal_status_never_transitions(self):
        state = WatchState()
        state.record(TaskStatus.ABORTED)

        assert state.record(TaskStatus.RUNNING) is False
        assert state.current_status == TaskStatus.ABORTED
        assert state.previous_status == TaskStatus.NEW

    def test_first_status_counts_as_change_without_initial_status(self):
        state = WatchState(initial_status=None)

        assert state.record(TaskStatus.NEW) is True
        assert state.drain_changes() == [StatusChange(None, TaskStatus.NEW)]

    def test_record_wakes_waiter(self):
        state = WatchState()
        woke = threading.Event()

        def waiter():
            with state.monitor:
                while not state.finished:
                    state.monitor.wait(2.0)
            woke.set()

        thread = threading.Thread(target=waiter)
        thread.start()
        state.record(TaskStatus.COMPLETED)
        thread.join(2.0)

        assert woke.is_set()


class TestStop:
    """Test suite for WatchState.stop."""

    def test_stop_finishes_with_reason_and_error(self):
        state = WatchState()
        error = RuntimeError("boom")

        assert state.stop(StopReason.UNREACHABLE, error) is True

        snapshot = state.snapshot()
        assert snapshot.finished is True
        assert snapshot.stop_reason == StopReason.UNREACHABLE
        assert snapshot.error is error

    def test_first_stop_wins(self):
        state = WatchState()
        state.stop(StopReason.CANCELLED)

        assert state.stop(StopReason.TIMED_OUT) is False
        assert state.stop_reason == StopReason.CANCELLED

    def test_stop_after_terminal_is_ignored(self):
        state = WatchState()
        state.record(TaskStatus.COMPLETED)

        assert state.stop(StopReason.CANCELLED) is False
        assert state.stop_reason == StopReason.TERMINAL

    def test_cancelled_state_ignores_later_polls(self):
        state = WatchState()
        state.stop(StopReason.CANCELLED)

        assert state.record(TaskStatus.RUNNING) is False
        assert state.current_status == TaskStatus.NEW
        assert state.drain_changes() == []


class TestDrainChanges:
    """Test suite for pending change delivery."""

    def test_drain_returns_changes_in_order_once(self):
        state = WatchState()
        state.record(TaskStatus.QUEUED)
        state.record(TaskStatus.RUNNING)

        assert state.drain_changes() == [
            StatusChange(TaskStatus.NEW, TaskStatus.QUEUED),
            StatusChange(TaskStatus.QUEUED, TaskStatus.RUNNING),
        ]
        assert state.drain_changes() == []
        assert state.has_pending_changes is False
