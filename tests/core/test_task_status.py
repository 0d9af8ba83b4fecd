"""
Unit tests for TaskStatus classification and parsing.

Dependencies: pytest, beaker_runner.models
System role: Status vocabulary validation
"""

import pytest

from beaker_runner.models.task_status import TaskStatus


class TestTaskStatus:
    """Test terminal and success classification."""

    def test_terminal_states(self):
        terminal = {status for status in TaskStatus if status.is_terminal}

        assert terminal == {TaskStatus.COMPLETED, TaskStatus.CANCELLED, TaskStatus.ABORTED}

    def test_only_completed_is_success(self):
        assert TaskStatus.COMPLETED.is_success is True
        assert TaskStatus.ABORTED.is_failure is True
        assert TaskStatus.CANCELLED.is_failure is True
        assert TaskStatus.RUNNING.is_failure is False

    @pytest.mark.parametrize("label", ["Running", "running", " RUNNING "])
    def test_from_label_is_case_insensitive(self, label):
        assert TaskStatus.from_label(label) == TaskStatus.RUNNING

    def test_unknown_label_rejected(self):
        with pytest.raises(ValueError, match="Unknown Beaker task status"):
            TaskStatus.from_label("Exploded")
