"""
Beaker task status model.

Enumerates the remote task lifecycle states and classifies the terminal
ones into success and failure.

Dependencies: None
System role: Status vocabulary shared by the client, the watcher and the runner
"""

import enum


class TaskStatus(str, enum.Enum):
    """
    Beaker task execution states, in lifecycle order.

    NEW .. RESERVED: job is still moving through the scheduler or running
    COMPLETED: job finished; the only success-class terminal state
    CANCELLED: job was cancelled on the Beaker side
    ABORTED: job was aborted by Beaker (e.g. external watchdog, no system)
    """

    NEW = "New"
    PROCESSED = "Processed"
    QUEUED = "Queued"
    SCHEDULED = "Scheduled"
    WAITING = "Waiting"
    INSTALLING = "Installing"
    RUNNING = "Running"
    RESERVED = "Reserved"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    ABORTED = "Aborted"

    @property
    def is_terminal(self) -> bool:
        """Terminal states never transition further."""
        return self in _TERMINAL

    @property
    def is_success(self) -> bool:
        return self in _SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.is_terminal and not self.is_success

    @classmethod
    def from_label(cls, label: str) -> "TaskStatus":
        """
        Parse a status label as reported by the Beaker server.

        Args:
            label: State label, e.g. "Running" (case-insensitive)

        Returns:
            TaskStatus: Matching status

        Raises:
            ValueError: If the label is not a known Beaker state
        """
        normalized = str(label).strip().lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        raise ValueError(f"Unknown Beaker task status: {label!r}")


_TERMINAL = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED, TaskStatus.ABORTED})
_SUCCESS = frozenset({TaskStatus.COMPLETED})
