"""
Job-completion watcher.

A fixed-rate StatusPoller and a blocking WaitCoordinator sharing one
WatchState monitor.
"""

from beaker_runner.core.watch.status_poller import DEFAULT_INITIAL_DELAY, DEFAULT_PERIOD, StatusPoller
from beaker_runner.core.watch.wait_coordinator import StatusObserver, WaitCoordinator, WaitResult
from beaker_runner.core.watch.watch_state import StatusChange, StopReason, WatchSnapshot, WatchState

__all__ = [
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_PERIOD",
    "StatusChange",
    "StatusObserver",
    "StatusPoller",
    "StopReason",
    "WaitCoordinator",
    "WaitResult",
    "WatchSnapshot",
    "WatchState",
]
