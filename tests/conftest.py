"""
Shared test fixtures and configuration for entire test suite.

Provides: scripted fake Beaker client, fast watch settings, polling helper
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import threading
import time
from collections.abc import Callable

import pytest

from beaker_runner.configs.watch import WatchSettings
from beaker_runner.core.exceptions import SubmissionError
from beaker_runner.models.job import Job
from beaker_runner.models.task_status import TaskStatus


class ScriptedClient:
    """
    Fake remote job client replaying a fixed list of poll results.

    Each query returns the next scripted item; exceptions in the script are
    raised instead of returned. The last item repeats once the script runs out.
    """

    def __init__(
        self,
        statuses: list[TaskStatus | Exception],
        job_id: str = "J:1",
        submit_error: SubmissionError | None = None,
    ) -> None:
        self._statuses = list(statuses)
        self._job_id = job_id
        self._submit_error = submit_error
        self._lock = threading.Lock()
        self.calls = 0
        self.submitted: list[str] = []

    def submit_job(self, job_xml: str) -> Job:
        if self._submit_error is not None:
            raise self._submit_error
        self.submitted.append(job_xml)
        return Job(job_id=self._job_id, client=self)

    def query_status(self, job: Job) -> TaskStatus:
        with self._lock:
            index = min(self.calls, len(self._statuses) - 1)
            self.calls += 1
            item = self._statuses[index]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def make_client() -> Callable[..., ScriptedClient]:
    """
    Factory for scripted fake clients.

    Returns:
        Callable: make_client(statuses, job_id="J:1", submit_error=None)
    """
    return ScriptedClient


@pytest.fixture
def fast_watch_settings() -> WatchSettings:
    """Watch settings with millisecond cadence for threaded tests."""
    return WatchSettings(initial_delay=0.01, period=0.01, stop_join_timeout=2.0)


@pytest.fixture
def wait_until() -> Callable[..., bool]:
    """
    Poll a predicate until it holds or a deadline passes.

    Returns:
        Callable: wait_until(predicate, timeout=2.0) -> bool
    """

    def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.005)
        return predicate()

    return _wait_until


@pytest.fixture
def job_xml() -> str:
    """Minimal Beaker job description."""
    return (
        "<job>\n"
        "  <whiteboard>smoke test</whiteboard>\n"
        "  <recipeSet><recipe><task name=\"/distribution/check-install\"/></recipe></recipeSet>\n"
        "</job>\n"
    )
