"""
Beaker XML-RPC client.

Schedules jobs and reads task status from a Beaker server. Keeps the
authenticated session cookie between calls.

Dependencies: xmlrpc.client (stdlib), beaker_runner.configs
System role: Remote job service adapter
"""

import logging
import xmlrpc.client
from http.client import HTTPConnection, HTTPResponse
from typing import Any, Protocol

from beaker_runner.configs.beaker import BeakerSettings
from beaker_runner.core.exceptions import AuthenticationError, QueryError, SubmissionError
from beaker_runner.models.job import Job
from beaker_runner.models.task_status import TaskStatus

logger = logging.getLogger(__name__)


class RemoteJobClient(Protocol):
    """What the runner and the watcher need from a remote job service."""

    def submit_job(self, job_xml: str) -> Job:
        """Schedule a job; raises SubmissionError on rejection or transport failure."""
        ...

    def query_status(self, job: Job) -> TaskStatus:
        """Return the job's current status; raises QueryError when unreachable."""
        ...


class _CookieMixin:
    """Remember Set-Cookie headers and replay them on later requests."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._cookies: dict[str, str] = {}

    def send_headers(self, connection: HTTPConnection, headers: list[tuple[str, str]]) -> None:
        if self._cookies:
            cookie = "; ".join(f"{name}={value}" for name, value in self._cookies.items())
            connection.putheader("Cookie", cookie)
        super().send_headers(connection, headers)

    def parse_response(self, response: HTTPResponse) -> Any:
        for header in response.msg.get_all("Set-Cookie") or []:
            pair = header.split(";", 1)[0]
            if "=" in pair:
                name, value = pair.split("=", 1)
                self._cookies[name.strip()] = value.strip()
        return super().parse_response(response)


class CookieTransport(_CookieMixin, xmlrpc.client.Transport):
    """HTTP transport keeping the Beaker session cookie."""


class SafeCookieTransport(_CookieMixin, xmlrpc.client.SafeTransport):
    """HTTPS transport keeping the Beaker session cookie."""


class _TimeoutMixin:
    """Apply a socket timeout to every connection the transport opens."""

    timeout: float | None = None

    def make_connection(self, host: Any) -> HTTPConnection:
        connection = super().make_connection(host)
        if self.timeout is not None:
            connection.timeout = self.timeout
        return connection


class _HTTPTransport(_TimeoutMixin, CookieTransport):
    pass


class _HTTPSTransport(_TimeoutMixin, SafeCookieTransport):
    pass


def make_transport(url: str, timeout: float | None = None) -> xmlrpc.client.Transport:
    """
    Build a cookie-preserving transport for the endpoint's scheme.

    Args:
        url: XML-RPC endpoint URL
        timeout: Socket timeout in seconds

    Returns:
        xmlrpc.client.Transport: HTTP or HTTPS transport
    """
    transport = _HTTPSTransport() if url.lower().startswith("https") else _HTTPTransport()
    transport.timeout = timeout
    return transport


class BeakerClient:
    """Beaker XML-RPC client implementing RemoteJobClient."""

    def __init__(
        self,
        url: str,
        login: str = "",
        password: str = "",
        timeout: float | None = 60.0,
        proxy: Any | None = None,
    ) -> None:
        """
        Initialize Beaker client.

        Args:
            url: Beaker XML-RPC endpoint (e.g. https://beaker.example.com/RPC2)
            login: User name; empty skips authentication
            password: Password for login
            timeout: Socket timeout for each call in seconds
            proxy: Pre-built server proxy (tests inject a fake here)
        """
        self._url = url
        self._login = login
        self._password = password
        self._authenticated = False
        self._proxy = proxy or xmlrpc.client.ServerProxy(
            url,
            transport=make_transport(url, timeout),
            allow_none=True,
        )

    @classmethod
    def from_settings(cls, settings: BeakerSettings) -> "BeakerClient":
        """Create a client from BeakerSettings."""
        return cls(
            url=settings.url,
            login=settings.login,
            password=settings.password,
            timeout=settings.request_timeout,
        )

    @property
    def url(self) -> str:
        return self._url

    def authenticate(self) -> None:
        """
        Log in with the configured credentials.

        Raises:
            AuthenticationError: Credentials rejected or server unreachable
        """
        try:
            self._proxy.auth.login_password(self._login, self._password)
        except xmlrpc.client.Fault as e:
            raise AuthenticationError(
                f"Cannot connect to {self._url} as {self._login}: {e.faultString}",
                self._login,
            ) from e
        except (xmlrpc.client.ProtocolError, OSError) as e:
            raise AuthenticationError(
                f"Cannot connect to {self._url}: {e}",
                self._login,
            ) from e

        self._authenticated = True
        logger.info("authenticate - Logged in to %s as %s", self._url, self._login)

    def who_am_i(self) -> str:
        """
        Return the user name the server sees for this session.

        Raises:
            AuthenticationError: Login failed or server unreachable
        """
        self._ensure_authenticated()
        try:
            return str(self._proxy.auth.who_am_i())
        except (xmlrpc.client.Fault, xmlrpc.client.ProtocolError, OSError) as e:
            raise AuthenticationError(f"Cannot identify session on {self._url}: {e}", self._login) from e

    def submit_job(self, job_xml: str) -> Job:
        """
        Upload a job XML and schedule it.

        Args:
            job_xml: Beaker job description document

        Returns:
            Job: Handle carrying the scheduled job id (e.g. "J:1234")

        Raises:
            SubmissionError: Job rejected, malformed or server unreachable
        """
        if not job_xml or not job_xml.strip():
            raise SubmissionError("Job XML is empty")

        try:
            self._ensure_authenticated()
        except AuthenticationError as e:
            raise SubmissionError(f"Cannot schedule job: {e.message}", e.details) from e

        try:
            job_id = self._proxy.jobs.upload(job_xml)
        except xmlrpc.client.Fault as e:
            raise SubmissionError(
                f"Beaker rejected the job: {e.faultString}",
                {"fault_code": e.faultCode},
            ) from e
        except (xmlrpc.client.ProtocolError, OSError) as e:
            raise SubmissionError(f"Cannot reach {self._url}: {e}") from e

        if not job_id:
            raise SubmissionError("Beaker returned no job id")

        logger.info("submit_job - Scheduled job %s", job_id)
        return Job(job_id=str(job_id), client=self)

    def query_status(self, job: Job) -> TaskStatus:
        """
        Read the current status of a scheduled job.

        Args:
            job: Job handle returned by submit_job

        Returns:
            TaskStatus: Current remote status

        Raises:
            QueryError: Server unreachable or returned a malformed response
        """
        try:
            info = self._proxy.taskactions.task_info(job.job_id)
        except (xmlrpc.client.Fault, xmlrpc.client.ProtocolError, OSError) as e:
            raise QueryError(f"Cannot read status from {self._url}: {e}", job.job_id) from e

        if not isinstance(info, dict) or "state" not in info:
            raise QueryError("Malformed task_info response", job.job_id, {"response": repr(info)[:200]})

        try:
            return TaskStatus.from_label(info["state"])
        except ValueError as e:
            raise QueryError(str(e), job.job_id) from e

    def _ensure_authenticated(self) -> None:
        if self._login and not self._authenticated:
            self.authenticate()
