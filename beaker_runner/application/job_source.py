"""
Job description sources.

Writes or locates the Beaker job XML inside a workspace and reads it back
for submission.

Dependencies: pathlib (stdlib), beaker_runner.core.exceptions
System role: Preparation stage of the job runner
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from beaker_runner.core.exceptions import PreparationError

logger = logging.getLogger(__name__)

DEFAULT_JOB_FILE = "beaker_job.xml"


class JobSource(ABC):
    """Where the job description comes from."""

    @property
    @abstractmethod
    def default_job_path(self) -> str:
        """Workspace-relative path of the job file to submit."""

    @abstractmethod
    def create_job_file(self, workspace: Path) -> Path:
        """
        Make sure the job file exists in the workspace.

        Args:
            workspace: Build workspace directory

        Returns:
            Path: Absolute path of the job file

        Raises:
            OSError: Writing the file failed
        """

    def prepare_job_file(self, workspace: Path) -> str:
        """
        Create the job file, verify it exists and return its contents.

        Args:
            workspace: Build workspace directory

        Returns:
            str: Job XML text

        Raises:
            PreparationError: File could not be created, found or read
        """
        job_path = workspace / self.default_job_path
        try:
            job_path = self.create_job_file(workspace)
        except OSError as e:
            raise PreparationError(f"Could not create job file: {e}", str(job_path)) from e

        if not job_path.is_file():
            raise PreparationError(f"Job file {job_path.name} doesn't exist in {workspace}", str(job_path))

        try:
            job_xml = job_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PreparationError(f"Cannot read job source file {job_path}: {e}", str(job_path)) from e

        if not job_xml.strip():
            raise PreparationError(f"Job file {job_path.name} is empty", str(job_path))

        logger.debug("prepare_job_file - Job XML is:\n%s", job_xml)
        return job_xml


class StringJobSource(JobSource):
    """Job XML given inline, written to the workspace before submission."""

    def __init__(self, job_content: str, job_path: str = DEFAULT_JOB_FILE) -> None:
        self._job_content = job_content
        self._job_path = job_path

    @property
    def job_content(self) -> str:
        return self._job_content

    @property
    def default_job_path(self) -> str:
        return self._job_path

    def create_job_file(self, workspace: Path) -> Path:
        path = workspace / self._job_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self._job_content, encoding="utf-8")
        logger.info("create_job_file - Wrote job XML to %s", path)
        return path


class FileJobSource(JobSource):
    """Job XML already present in the workspace."""

    def __init__(self, job_path: str) -> None:
        self._job_path = job_path

    @property
    def default_job_path(self) -> str:
        return self._job_path

    def create_job_file(self, workspace: Path) -> Path:
        path = Path(self._job_path)
        return path if path.is_absolute() else workspace / path
