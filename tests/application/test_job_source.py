"""
Unit tests for job description sources.

Dependencies: pytest, beaker_runner.application.job_source
System role: Preparation stage validation
"""

import pytest

from beaker_runner.application.job_source import DEFAULT_JOB_FILE, FileJobSource, StringJobSource
from beaker_runner.core.exceptions import PreparationError


class TestStringJobSource:
    """Test suite for inline job XML."""

    def test_writes_job_to_default_path(self, job_xml, tmp_path):
        source = StringJobSource(job_xml)

        text = source.prepare_job_file(tmp_path)

        assert text == job_xml
        assert (tmp_path / DEFAULT_JOB_FILE).read_text(encoding="utf-8") == job_xml

    def test_custom_path_creates_parent_directories(self, job_xml, tmp_path):
        source = StringJobSource(job_xml, job_path="beaker/job.xml")

        source.prepare_job_file(tmp_path)

        assert (tmp_path / "beaker" / "job.xml").is_file()

    def test_empty_job_is_rejected(self, tmp_path):
        with pytest.raises(PreparationError, match="empty"):
            StringJobSource("   \n").prepare_job_file(tmp_path)

    def test_unwritable_workspace_is_preparation_error(self, job_xml, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")

        with pytest.raises(PreparationError) as exc_info:
            StringJobSource(job_xml).prepare_job_file(blocker)

        assert "job_path" in exc_info.value.details


class TestFileJobSource:
    """Test suite for job XML already in the workspace."""

    def test_reads_existing_file(self, job_xml, tmp_path):
        (tmp_path / "job.xml").write_text(job_xml, encoding="utf-8")

        assert FileJobSource("job.xml").prepare_job_file(tmp_path) == job_xml

    def test_absolute_path_is_used_as_is(self, job_xml, tmp_path):
        path = tmp_path / "abs.xml"
        path.write_text(job_xml, encoding="utf-8")

        assert FileJobSource(str(path)).prepare_job_file(tmp_path / "elsewhere") == job_xml

    def test_missing_file_is_preparation_error(self, tmp_path):
        with pytest.raises(PreparationError, match="doesn't exist") as exc_info:
            FileJobSource("missing.xml").prepare_job_file(tmp_path)

        assert exc_info.value.details["job_path"].endswith("missing.xml")
