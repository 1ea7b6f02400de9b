"""
Pytest configuration and shared fixtures.

Sets a throwaway DATA_DIR before any app module is imported, since
importing web.app builds the module-level app from the environment.
"""

import os
import tempfile

os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="ugc-intake-tests-"))

import pytest
from datetime import datetime

from core.submission import JsonSubmissionRepository, LocalFileStore, ValidatedSubmission
from utils.config import Config


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def now():
    """Fixed submission time."""
    return datetime(2026, 10, 19, 9, 30, 0)


@pytest.fixture
def valid_form():
    """Raw form fields of a complete, consenting submission."""
    return {
        "FirstName": "Ada",
        "LastName": "Lovelace",
        "Email": "ada@example.com",
        "City": "London",
        "Country": "UK",
        "DateOfBirth": "1990-05-01",
        "DateTaken": "2026-10-01",
        "ConsentGiven": "true",
        "BusinessId": "zaff-papers",
    }


@pytest.fixture
def file_store(tmp_path):
    """File store writing into a per-test upload root."""
    return LocalFileStore(upload_root=str(tmp_path / "UploadedFiles"))


@pytest.fixture
def repository(tmp_path):
    """Repository persisting to a per-test JSON file."""
    return JsonSubmissionRepository(persist_path=str(tmp_path / "submissions.json"))


@pytest.fixture
def make_validated(now):
    """Factory for validated submissions with overridable fields."""

    def _make(**overrides) -> ValidatedSubmission:
        values = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "business_id": "zaff-papers",
            "date_submitted": now,
            "file_url": "/UploadedFiles/abc_photo.jpg",
            "city": "London",
            "country": "UK",
        }
        values.update(overrides)
        return ValidatedSubmission(**values)

    return _make


@pytest.fixture
def test_config(tmp_path):
    """App configuration rooted in a per-test directory."""
    return Config(
        data_dir=str(tmp_path),
        upload_dir=str(tmp_path / "UploadedFiles"),
        upload_url_prefix="/UploadedFiles",
        submissions_path=str(tmp_path / "submissions.json"),
        allowed_origins=[],
        redact_server_errors=False,
    )
