"""
Tests for the HTTP Surface

Tests cover:
- POST multipart intake (success, no file, rule failures, server errors)
- GET list and single record
- PUT full replace (204, id mismatch, invalid payload, 404)
- DELETE (200, 404)
- Serving stored uploads
"""

import logging

import pytest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from fastapi.testclient import TestClient

from core.submission import PersistenceError
from web.app import create_app
from web.dependencies import get_submission_repository


@pytest.fixture
def app(test_config):
    return create_app(test_config)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def form(valid_form):
    """Valid form with dates relative to the real clock."""
    valid_form["DateTaken"] = (date.today() - timedelta(days=1)).isoformat()
    return valid_form


def upload(name="photo.jpg", content=b"jpeg-bytes"):
    return {"file": (name, content, "image/jpeg")}


def submit(client, form, files=None):
    return client.post("/api/Submissions", data=form, files=files or upload())


# =============================================================================
# POST /api/Submissions
# =============================================================================


class TestCreate:
    """Tests for the public intake endpoint."""

    def test_valid_submission(self, client, form):
        response = submit(client, form)

        assert response.status_code == 200
        assert response.json() == {"message": "Submission received."}

        listing = client.get("/api/Submissions", params={"businessId": "zaff-papers"}).json()
        assert len(listing) == 1
        assert listing[0]["FirstName"] == "Ada"
        assert listing[0]["FileUrl"].startswith("/UploadedFiles/")
        assert listing[0]["FileUrl"].endswith("_photo.jpg")

    def test_no_file_rejected(self, client, form):
        response = client.post("/api/Submissions", data=form)

        assert response.status_code == 400
        assert response.json() == {"message": "No file uploaded."}

    def test_only_first_file_is_stored(self, client, form):
        files = [
            ("first", ("a.jpg", b"a", "image/jpeg")),
            ("second", ("b.jpg", b"b", "image/jpeg")),
        ]

        response = client.post("/api/Submissions", data=form, files=files)

        assert response.status_code == 200
        record = client.get("/api/Submissions/1").json()
        assert record["FileUrl"].endswith("_a.jpg")

    @pytest.mark.parametrize("field", ["FirstName", "LastName", "Email", "BusinessId"])
    def test_missing_field_rejected(self, client, form, field):
        del form[field]

        response = submit(client, form)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields or consent not given."
        assert client.get("/api/Submissions/1").status_code == 404

    @pytest.mark.parametrize("consent", ["false", ""])
    def test_consent_not_given_rejected(self, client, form, consent):
        form["ConsentGiven"] = consent

        response = submit(client, form)

        assert response.status_code == 400

    def test_consent_on_accepted(self, client, form):
        form["ConsentGiven"] = "on"
        assert submit(client, form).status_code == 200

    def test_future_date_of_birth_rejected(self, client, form):
        form["DateOfBirth"] = (date.today() + timedelta(days=1)).isoformat()

        response = submit(client, form)

        assert response.status_code == 400
        assert response.json()["message"] == "Date of birth cannot be in the future."

    def test_date_taken_today_accepted(self, client, form):
        form["DateTaken"] = date.today().isoformat()
        assert submit(client, form).status_code == 200

    def test_too_old_rejected(self, client, form):
        form["DateOfBirth"] = "1899-12-31"

        response = submit(client, form)

        assert response.status_code == 400
        assert response.json()["message"] == "Please enter a valid date of birth."

    def test_rejected_submission_still_stores_file(self, client, form, test_config):
        form["ConsentGiven"] = "false"
        submit(client, form)

        assert len(list(Path(test_config.upload_dir).iterdir())) == 1

    def test_persistence_failure_is_400_with_detail(self, app, client, form):
        class BrokenRepository:
            def create(self, submission):
                return PersistenceError(detail="disk full")

        app.dependency_overrides[get_submission_repository] = lambda: BrokenRepository()

        response = submit(client, form)

        assert response.status_code == 400
        assert response.json() == {"message": "Server error: disk full"}

    def test_unexpected_failure_is_400_with_raw_text(self, app, client, form):
        class ExplodingRepository:
            def create(self, submission):
                raise RuntimeError("connection reset")

        app.dependency_overrides[get_submission_repository] = lambda: ExplodingRepository()

        response = submit(client, form)

        assert response.status_code == 400
        assert response.json() == {"message": "Server error: connection reset"}

    def test_unexpected_failure_redacted_when_configured(self, test_config, form):
        test_config.redact_server_errors = True
        app = create_app(test_config)

        class ExplodingRepository:
            def create(self, submission):
                raise RuntimeError("password=hunter2")

        app.dependency_overrides[get_submission_repository] = lambda: ExplodingRepository()

        response = submit(TestClient(app), form)

        assert response.status_code == 400
        assert "hunter2" not in response.json()["message"]


# =============================================================================
# GET
# =============================================================================


class TestRead:
    """Tests for dashboard reads."""

    def test_list_newest_first_and_exact_business(self, client, form):
        submit(client, form)
        submit(client, form)
        form["BusinessId"] = "other"
        submit(client, form)

        listing = client.get("/api/Submissions", params={"businessId": "zaff-papers"}).json()

        assert [r["Id"] for r in listing] == [2, 1]
        assert listing[0]["DateSubmitted"] >= listing[1]["DateSubmitted"]

    def test_list_requires_business_id(self, client):
        response = client.get("/api/Submissions")
        assert response.status_code == 400

    def test_get_by_id(self, client, form):
        submit(client, form)

        record = client.get("/api/Submissions/1").json()

        assert record["Id"] == 1
        assert record["FirstName"] == form["FirstName"]
        assert record["LastName"] == form["LastName"]
        assert record["Email"] == form["Email"]
        assert record["City"] == form["City"]
        assert record["Country"] == form["Country"]
        assert record["DateOfBirth"] == form["DateOfBirth"]
        assert record["DateTaken"] == form["DateTaken"]
        assert record["ConsentGiven"] is True
        assert record["BusinessId"] == form["BusinessId"]

    def test_get_missing_is_404(self, client):
        assert client.get("/api/Submissions/999").status_code == 404


# =============================================================================
# PUT
# =============================================================================


class TestUpdate:
    """Tests for full-replace updates."""

    @pytest.fixture
    def record(self, client, form):
        submit(client, form)
        return client.get("/api/Submissions/1").json()

    def test_update_returns_204(self, client, record):
        record["City"] = "Paris"

        response = client.put("/api/Submissions/1", json=record)

        assert response.status_code == 204
        assert client.get("/api/Submissions/1").json()["City"] == "Paris"

    def test_id_mismatch_is_400_and_store_unchanged(self, client, record):
        record["FirstName"] = "Mallory"

        response = client.put("/api/Submissions/5", json=record)

        assert response.status_code == 400
        assert response.json() == {"message": "ID mismatch"}
        assert client.get("/api/Submissions/1").json()["FirstName"] == "Ada"

    def test_missing_record_is_404(self, client, record):
        record["Id"] = 999
        assert client.put("/api/Submissions/999", json=record).status_code == 404

    def test_blank_required_field_is_400(self, client, record):
        record["Email"] = ""
        assert client.put("/api/Submissions/1", json=record).status_code == 400

    def test_future_date_is_400(self, client, record):
        record["DateOfBirth"] = (date.today() + timedelta(days=1)).isoformat()

        response = client.put("/api/Submissions/1", json=record)

        assert response.status_code == 400
        assert response.json()["message"] == "Date of birth cannot be in the future."

    def test_malformed_body_is_400(self, client, record):
        del record["FirstName"]
        assert client.put("/api/Submissions/1", json=record).status_code == 400

    def test_offset_timestamp_is_stored_as_local_time(self, client, form, record):
        submit(client, form)
        record["DateSubmitted"] = "2026-10-19T08:00:00Z"

        assert client.put("/api/Submissions/1", json=record).status_code == 204

        response = client.get("/api/Submissions", params={"businessId": "zaff-papers"})
        assert response.status_code == 200
        expected = datetime(2026, 10, 19, 8, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        stored = {r["Id"]: r["DateSubmitted"] for r in response.json()}
        assert set(stored) == {1, 2}
        assert stored[1] == expected.isoformat()


# =============================================================================
# DELETE
# =============================================================================


class TestDelete:
    """Tests for deletion."""

    def test_delete_returns_200(self, client, form):
        submit(client, form)

        response = client.delete("/api/Submissions/1")

        assert response.status_code == 200
        assert client.get("/api/Submissions/1").status_code == 404

    def test_delete_missing_is_404(self, client, form):
        submit(client, form)

        assert client.delete("/api/Submissions/999").status_code == 404
        assert client.get("/api/Submissions/1").status_code == 200

    def test_file_still_served_after_delete(self, client, form):
        submit(client, form)
        file_url = client.get("/api/Submissions/1").json()["FileUrl"]

        client.delete("/api/Submissions/1")

        response = client.get(file_url)
        assert response.status_code == 200
        assert response.content == b"jpeg-bytes"


# =============================================================================
# Uploaded Files and Health
# =============================================================================


class TestUploadedFiles:
    """Tests for serving stored uploads."""

    def test_serves_stored_file(self, client, form):
        submit(client, form, files=upload("pic.png", b"png-bytes"))
        file_url = client.get("/api/Submissions/1").json()["FileUrl"]

        response = client.get(file_url)

        assert response.status_code == 200
        assert response.content == b"png-bytes"
        assert response.headers["content-type"] == "image/png"

    def test_missing_file_is_404(self, client):
        assert client.get("/UploadedFiles/nothing.jpg").status_code == 404

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_startup_reports_stored_counts(self, client, test_config, caplog):
        """A rejected submission leaves one file and no record behind."""
        client.post("/api/Submissions", data={}, files=upload())

        with caplog.at_level(logging.INFO, logger="web.app"):
            create_app(test_config)

        assert "1 files" in caplog.text
        assert "0 submissions" in caplog.text
