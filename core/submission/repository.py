"""
Submission Repository - Record Storage for UGC Submissions

Provides storage and retrieval for submission records.
The JSON implementation keeps records in memory and writes the whole set
to a file after every change; swappable for a database later.
"""

from __future__ import annotations

import json
import logging
import shutil
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from core.submission.results import (
    CreateResult,
    DeleteResult,
    IdMismatch,
    LookupResult,
    NotFoundError,
    OperationSuccess,
    PersistenceError,
    UpdateResult,
)
from core.submission.schema import Submission, ValidatedSubmission


logger = logging.getLogger(__name__)


def _raw_id(record) -> int:
    """Id of a record that failed to parse, or 0 when it has none usable."""
    try:
        return int(record["id"])
    except (KeyError, ValueError, TypeError):
        return 0


# =============================================================================
# Repository Interface
# =============================================================================


class SubmissionRepository(ABC):
    """
    Owns the lifecycle of submission records.

    Implementations assign identities, persist records and serialise their
    own writes. They never validate field values.
    """

    @abstractmethod
    def create(self, submission: ValidatedSubmission) -> CreateResult:
        """Assign a new id and persist the record. Returns the id."""

    @abstractmethod
    def get_by_id(self, submission_id: int) -> LookupResult:
        """Get a record by id."""

    @abstractmethod
    def update(self, submission_id: int, submission: Submission) -> UpdateResult:
        """Replace every field of an existing record but its id."""

    @abstractmethod
    def delete(self, submission_id: int) -> DeleteResult:
        """Remove a record. Stored files are left in place."""

    @abstractmethod
    def list_by_business(self, business_id: str) -> list[Submission]:
        """All records whose business_id equals `business_id`, in no particular order."""

    @abstractmethod
    def count(self) -> int:
        """Total number of records."""


# =============================================================================
# JSON Repository
# =============================================================================


class JsonSubmissionRepository(SubmissionRepository):
    """
    Repository for storing and retrieving submission records.

    Uses in-memory storage with optional file persistence. One lock
    covers reads and writes, so readers only see committed records;
    callers take no locks of their own.
    Records handed out are copies, so callers cannot mutate stored state.
    """

    def __init__(self, persist_path: Optional[str] = None):
        """
        Initialise repository.

        Args:
            persist_path: Optional path to persist data to JSON file
        """
        self._submissions: dict[int, Submission] = {}
        self._next_id = 1
        self._lock = threading.Lock()
        self._persist_path = Path(persist_path) if persist_path else None

        # Load existing data if persist path exists
        if self._persist_path and self._persist_path.exists():
            self._load_from_file()

    def _save_to_file(self) -> None:
        """Persist data to file. Raises OSError on failure."""
        if not self._persist_path:
            return

        data = {
            "submissions": [s.to_dict() for s in self._submissions.values()],
            "next_id": self._next_id,
            "saved_at": datetime.now().isoformat(),
        }

        self._persist_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._persist_path.with_suffix(self._persist_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2))
        tmp_path.replace(self._persist_path)

    def _load_from_file(self) -> None:
        """
        Load data from file.

        Unreadable records are skipped, but their ids are never handed out
        again. Whenever anything is skipped the file is first copied aside,
        since the next save rewrites it.
        """
        if not self._persist_path or not self._persist_path.exists():
            return

        try:
            data = json.loads(self._persist_path.read_text())
            records = data.get("submissions", [])
            if not isinstance(records, list):
                raise TypeError("submissions is not a list")
            next_id = int(data.get("next_id", 1))
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            backup = self._back_up_unreadable_file()
            logger.warning(
                "Could not load submission data from %s (copy kept at %s): %s",
                self._persist_path, backup, e,
            )
            return

        skipped = 0
        for record in records:
            try:
                submission = Submission.from_dict(record)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                skipped += 1
                next_id = max(next_id, _raw_id(record) + 1)
                logger.warning("Skipping unreadable submission record %r: %s", record, e)
                continue
            self._submissions[submission.id] = submission

        self._next_id = max(next_id, max(self._submissions, default=0) + 1)

        if skipped:
            backup = self._back_up_unreadable_file()
            logger.warning(
                "Skipped %d unreadable submission record(s); copy of %s kept at %s",
                skipped, self._persist_path, backup,
            )

    def _back_up_unreadable_file(self) -> Path:
        stamp = datetime.now().strftime("%Y%m%d%H%M%S%f")
        backup = self._persist_path.with_name(f"{self._persist_path.name}.unreadable-{stamp}")
        shutil.copy2(self._persist_path, backup)
        return backup

    # =========================================================================
    # CRUD Operations
    # =========================================================================

    def create(self, submission: ValidatedSubmission) -> CreateResult:
        with self._lock:
            submission_id = self._next_id
            record = Submission.from_validated(submission_id, submission)
            self._submissions[submission_id] = record
            self._next_id += 1

            try:
                self._save_to_file()
            except OSError as e:
                del self._submissions[submission_id]
                self._next_id = submission_id
                logger.error("Could not persist new submission: %s", e)
                return PersistenceError(detail=str(e))

        logger.info(
            "Created submission %d for business %s",
            submission_id,
            submission.business_id,
        )
        return submission_id

    def get_by_id(self, submission_id: int) -> LookupResult:
        with self._lock:
            record = self._submissions.get(submission_id)
            if record is None:
                return NotFoundError(submission_id=submission_id)
            return record.copy()

    def update(self, submission_id: int, submission: Submission) -> UpdateResult:
        if submission.id != submission_id:
            return IdMismatch(path_id=submission_id, body_id=submission.id)

        with self._lock:
            existing = self._submissions.get(submission_id)
            if existing is None:
                return NotFoundError(submission_id=submission_id)

            previous = existing.copy()
            existing.replace_with(submission)

            try:
                self._save_to_file()
            except OSError as e:
                existing.replace_with(previous)
                logger.error("Could not persist update of submission %d: %s", submission_id, e)
                return PersistenceError(detail=str(e))

        logger.info("Updated submission %d", submission_id)
        return OperationSuccess(submission_id=submission_id)

    def delete(self, submission_id: int) -> DeleteResult:
        with self._lock:
            existing = self._submissions.pop(submission_id, None)
            if existing is None:
                return NotFoundError(submission_id=submission_id)

            try:
                self._save_to_file()
            except OSError as e:
                self._submissions[submission_id] = existing
                logger.error("Could not persist deletion of submission %d: %s", submission_id, e)
                return PersistenceError(detail=str(e))

        # The stored file is kept; only the record goes
        logger.info("Deleted submission %d (file %s retained)", submission_id, existing.file_url)
        return OperationSuccess(submission_id=submission_id)

    # =========================================================================
    # Query Operations
    # =========================================================================

    def list_by_business(self, business_id: str) -> list[Submission]:
        with self._lock:
            return [
                s.copy()
                for s in self._submissions.values()
                if s.business_id == business_id
            ]

    def count(self) -> int:
        with self._lock:
            return len(self._submissions)
