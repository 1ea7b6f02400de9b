"""
Submission Service - Create, Update and Delete Flows

Coordinates the file store, the intake rules and the repository.

Creation order is fixed: the uploaded file is written first, then the
form fields are validated, then the record is created. A rejected
submission therefore leaves its file behind in the upload area; the
orphan is logged, not removed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from core.submission.repository import SubmissionRepository
from core.submission.results import (
    DeleteResult,
    IntakeAccepted,
    IntakeResult,
    PersistenceError,
    StorageError,
    UpdateResult,
    ValidationError,
)
from core.submission.schema import Submission
from core.submission.storage import FileStore
from core.submission.validation import validate_record, validate_submission_fields


logger = logging.getLogger(__name__)


class SubmissionService:
    """
    Write-side operations on submissions.

    Holds no state of its own beyond its collaborators.
    """

    def __init__(
        self,
        repository: SubmissionRepository,
        file_store: FileStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Args:
            repository: Record storage
            file_store: Upload storage
            clock: Source of the current local time
        """
        self._repository = repository
        self._file_store = file_store
        self._clock = clock

    def submit(
        self,
        raw_fields: Mapping[str, Any],
        file_name: str,
        content: bytes,
    ) -> IntakeResult:
        """
        Accept a public submission.

        Args:
            raw_fields: Form values keyed by form field name
            file_name: Client-supplied name of the uploaded file
            content: Uploaded bytes

        Returns:
            IntakeAccepted, or the ValidationError / StorageError /
            PersistenceError that stopped the submission
        """
        stored = self._file_store.save(file_name, content)
        if isinstance(stored, StorageError):
            return stored

        validated = validate_submission_fields(raw_fields, stored.reference, now=self._clock())
        if isinstance(validated, ValidationError):
            logger.warning(
                "Rejected submission (%s); orphaned upload %s",
                validated.code.value,
                stored.reference,
            )
            return validated

        created = self._repository.create(validated)
        if isinstance(created, PersistenceError):
            logger.warning("Submission not saved; orphaned upload %s", stored.reference)
            return created

        return IntakeAccepted(submission_id=created, file_url=stored.reference)

    def update(self, submission_id: int, submission: Submission) -> UpdateResult:
        """
        Replace a submission with the full record supplied by the dashboard.

        The record is checked against the required-field and date rules
        before the repository sees it.
        """
        today = self._clock().date()
        invalid = validate_record(submission, today=today)
        if invalid is not None:
            return invalid
        return self._repository.update(submission_id, submission)

    def delete(self, submission_id: int) -> DeleteResult:
        """Delete a submission record. The stored file is not removed."""
        return self._repository.delete(submission_id)
