"""
Submission Results - Explicit Outcomes for Submission Operations

Every operation on the submission core returns either a success value or
one of the failure types below. Nothing here is raised; callers branch on
`isinstance(result, SubmissionFailure)`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from core.submission.schema import Submission, ValidatedSubmission


# =============================================================================
# Validation Codes
# =============================================================================


class ValidationCode(Enum):
    """Rule that rejected a submission."""

    MISSING_OR_CONSENT = "missing_or_consent"
    FUTURE_DATE = "future_date"
    TOO_OLD = "too_old"


# Messages shown to the person filling in the form
MISSING_OR_CONSENT_MESSAGE = "Missing required fields or consent not given."
FUTURE_DATE_OF_BIRTH_MESSAGE = "Date of birth cannot be in the future."
FUTURE_DATE_TAKEN_MESSAGE = "Date taken cannot be in the future."
TOO_OLD_MESSAGE = "Please enter a valid date of birth."
ID_MISMATCH_MESSAGE = "ID mismatch"
NO_FILE_MESSAGE = "No file uploaded."
SERVER_ERROR_PREFIX = "Server error: "


# =============================================================================
# Failures
# =============================================================================


@dataclass(frozen=True)
class SubmissionFailure(ABC):
    """Base for all failure outcomes."""

    status_code: ClassVar[int] = 400

    @property
    @abstractmethod
    def reason(self) -> str:
        """Human-readable explanation returned to the caller."""


@dataclass(frozen=True)
class ValidationError(SubmissionFailure):
    """Returned when submitted field values break an intake rule."""

    code: ValidationCode
    message: str

    @property
    def reason(self) -> str:
        return self.message


@dataclass(frozen=True)
class NotFoundError(SubmissionFailure):
    """Returned when no record exists with the requested id."""

    status_code: ClassVar[int] = 404

    submission_id: int

    @property
    def reason(self) -> str:
        return f"Submission {self.submission_id} not found"


@dataclass(frozen=True)
class IdMismatch(SubmissionFailure):
    """Returned when the id in an update body differs from the path id."""

    path_id: int
    body_id: int

    @property
    def reason(self) -> str:
        return ID_MISMATCH_MESSAGE


@dataclass(frozen=True)
class StorageError(SubmissionFailure):
    """Returned when uploaded bytes could not be written."""

    detail: str

    @property
    def reason(self) -> str:
        return SERVER_ERROR_PREFIX + self.detail


@dataclass(frozen=True)
class PersistenceError(SubmissionFailure):
    """Returned when a record could not be saved."""

    detail: str

    @property
    def reason(self) -> str:
        return SERVER_ERROR_PREFIX + self.detail


# =============================================================================
# Successes
# =============================================================================


@dataclass(frozen=True)
class StoredFile:
    """Reference to bytes written by a file store."""

    reference: str
    stored_name: str
    size_bytes: int


@dataclass(frozen=True)
class OperationSuccess:
    """Returned by update and delete when the record was changed."""

    submission_id: int


@dataclass(frozen=True)
class IntakeAccepted:
    """Returned when a public submission was stored."""

    submission_id: int
    file_url: str
    message: str = "Submission received."


# =============================================================================
# Result Aliases
# =============================================================================

SaveFileResult = Union[StoredFile, StorageError]
ValidationResult = Union[ValidatedSubmission, ValidationError]
CreateResult = Union[int, PersistenceError]
LookupResult = Union[Submission, NotFoundError]
UpdateResult = Union[OperationSuccess, NotFoundError, IdMismatch, ValidationError, PersistenceError]
DeleteResult = Union[OperationSuccess, NotFoundError, PersistenceError]
IntakeResult = Union[IntakeAccepted, ValidationError, StorageError, PersistenceError]
