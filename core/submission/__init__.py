"""
UGC Intake - Submission Module

Public intake of user-generated content: form fields plus exactly one
uploaded file, kept as a record a business can list, edit and delete.

Principles:
1. File first, then fields, then record
2. Consent is explicit ("true" or "on") or it is not given
3. Server-assigned fields never come from the client
4. Outcomes are returned as values, never raised
"""

from core.submission.schema import (
    Submission,
    ValidatedSubmission,
    REQUIRED_SUBMISSION_FIELDS,
    CONSENT_AFFIRMATIVE_VALUES,
    MIN_DATE_OF_BIRTH,
    local_naive,
    FORM_FIELD_NAMES,
)
from core.submission.results import (
    # Failures
    SubmissionFailure,
    ValidationCode,
    ValidationError,
    NotFoundError,
    IdMismatch,
    StorageError,
    PersistenceError,
    # Successes
    StoredFile,
    OperationSuccess,
    IntakeAccepted,
    # Messages
    NO_FILE_MESSAGE,
    SERVER_ERROR_PREFIX,
)
from core.submission.storage import (
    FileStore,
    LocalFileStore,
)
from core.submission.validation import (
    validate_submission_fields,
    validate_record,
    parse_optional_date,
    parse_consent,
)
from core.submission.repository import (
    SubmissionRepository,
    JsonSubmissionRepository,
)
from core.submission.query import QueryService
from core.submission.service import SubmissionService

__all__ = [
    # Schema
    "Submission",
    "ValidatedSubmission",
    "REQUIRED_SUBMISSION_FIELDS",
    "CONSENT_AFFIRMATIVE_VALUES",
    "MIN_DATE_OF_BIRTH",
    "local_naive",
    "FORM_FIELD_NAMES",
    # Results
    "SubmissionFailure",
    "ValidationCode",
    "ValidationError",
    "NotFoundError",
    "IdMismatch",
    "StorageError",
    "PersistenceError",
    "StoredFile",
    "OperationSuccess",
    "IntakeAccepted",
    "NO_FILE_MESSAGE",
    "SERVER_ERROR_PREFIX",
    # Storage
    "FileStore",
    "LocalFileStore",
    # Validation
    "validate_submission_fields",
    "validate_record",
    "parse_optional_date",
    "parse_consent",
    # Repository
    "SubmissionRepository",
    "JsonSubmissionRepository",
    # Services
    "QueryService",
    "SubmissionService",
]
