"""
Submission Validation - Intake Rules for Public Submissions

Turns the raw form fields of a public submission into a ValidatedSubmission,
or reports the first rule the submission breaks. Rules are applied in a
fixed order so the message returned for a given payload is stable:

1. Required fields and consent
2. Dates in the future
3. Date of birth before 1900-01-01

This module never touches storage.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from dateutil import parser as date_parser

from core.submission.results import (
    FUTURE_DATE_OF_BIRTH_MESSAGE,
    FUTURE_DATE_TAKEN_MESSAGE,
    MISSING_OR_CONSENT_MESSAGE,
    TOO_OLD_MESSAGE,
    ValidationCode,
    ValidationError,
    ValidationResult,
)
from core.submission.schema import (
    CONSENT_AFFIRMATIVE_VALUES,
    FORM_FIELD_NAMES,
    MIN_DATE_OF_BIRTH,
    REQUIRED_SUBMISSION_FIELDS,
    Submission,
    ValidatedSubmission,
    is_blank,
)


# =============================================================================
# Field Parsing
# =============================================================================


def parse_optional_date(value: Any) -> Optional[date]:
    """
    Parse free-form text into a date.

    Unparseable, empty or missing input yields None rather than an error.
    Any time component is discarded.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError):
        return None


def parse_consent(value: Any) -> bool:
    """Consent is given only for the exact raw values "true" and "on"."""
    return value in CONSENT_AFFIRMATIVE_VALUES


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _raw(raw_fields: Mapping[str, Any], name: str) -> Any:
    return raw_fields.get(FORM_FIELD_NAMES[name])


# =============================================================================
# Rule Checks
# =============================================================================


def check_date_rules(
    date_of_birth: Optional[date],
    date_taken: Optional[date],
    today: date,
) -> Optional[ValidationError]:
    """
    Apply the future-date and minimum-date rules.

    Returns:
        ValidationError for the first broken rule, None if all hold
    """
    if date_of_birth is not None and date_of_birth > today:
        return ValidationError(ValidationCode.FUTURE_DATE, FUTURE_DATE_OF_BIRTH_MESSAGE)

    if date_taken is not None and date_taken > today:
        return ValidationError(ValidationCode.FUTURE_DATE, FUTURE_DATE_TAKEN_MESSAGE)

    if date_of_birth is not None and date_of_birth < MIN_DATE_OF_BIRTH:
        return ValidationError(ValidationCode.TOO_OLD, TOO_OLD_MESSAGE)

    return None


def missing_required_fields(values: Mapping[str, Any]) -> list[str]:
    """Names of required fields that are blank in `values`."""
    return [name for name in REQUIRED_SUBMISSION_FIELDS if is_blank(values.get(name))]


# =============================================================================
# Intake Validation
# =============================================================================


def validate_submission_fields(
    raw_fields: Mapping[str, Any],
    file_url: str,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """
    Validate the raw form fields of a public submission.

    Args:
        raw_fields: Form values keyed by form field name (FirstName, ...)
        file_url: Reference returned by the file store for the upload
        now: Submission time; defaults to the current local time

    Returns:
        ValidatedSubmission on success, ValidationError otherwise
    """
    now = now or datetime.now()

    values = {
        name: _raw(raw_fields, name)
        for name in REQUIRED_SUBMISSION_FIELDS
    }
    consent_given = parse_consent(_raw(raw_fields, "consent_given"))

    if missing_required_fields(values) or not consent_given:
        return ValidationError(ValidationCode.MISSING_OR_CONSENT, MISSING_OR_CONSENT_MESSAGE)

    date_of_birth = parse_optional_date(_raw(raw_fields, "date_of_birth"))
    date_taken = parse_optional_date(_raw(raw_fields, "date_taken"))

    date_error = check_date_rules(date_of_birth, date_taken, now.date())
    if date_error:
        return date_error

    return ValidatedSubmission(
        first_name=str(values["first_name"]),
        last_name=str(values["last_name"]),
        email=str(values["email"]),
        business_id=str(values["business_id"]),
        date_submitted=now,
        file_url=file_url,
        consent_given=consent_given,
        city=_optional_text(_raw(raw_fields, "city")),
        country=_optional_text(_raw(raw_fields, "country")),
        date_of_birth=date_of_birth,
        date_taken=date_taken,
    )


def validate_record(
    submission: Submission,
    today: Optional[date] = None,
) -> Union[None, ValidationError]:
    """
    Validate a full record supplied by the dashboard for an update.

    Required fields and date rules apply; consent is only enforced at intake.

    Returns:
        None if the record is acceptable, ValidationError otherwise
    """
    today = today or date.today()

    values = {name: getattr(submission, name) for name in REQUIRED_SUBMISSION_FIELDS}
    missing = missing_required_fields(values)
    if missing:
        return ValidationError(
            ValidationCode.MISSING_OR_CONSENT,
            "Missing required fields: " + ", ".join(missing),
        )

    return check_date_rules(submission.date_of_birth, submission.date_taken, today)
