"""
Submission Schema - UGC Submission Record

Defines the canonical record for user-generated content submissions.
A submission is a set of form fields plus exactly one uploaded file,
referenced by the URL the file store assigned to it.

Principles:
- Required fields and consent are enforced before a record exists
- Server-assigned fields (id, date_submitted, file_url) never come from the form
- Dates are calendar dates; times supplied by the client are discarded
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Final, Optional


# =============================================================================
# Constants
# =============================================================================

# Required form fields - submission rejected if any is blank
REQUIRED_SUBMISSION_FIELDS: Final[tuple[str, ...]] = (
    "first_name",
    "last_name",
    "email",
    "business_id",
)

# Raw consent values treated as an explicit opt-in
CONSENT_AFFIRMATIVE_VALUES: Final[tuple[str, ...]] = ("true", "on")

# Earliest accepted date of birth
MIN_DATE_OF_BIRTH: Final[date] = date(1900, 1, 1)

# Form field names as posted by the public intake form
FORM_FIELD_NAMES: Final[dict[str, str]] = {
    "first_name": "FirstName",
    "last_name": "LastName",
    "email": "Email",
    "city": "City",
    "country": "Country",
    "date_of_birth": "DateOfBirth",
    "date_taken": "DateTaken",
    "consent_given": "ConsentGiven",
    "business_id": "BusinessId",
}


# =============================================================================
# Helpers
# =============================================================================


def is_blank(value: Optional[str]) -> bool:
    """Check if a text value is missing, empty or whitespace only."""
    return value is None or not str(value).strip()


def local_naive(value: datetime) -> datetime:
    """Express a timestamp as naive server-local time, the form every stored record uses."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _date_to_str(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _date_from_str(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


# =============================================================================
# Validated Submission
# =============================================================================


@dataclass(frozen=True)
class ValidatedSubmission:
    """
    Submission that has passed intake validation.

    Carries every form field plus the server-assigned timestamp and file
    reference. Has no identity yet - the repository assigns one on create.
    """

    first_name: str
    last_name: str
    email: str
    business_id: str
    date_submitted: datetime
    file_url: str
    consent_given: bool = True
    city: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_taken: Optional[date] = None


# =============================================================================
# Submission Record
# =============================================================================


@dataclass
class Submission:
    """
    Persisted UGC submission.

    The repository owns the record lifecycle. Every field but `id` may be
    replaced by an update; `id` is immutable once assigned.
    """

    id: int
    first_name: str
    last_name: str
    email: str
    business_id: str
    date_submitted: datetime
    file_url: str
    consent_given: bool
    city: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_taken: Optional[date] = None

    @classmethod
    def from_validated(
        cls,
        submission_id: int,
        validated: ValidatedSubmission,
    ) -> "Submission":
        """Create a record from a validated submission and a new id."""
        return cls(
            id=submission_id,
            first_name=validated.first_name,
            last_name=validated.last_name,
            email=validated.email,
            business_id=validated.business_id,
            date_submitted=validated.date_submitted,
            file_url=validated.file_url,
            consent_given=validated.consent_given,
            city=validated.city,
            country=validated.country,
            date_of_birth=validated.date_of_birth,
            date_taken=validated.date_taken,
        )

    def replace_with(self, other: "Submission") -> None:
        """Overwrite every field except `id` with the values of `other`."""
        for f in fields(self):
            if f.name != "id":
                setattr(self, f.name, getattr(other, f.name))

    def copy(self) -> "Submission":
        """Return an independent copy of this record."""
        return Submission.from_dict(self.to_dict())

    def to_dict(self) -> dict:
        """Convert submission to dictionary for serialisation."""
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "city": self.city,
            "country": self.country,
            "date_of_birth": _date_to_str(self.date_of_birth),
            "date_taken": _date_to_str(self.date_taken),
            "date_submitted": self.date_submitted.isoformat(),
            "file_url": self.file_url,
            "consent_given": self.consent_given,
            "business_id": self.business_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Submission":
        """Create submission from dictionary."""
        return cls(
            id=int(data["id"]),
            first_name=data["first_name"],
            last_name=data["last_name"],
            email=data["email"],
            business_id=data["business_id"],
            date_submitted=local_naive(datetime.fromisoformat(data["date_submitted"])),
            file_url=data["file_url"],
            consent_given=bool(data["consent_given"]),
            city=data.get("city"),
            country=data.get("country"),
            date_of_birth=_date_from_str(data.get("date_of_birth")),
            date_taken=_date_from_str(data.get("date_taken")),
        )
