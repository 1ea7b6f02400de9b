"""
Wire Schema - JSON Shape of a Submission

The dashboard reads and writes records using PascalCase field names
(Id, FirstName, DateOfBirth, ...). Timestamps with an offset are stored
as naive server-local time.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal

from core.submission import Submission, local_naive


class SubmissionPayload(BaseModel):
    """Full submission record as sent to and received from the dashboard."""

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    id: int
    first_name: str
    last_name: str
    email: str
    city: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    date_taken: Optional[date] = None
    date_submitted: datetime
    file_url: str
    consent_given: bool = False
    business_id: str

    @classmethod
    def from_submission(cls, submission: Submission) -> "SubmissionPayload":
        return cls(
            id=submission.id,
            first_name=submission.first_name,
            last_name=submission.last_name,
            email=submission.email,
            city=submission.city,
            country=submission.country,
            date_of_birth=submission.date_of_birth,
            date_taken=submission.date_taken,
            date_submitted=submission.date_submitted,
            file_url=submission.file_url,
            consent_given=submission.consent_given,
            business_id=submission.business_id,
        )

    def to_submission(self) -> Submission:
        return Submission(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            business_id=self.business_id,
            date_submitted=local_naive(self.date_submitted),
            file_url=self.file_url,
            consent_given=self.consent_given,
            city=self.city,
            country=self.country,
            date_of_birth=self.date_of_birth,
            date_taken=self.date_taken,
        )

    def to_wire(self) -> dict:
        """JSON-ready dict with PascalCase keys."""
        return self.model_dump(by_alias=True, mode="json")
