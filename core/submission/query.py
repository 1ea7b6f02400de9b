"""
Submission Queries - Read Side for the Business Dashboard

Listing and lookup built on a SubmissionRepository. Results are computed
fresh from the repository on every call.
"""

from __future__ import annotations

from core.submission.repository import SubmissionRepository
from core.submission.results import LookupResult
from core.submission.schema import Submission


class QueryService:
    """Read-only access to submission records."""

    def __init__(self, repository: SubmissionRepository):
        self._repository = repository

    def list_by_business(self, business_id: str) -> list[Submission]:
        """
        Get every submission for a business, most recent first.

        Args:
            business_id: Exact business identifier to match

        Returns:
            Submissions ordered by date_submitted descending
        """
        return sorted(
            self._repository.list_by_business(business_id),
            key=lambda s: s.date_submitted,
            reverse=True,
        )

    def get_by_id(self, submission_id: int) -> LookupResult:
        """Get a single submission, or NotFoundError."""
        return self._repository.get_by_id(submission_id)
