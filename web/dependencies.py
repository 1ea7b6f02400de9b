"""
Request Dependencies

Collaborators are built once per app in `create_app` and kept on
`app.state`; routes receive them through FastAPI dependencies so tests
can swap any of them with `app.dependency_overrides`.
"""

from __future__ import annotations

from fastapi import Depends, Request

from core.submission import (
    FileStore,
    QueryService,
    SubmissionRepository,
    SubmissionService,
)
from utils.config import Config


def get_config(request: Request) -> Config:
    """Configuration the app was created with."""
    return request.app.state.config


def get_file_store(request: Request) -> FileStore:
    """Upload storage shared by every request."""
    return request.app.state.file_store


def get_submission_repository(request: Request) -> SubmissionRepository:
    """Record storage shared by every request."""
    return request.app.state.repository


def get_submission_service(
    repository: SubmissionRepository = Depends(get_submission_repository),
    file_store: FileStore = Depends(get_file_store),
) -> SubmissionService:
    return SubmissionService(repository=repository, file_store=file_store)


def get_query_service(
    repository: SubmissionRepository = Depends(get_submission_repository),
) -> QueryService:
    return QueryService(repository)
