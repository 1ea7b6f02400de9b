"""
Submission Routes - Public Intake and Dashboard API

Public:
- POST   /api/Submissions               - Multipart form plus one file

Dashboard:
- GET    /api/Submissions?businessId=X  - List, newest first
- GET    /api/Submissions/{id}          - Single record
- PUT    /api/Submissions/{id}          - Full replace (204)
- DELETE /api/Submissions/{id}          - Remove record, keep file
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from core.submission import (
    NO_FILE_MESSAGE,
    SERVER_ERROR_PREFIX,
    IntakeAccepted,
    NotFoundError,
    OperationSuccess,
    PersistenceError,
    QueryService,
    StorageError,
    SubmissionFailure,
    SubmissionService,
)
from utils.config import Config
from web.dependencies import get_config, get_query_service, get_submission_service
from web.schemas import SubmissionPayload


logger = logging.getLogger(__name__)


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter(prefix="/api/Submissions", tags=["submissions"])

REDACTED_SERVER_ERROR = "Server error. Please try again later."


# =============================================================================
# Response Helpers
# =============================================================================


def bad_request(message: str) -> JSONResponse:
    """400 with a human-readable reason."""
    return JSONResponse(status_code=400, content={"message": message})


def server_error_message(detail: str, config: Config) -> str:
    """Message for an internal failure, redacted when configured."""
    if config.redact_server_errors:
        return REDACTED_SERVER_ERROR
    return SERVER_ERROR_PREFIX + detail


def failure_response(failure: SubmissionFailure, config: Config) -> JSONResponse:
    """Map a failure outcome onto its HTTP response."""
    if isinstance(failure, NotFoundError):
        raise HTTPException(status_code=404, detail=failure.reason)

    if isinstance(failure, (StorageError, PersistenceError)):
        return bad_request(server_error_message(failure.detail, config))

    return JSONResponse(status_code=failure.status_code, content={"message": failure.reason})


# =============================================================================
# Dashboard Reads
# =============================================================================


@router.get("")
async def list_submissions(
    business_id: str = Query(..., alias="businessId"),
    queries: QueryService = Depends(get_query_service),
):
    """Every submission for a business, most recent first."""
    submissions = queries.list_by_business(business_id)
    return JSONResponse([
        SubmissionPayload.from_submission(s).to_wire() for s in submissions
    ])


@router.get("/{submission_id}")
async def get_submission(
    submission_id: int,
    queries: QueryService = Depends(get_query_service),
):
    """Single submission (used for edit/delete in the dashboard)."""
    result = queries.get_by_id(submission_id)
    if isinstance(result, NotFoundError):
        raise HTTPException(status_code=404, detail=result.reason)

    return JSONResponse(SubmissionPayload.from_submission(result).to_wire())


# =============================================================================
# Public Intake
# =============================================================================


@router.post("")
async def create_submission(
    request: Request,
    service: SubmissionService = Depends(get_submission_service),
    config: Config = Depends(get_config),
):
    """
    Accept a UGC submission from the public form.

    The first file part is stored; text parts are the form fields.
    """
    form = await request.form()

    uploads = [value for _, value in form.multi_items() if isinstance(value, UploadFile)]
    if not uploads:
        return bad_request(NO_FILE_MESSAGE)

    raw_fields: dict[str, str] = {}
    for key, value in form.multi_items():
        if isinstance(value, str):
            raw_fields.setdefault(key, value)

    upload = uploads[0]
    try:
        content = await upload.read()
        result = service.submit(raw_fields, upload.filename or "", content)
    except Exception as e:
        logger.exception("Unexpected failure while accepting submission")
        return bad_request(server_error_message(str(e), config))

    if isinstance(result, IntakeAccepted):
        return JSONResponse({"message": result.message})

    return failure_response(result, config)


# =============================================================================
# Dashboard Writes
# =============================================================================


@router.put("/{submission_id}")
async def update_submission(
    submission_id: int,
    payload: SubmissionPayload,
    service: SubmissionService = Depends(get_submission_service),
    config: Config = Depends(get_config),
):
    """Replace every field of a submission with the supplied record."""
    result = service.update(submission_id, payload.to_submission())

    if isinstance(result, OperationSuccess):
        return Response(status_code=204)

    return failure_response(result, config)


@router.delete("/{submission_id}")
async def delete_submission(
    submission_id: int,
    service: SubmissionService = Depends(get_submission_service),
    config: Config = Depends(get_config),
):
    """Remove a submission record. Its stored file stays on disk."""
    result = service.delete(submission_id)

    if isinstance(result, OperationSuccess):
        return Response(status_code=200)

    return failure_response(result, config)
