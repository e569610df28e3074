"""
Writing Submissions Backend — Writing Route Handlers
=====================================================

What:  Handles GET /api/writing/submissions (history) and GET /api/writing/{id} (detail).
How:   The auth dependency supplies the caller's id, the session dependency
       supplies an AsyncSession, and SubmissionService does the query.
Who:   Called by the writing history pages of the web client.

Neither endpoint reads a user id from the request. Identity comes only from
get_current_user_id.

Caching:
    Both responses are per-user and change whenever a new submission is
    evaluated, so they are sent with `Cache-Control: private, no-store`.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user_id
from app.database import get_db_session
from app.schemas.writing import (
    ErrorResponse,
    SubmissionDetailResponse,
    SubmissionListResponse,
)
from app.services.submission_service import submission_service

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api/writing", tags=["Writing"])

NO_STORE = "private, no-store"


@router.get(
    "/submissions",
    response_model=SubmissionListResponse,
    responses={
        200: {"description": "All of the caller's submissions, newest first"},
        401: {"description": "Missing or invalid session", "model": ErrorResponse},
        500: {"description": "Failed to fetch submissions", "model": ErrorResponse},
    },
    summary="List the caller's writing submissions",
)
async def list_submissions(
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SubmissionListResponse:
    """
    List the authenticated user's writing submissions.

    Errors (rendered by the global exception handlers):
        HTTP 401: AuthenticationError from the auth dependency
        HTTP 500: DatabaseError → {"error": "Failed to fetch submissions"}
    """
    submissions = await submission_service.list_submissions(db=db, user_id=user_id)
    response.headers["Cache-Control"] = NO_STORE
    return SubmissionListResponse(submissions=submissions)


@router.get(
    "/{submission_id}",
    response_model=SubmissionDetailResponse,
    responses={
        200: {"description": "The requested submission"},
        401: {"description": "Missing or invalid session", "model": ErrorResponse},
        404: {"description": "No such submission for this user", "model": ErrorResponse},
        500: {"description": "Failed to fetch submission", "model": ErrorResponse},
    },
    summary="Get one of the caller's writing submissions",
)
async def get_submission(
    submission_id: str,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SubmissionDetailResponse:
    """
    Get a single submission by id.

    Submissions owned by someone else produce the same 404 as unknown ids.
    """
    submission = await submission_service.get_submission(
        db=db,
        user_id=user_id,
        submission_id=submission_id,
    )
    response.headers["Cache-Control"] = NO_STORE
    return SubmissionDetailResponse(submission=submission)
