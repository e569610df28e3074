"""
Writing Submissions Backend — Submission Service
=================================================

What:  Read path for a user's writing submissions (history list and detail).
How:   Runs one projected, owner-filtered query per call and maps the rows
       onto SubmissionView.
Who:   Called by the /api/writing route handlers.

Ownership:
    Every query carries `WHERE user_id = :user_id` with the identity from the
    auth dependency. Rows of other users are never read, so concurrent
    requests cannot see each other's data regardless of scheduling.

Error Handling Strategy:
    Any exception raised while querying is logged with a fixed prefix and
    replaced by DatabaseError carrying a generic message. The underlying
    exception type goes into the error context for the server log only.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.writing_submission import WritingSubmission
from app.schemas.writing import SubmissionView

logger = logging.getLogger(__name__)

LIST_ERROR_PREFIX = "List writing submissions error:"
GET_ERROR_PREFIX = "Get writing submission error:"

# The only columns ever read for the client. user_id is deliberately absent.
SUBMISSION_VIEW_COLUMNS = (
    WritingSubmission.id,
    WritingSubmission.created_at,
    WritingSubmission.difficulty,
    WritingSubmission.topic,
    WritingSubmission.prompt_text,
    WritingSubmission.user_text,
    WritingSubmission.word_count,
    WritingSubmission.evaluation,
)


def _to_view(row) -> SubmissionView:
    return SubmissionView(
        id=row.id,
        created_at=row.created_at,
        difficulty=row.difficulty,
        topic=row.topic,
        prompt_text=row.prompt_text,
        user_text=row.user_text,
        word_count=row.word_count,
        evaluation=row.evaluation,
    )


class SubmissionService:
    """
    Stateless read service for writing submissions.

    Responsibilities:
        - list_submissions(): full history of one user, newest first
        - get_submission(): one submission of one user
    """

    async def list_submissions(self, db: AsyncSession, user_id: str) -> List[SubmissionView]:
        """
        Return every submission owned by `user_id`, newest first.

        Query plan:
            SELECT id, created_at, difficulty, topic, prompt_text,
                   user_text, word_count, evaluation
            FROM writing_submissions
            WHERE user_id = :user_id
            ORDER BY created_at DESC
            → idx_writing_submissions_user_created

        The result is not paginated. Rows sharing a created_at value come back
        in whatever order the database produces.

        Returns:
            List of SubmissionView (empty when the user has no history)

        Raises:
            DatabaseError: "Failed to fetch submissions" on any query failure
        """
        try:
            result = await db.execute(
                select(*SUBMISSION_VIEW_COLUMNS)
                .where(WritingSubmission.user_id == user_id)
                .order_by(WritingSubmission.created_at.desc())
            )
            submissions = [_to_view(row) for row in result.all()]
        except Exception as e:
            logger.error("%s %s", LIST_ERROR_PREFIX, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch submissions",
                context={"error_type": type(e).__name__},
            )

        logger.debug("Listed %d submissions for user %s", len(submissions), user_id)
        return submissions

    async def get_submission(
        self,
        db: AsyncSession,
        user_id: str,
        submission_id: str,
    ) -> SubmissionView:
        """
        Return one submission, provided it belongs to `user_id`.

        Raises:
            NotFoundError: No such submission for this user (→ 404)
            DatabaseError: "Failed to fetch submission" on query failure (→ 500)
        """
        try:
            result = await db.execute(
                select(*SUBMISSION_VIEW_COLUMNS).where(
                    WritingSubmission.id == submission_id,
                    WritingSubmission.user_id == user_id,
                )
            )
            row = result.one_or_none()
        except Exception as e:
            logger.error("%s %s", GET_ERROR_PREFIX, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch submission",
                context={"submission_id": submission_id, "error_type": type(e).__name__},
            )

        if row is None:
            raise NotFoundError(resource="submission", resource_id=submission_id)

        return _to_view(row)


# ── Singleton Instance ────────────────────────────────────────────────────
submission_service = SubmissionService()
