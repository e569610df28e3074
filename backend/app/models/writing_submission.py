"""
Writing Submissions Backend — WritingSubmission SQLAlchemy Model
=================================================================

What:  ORM model representing the `writing_submissions` table.
Who:   Read by SubmissionService; tracked by Alembic for migrations.
When:  Rows are written by the writing-evaluation flow; this backend only reads them.

Table Design:
    - String primary key: ids are opaque to clients; new rows get a uuid4 string
    - user_id: owner identity from the session token; the only list filter
    - evaluation: opaque JSON produced by the evaluation subsystem
      (JSONB on PostgreSQL, plain JSON elsewhere)
    - created_at: UTC with timezone; the sole sort key for history listings

    Composite index (user_id, created_at DESC):
        Serves "this user's submissions, newest first" as a single index range scan.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class WritingSubmission(Base):
    """
    One persisted writing exercise attempt.

    Query Patterns:
        - History: SELECT ... WHERE user_id = :uid ORDER BY created_at DESC
          → idx_writing_submissions_user_created
        - Detail:  SELECT ... WHERE id = :id AND user_id = :uid
          → primary key
    """

    __tablename__ = "writing_submissions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Opaque submission identifier",
    )

    # ── Ownership ─────────────────────────────────────────────────────────
    # Never projected into API responses
    user_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Identity of the user who wrote the submission",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the submission was stored (UTC)",
    )

    # ── Exercise ──────────────────────────────────────────────────────────
    difficulty: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Difficulty label, e.g. B1_BASIC",
    )

    topic: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Subject of the writing prompt",
    )

    prompt_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
        comment="Prompt shown to the user",
    )

    # ── Answer ────────────────────────────────────────────────────────────
    user_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Text written by the user",
    )

    word_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of words in user_text, computed at submission time",
    )

    evaluation: Mapped[Optional[Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
        default=None,
        comment="Evaluation result produced by the evaluation subsystem",
    )

    __table_args__ = (
        Index(
            "idx_writing_submissions_user_created",
            user_id,
            created_at.desc(),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<WritingSubmission(id={self.id}, user_id='{self.user_id}', "
            f"created_at='{self.created_at}')>"
        )
