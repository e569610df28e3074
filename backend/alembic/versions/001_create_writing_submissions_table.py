"""Create writing_submissions table

Revision ID: 001
Revises: None
Create Date: 2025-01-20 00:00:00.000000+00:00

What:  Creates `writing_submissions` and the (user_id, created_at DESC) index
       used by the per-user history query.

Rollback: downgrade() drops the table (destructive, all submissions lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the table, then the history index. See app/models/writing_submission.py."""
    op.create_table(
        "writing_submissions",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Opaque submission identifier",
        ),
        sa.Column(
            "user_id",
            sa.String(64),
            nullable=False,
            comment="Identity of the user who wrote the submission",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When the submission was stored (UTC)",
        ),
        sa.Column(
            "difficulty",
            sa.String(32),
            nullable=False,
            comment="Difficulty label, e.g. B1_BASIC",
        ),
        sa.Column(
            "topic",
            sa.String(255),
            nullable=True,
            comment="Subject of the writing prompt",
        ),
        sa.Column(
            "prompt_text",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Prompt shown to the user",
        ),
        sa.Column(
            "user_text",
            sa.Text(),
            nullable=False,
            comment="Text written by the user",
        ),
        sa.Column(
            "word_count",
            sa.Integer(),
            nullable=False,
            comment="Number of words in user_text, computed at submission time",
        ),
        sa.Column(
            "evaluation",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
            comment="Evaluation result produced by the evaluation subsystem",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_writing_submissions_user_created",
        "writing_submissions",
        ["user_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_writing_submissions_user_created", table_name="writing_submissions")
    op.drop_table("writing_submissions")
