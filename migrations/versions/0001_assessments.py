"""assessment document and response tables

Revision ID: 0001
Revises:
Create Date: 2026-10-13

This migration creates the tables used by the assessment stores:

- assessments
- assessment_responses
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create assessments and assessment_responses tables."""

    op.create_table(
        "assessments",
        sa.Column("assessment_id", sa.String(length=128), primary_key=True),
        sa.Column("job_id", sa.String(length=128), nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("document", postgresql.JSONB, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )

    op.create_index("idx_assessments_job_id", "assessments", ["job_id"])

    op.create_table(
        "assessment_responses",
        sa.Column("assessment_id", sa.String(length=128), primary_key=True),
        sa.Column("responses", postgresql.JSONB, nullable=False),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )


def downgrade() -> None:
    """Drop assessment_responses and assessments tables."""

    op.drop_table("assessment_responses")

    op.drop_index("idx_assessments_job_id", table_name="assessments")
    op.drop_table("assessments")
