"""initial schema: transcripts, cfo_assumptions, rd_benchmarks

Revision ID: 3f9c2e7b1d40
Revises:
Create Date: 2026-10-18 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f9c2e7b1d40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "transcripts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("clip_id", sa.String(length=255), nullable=True),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("words", postgresql.JSONB(), nullable=True),
        sa.Column("caption_segments", postgresql.JSONB(), nullable=True),
        sa.Column("has_word_timestamps", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_transcripts_clip_id", "transcripts", ["clip_id"])

    op.create_table(
        "cfo_assumptions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("metric_key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=32), nullable=True),
        sa.Column("source", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_cfo_assumptions_metric_key", "cfo_assumptions", ["metric_key"], unique=True
    )

    op.create_table(
        "rd_benchmarks",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("metric_key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=32), nullable=True),
        sa.Column("confidence", sa.String(length=16), nullable=True),
        sa.Column("source_notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_rd_benchmarks_metric_key", "rd_benchmarks", ["metric_key"], unique=True
    )


def downgrade() -> None:
    op.drop_index("ix_rd_benchmarks_metric_key", table_name="rd_benchmarks")
    op.drop_table("rd_benchmarks")
    op.drop_index("ix_cfo_assumptions_metric_key", table_name="cfo_assumptions")
    op.drop_table("cfo_assumptions")
    op.drop_index("ix_transcripts_clip_id", table_name="transcripts")
    op.drop_table("transcripts")
