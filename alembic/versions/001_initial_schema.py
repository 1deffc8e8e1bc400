"""Initial schema — companions, user_companions, mood_entries.

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ── 1. companions ───────────────────────────────────────────────
    op.create_table(
        "companions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("age", sa.Integer, nullable=False),
        sa.Column("gender", sa.String, nullable=False),
        sa.Column("bio", sa.Text, nullable=False),
        sa.Column("hobbies", postgresql.ARRAY(sa.String), nullable=True),
        sa.Column("personality", postgresql.ARRAY(sa.String), nullable=True),
        sa.Column("likes", postgresql.ARRAY(sa.String), nullable=True),
        sa.Column("dislikes", postgresql.ARRAY(sa.String), nullable=True),
        sa.Column("image_url", sa.String, nullable=True),
        sa.Column(
            "location",
            sa.String,
            nullable=True,
            comment="Usually 'City, Region'",
        ),
        sa.Column("race", sa.String, nullable=True),
        sa.Column(
            "is_prebuilt",
            sa.Boolean,
            server_default="false",
            nullable=False,
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            nullable=True,
            comment="Owner of a custom companion",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )

    # ── 2. user_companions ──────────────────────────────────────────
    op.create_table(
        "user_companions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "companion_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("companions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "relationship_type",
            sa.String,
            nullable=True,
            comment="romantic / friendship / support / exploration",
        ),
        sa.Column(
            "is_active",
            sa.Boolean,
            server_default="true",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_user_companions_user_id", "user_companions", ["user_id"]
    )

    # ── 3. mood_entries ─────────────────────────────────────────────
    op.create_table(
        "mood_entries",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "companion_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("companions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_companion_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("user_companions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "mood_type",
            sa.String,
            nullable=False,
            comment="happy / sad / ... / neutral",
        ),
        sa.Column("intensity", sa.Integer, nullable=False, comment="1-10"),
        sa.Column("message_context", sa.Text, nullable=True),
        sa.Column(
            "detected_automatically",
            sa.Boolean,
            server_default="true",
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_mood_entries_user_companion_created",
        "mood_entries",
        ["user_id", "companion_id", "created_at"],
    )


def downgrade() -> None:
    # Drop in reverse order (children / dependents first).
    op.drop_index(
        "ix_mood_entries_user_companion_created", table_name="mood_entries"
    )
    op.drop_table("mood_entries")

    op.drop_index("ix_user_companions_user_id", table_name="user_companions")
    op.drop_table("user_companions")

    op.drop_table("companions")
