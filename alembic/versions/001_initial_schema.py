"""Initial schema — activities, pomodoro_sessions, session_notes, session_todo_items.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "activities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_activities_user_id", "activities", ["user_id"])

    op.create_table(
        "pomodoro_sessions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "activity_id", UUID(as_uuid=True),
            sa.ForeignKey("activities.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("session_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="NOT_STARTED"),
        sa.Column("current_phase", sa.String(20), nullable=True),
        sa.Column("focus_minutes", sa.Integer, nullable=False),
        sa.Column("break_minutes", sa.Integer, nullable=False),
        sa.Column("long_break_minutes", sa.Integer, nullable=True),
        sa.Column("long_break_interval_cycles", sa.Integer, nullable=True),
        sa.Column("cycles", sa.Integer, nullable=True),
        sa.Column("cycles_completed", sa.Integer, nullable=False, server_default="0"),
        sa.Column("focus_since_long_break", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_deleted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_pomodoro_sessions_activity_id", "pomodoro_sessions", ["activity_id"],
    )

    op.create_table(
        "session_notes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "session_id", UUID(as_uuid=True),
            sa.ForeignKey("pomodoro_sessions.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "session_todo_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "note_id", UUID(as_uuid=True),
            sa.ForeignKey("session_notes.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("text", sa.String(500), nullable=False),
        sa.Column("done", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("order_index", sa.Integer, nullable=True),
    )
    op.create_index(
        "ix_session_todo_items_note_id", "session_todo_items", ["note_id"],
    )


def downgrade() -> None:
    op.drop_table("session_todo_items")
    op.drop_table("session_notes")
    op.drop_table("pomodoro_sessions")
    op.drop_table("activities")
