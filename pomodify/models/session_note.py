"""Session Note ORM — one free-text note per session plus its to-do items.

Invariants:
    - session_id is unique: a session owns at most one note
    - content is non-nullable ("" when the caller sent nothing)
    - items cascade-delete with the note

Design Decisions:
    - Separate table over JSON column: items are individually addressable (toggle/patch/delete)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pomodify.db.base import Base


class SessionNote(Base):
    __tablename__ = "session_notes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    session_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("pomodoro_sessions.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    session: Mapped["PomodoroSession"] = relationship(
        "PomodoroSession", back_populates="note",
    )
    items: Mapped[list["SessionTodoItem"]] = relationship(
        "SessionTodoItem", back_populates="note",
        cascade="all, delete-orphan", lazy="selectin",
    )
