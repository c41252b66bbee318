"""Pomodoro Session ORM — persists the session aggregate root.

Invariants:
    - id is UUID primary key
    - status/current_phase stored as enum values; current_phase NULL unless IN_PROGRESS/PAUSED
    - version increments on every UPDATE (optimistic concurrency, StaleDataError on lost race)
    - is_deleted rows are invisible to the repository (soft delete)

Design Decisions:
    - Durations as integer minutes: the engine never needs sub-minute precision
    - focus_since_long_break persisted: the long-break schedule survives reloads
    - Note loaded eagerly (selectin): every response snapshot includes it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pomodify.db.base import Base


class PomodoroSession(Base):
    """Session row — one focus/break run inside an activity."""
    __tablename__ = "pomodoro_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    activity_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    session_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="NOT_STARTED",
    )
    current_phase: Mapped[str | None] = mapped_column(String(20), nullable=True)

    focus_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    break_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    long_break_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    long_break_interval_cycles: Mapped[int | None] = mapped_column(
        Integer, nullable=True,
    )
    cycles: Mapped[int | None] = mapped_column(Integer, nullable=True)

    cycles_completed: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    focus_since_long_break: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    activity: Mapped["Activity"] = relationship(
        "Activity", back_populates="sessions",
    )
    note: Mapped["SessionNote"] = relationship(
        "SessionNote", back_populates="session", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}
