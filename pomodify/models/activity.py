"""Activity ORM — the owning container of sessions, scoped to one user.

Invariants:
    - user_id is the only ownership fact the session core relies on
    - Activity identity and content are managed elsewhere; this table is read for ownership

Design Decisions:
    - Minimal columns: title kept for listing, everything else belongs to the activity service
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pomodify.db.base import Base


class Activity(Base):
    """Activity — groups the Pomodoro sessions a user runs for one piece of work."""
    __tablename__ = "activities"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    sessions: Mapped[list["PomodoroSession"]] = relationship(
        "PomodoroSession", back_populates="activity",
        cascade="all, delete-orphan", lazy="noload",
    )
