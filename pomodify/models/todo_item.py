"""Session To-do Item ORM — one checklist entry of a session note.

Invariants:
    - Always belongs to a SessionNote (note_id FK)
    - order_index set on every write by core (position when the caller omitted it)
"""

import uuid

from sqlalchemy import String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from pomodify.db.base import Base


class SessionTodoItem(Base):
    __tablename__ = "session_todo_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    note_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("session_notes.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    text: Mapped[str] = mapped_column(String(500), nullable=False)
    done: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    order_index: Mapped[int | None] = mapped_column(Integer, nullable=True)

    note: Mapped["SessionNote"] = relationship(
        "SessionNote", back_populates="items",
    )
