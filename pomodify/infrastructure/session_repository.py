"""SQL Session Repository — Persistence Gateway for the session aggregate.

Invariants:
    - Implements core.repository_protocols.SessionRepository over one AsyncSession
    - Soft-deleted rows are never returned
    - save() refuses an aggregate whose version differs from the stored row (ConcurrencyError)
    - Note items are synced by id: kept items updated in place, missing ones deleted
    - Datetimes leave this module timezone-aware (UTC), whatever the driver returns

Design Decisions:
    - Row <-> aggregate mapping lives here, not on the ORM class: core stays ORM-free
    - get(for_update=True) takes a row lock so commands against one session serialize
      (SQLite ignores FOR UPDATE; version_id_col still catches the lost race)
    - Commit per save: one engine command = one transaction
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from pomodify.core.domain_types import (
    ActivityId, CyclePhase, SessionId, SessionStatus, SessionType, TodoItemId,
)
from pomodify.core.errors import ConcurrencyError, ErrorContext, ResourceNotFoundError
from pomodify.core.lifecycle import lifecycle_from
from pomodify.core.session_engine import PomodoroSession
from pomodify.core.session_note import SessionNote, TodoItem
from pomodify.core.session_settings import SessionSettings
from pomodify.models.pomodoro_session import PomodoroSession as SessionModel
from pomodify.models.session_note import SessionNote as NoteModel
from pomodify.models.todo_item import SessionTodoItem as TodoItemModel

logger = logging.getLogger(__name__)


class SqlSessionRepository:
    """SQLAlchemy-backed SessionRepository."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(
        self, session_id: SessionId, for_update: bool = False,
    ) -> PomodoroSession | None:
        row = await self._load_row(session_id, for_update)
        return _to_domain(row) if row else None

    async def add(self, session: PomodoroSession) -> PomodoroSession:
        row = SessionModel(id=session.id, activity_id=session.activity_id)
        _apply(row, session)
        self._db.add(row)
        await self._db.commit()
        return _to_domain(row)

    async def save(self, session: PomodoroSession) -> PomodoroSession:
        row = await self._load_row(session.id, for_update=True)
        if row is None:
            raise ResourceNotFoundError("Session", str(session.id))
        if row.version != session.version:
            raise ConcurrencyError(
                f"Session {session.id} changed since it was loaded "
                f"(stored version {row.version}, loaded {session.version})",
                ErrorContext(session_id=str(session.id)),
            )
        _apply(row, session)
        try:
            await self._db.commit()
        except StaleDataError:
            await self._db.rollback()
            logger.warning(
                f"Lost update race on session {session.id}",
                extra={"session_id": str(session.id)},
            )
            raise ConcurrencyError(
                f"Session {session.id} was modified concurrently",
                ErrorContext(session_id=str(session.id)),
            )
        return _to_domain(row)

    async def list_for_activity(self, activity_id: ActivityId) -> list[PomodoroSession]:
        query = (
            select(SessionModel)
            .where(SessionModel.activity_id == activity_id)
            .where(SessionModel.is_deleted.is_(False))
            .order_by(SessionModel.created_at.desc())
        )
        result = await self._db.execute(query)
        return [_to_domain(row) for row in result.scalars().all()]

    async def soft_delete(self, session_id: SessionId) -> None:
        row = await self._load_row(session_id, for_update=True)
        if row is None:
            raise ResourceNotFoundError("Session", str(session_id))
        row.is_deleted = True
        await self._db.commit()
        logger.info(
            f"Soft deleted session {session_id}",
            extra={"session_id": str(session_id)},
        )

    async def _load_row(
        self, session_id: UUID, for_update: bool = False,
    ) -> SessionModel | None:
        query = (
            select(SessionModel)
            .where(SessionModel.id == session_id)
            .where(SessionModel.is_deleted.is_(False))
        )
        if for_update:
            query = query.with_for_update()
        result = await self._db.execute(query)
        return result.scalar_one_or_none()


# --- Mapping ------------------------------------------------------------------

def _to_domain(row: SessionModel) -> PomodoroSession:
    return PomodoroSession(
        id=SessionId(row.id),
        activity_id=ActivityId(row.activity_id),
        settings=SessionSettings(
            session_type=SessionType(row.session_type),
            focus_minutes=row.focus_minutes,
            break_minutes=row.break_minutes,
            long_break_minutes=row.long_break_minutes,
            long_break_interval_cycles=row.long_break_interval_cycles,
            cycles=row.cycles,
        ),
        lifecycle=lifecycle_from(
            SessionStatus(row.status),
            CyclePhase(row.current_phase) if row.current_phase else None,
        ),
        cycles_completed=row.cycles_completed,
        focus_since_long_break=row.focus_since_long_break,
        note=_note_to_domain(row.note),
        started_at=_ensure_aware_utc(row.started_at),
        completed_at=_ensure_aware_utc(row.completed_at),
        created_at=_ensure_aware_utc(row.created_at),
        updated_at=_ensure_aware_utc(row.updated_at),
        version=row.version,
    )


def _note_to_domain(note: NoteModel | None) -> SessionNote | None:
    if note is None:
        return None
    return SessionNote(
        content=note.content or "",
        items=tuple(
            TodoItem(
                id=TodoItemId(item.id),
                text=item.text,
                done=item.done,
                order_index=item.order_index,
            )
            for item in note.items
        ),
    )


def _apply(row: SessionModel, session: PomodoroSession) -> None:
    """Copy aggregate state onto the row. version is managed by the mapper."""
    settings = session.settings
    row.session_type = settings.session_type.value
    row.status = session.status.value
    row.current_phase = session.phase.value if session.phase else None
    row.focus_minutes = settings.focus_minutes
    row.break_minutes = settings.break_minutes
    row.long_break_minutes = settings.long_break_minutes
    row.long_break_interval_cycles = settings.long_break_interval_cycles
    row.cycles = settings.cycles
    row.cycles_completed = session.cycles_completed
    row.focus_since_long_break = session.focus_since_long_break
    row.started_at = session.started_at
    row.completed_at = session.completed_at
    row.created_at = session.created_at
    row.updated_at = session.updated_at
    _apply_note(row, session.note)


def _apply_note(row: SessionModel, note: SessionNote | None) -> None:
    if note is None:
        row.note = None
        return
    if row.note is None:
        row.note = NoteModel(content=note.content, items=[])
    else:
        row.note.content = note.content

    existing = {item.id: item for item in row.note.items}
    synced = []
    for item in note.items:
        orm_item = existing.get(item.id)
        if orm_item is None:
            orm_item = TodoItemModel(id=item.id)
        orm_item.text = item.text
        orm_item.done = item.done
        orm_item.order_index = item.order_index
        synced.append(orm_item)
    row.note.items = synced


def _ensure_aware_utc(dt: datetime | None) -> datetime | None:
    """Drivers without tz support (SQLite) return naive datetimes; treat them as UTC."""
    if dt is None:
        return dt
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
