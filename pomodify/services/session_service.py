"""Session Service — imperative shell around the pure session engine.

Invariants:
    - Ownership is resolved before any session is loaded or mutated
    - One command = load (locked) -> engine function -> save; nothing persisted on rejection
    - Stale IN_PROGRESS/PAUSED sessions are abandoned on read and before any command
    - Accepted commands and their events logged at INFO, rejections at WARNING

Design Decisions:
    - Explicit command -> engine function dict: every lifecycle mapping visible in one place
      (ADR: no getattr magic, no auto-discovery)
    - Clock injected: tests pin `now`, production uses UTC wall time
    - Service takes Protocol-typed collaborators, so core tests never need a database
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

from pomodify.config import Settings
from pomodify.core import session_engine
from pomodify.core.domain_types import (
    ActivityId, SessionCommand, SessionId, SessionStatus, SessionType,
    TodoItemId, UserId,
)
from pomodify.core.errors import (
    ErrorContext, InvalidTransitionError, ResourceNotFoundError,
    SessionValidationError,
)
from pomodify.core.repository_protocols import OwnershipResolver, SessionRepository
from pomodify.core.session_engine import EngineResult, PomodoroSession
from pomodify.core.session_note import (
    NoteInput, SessionNote, delete_todo_item, patch_todo_item, toggle_todo_item,
)
from pomodify.core.session_settings import build_settings

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ADR: every mapping explicit; adding a command requires editing this dict
_LIFECYCLE_COMMANDS: dict[SessionCommand, Callable[..., EngineResult]] = {
    SessionCommand.START: session_engine.start,
    SessionCommand.PAUSE: session_engine.pause,
    SessionCommand.RESUME: session_engine.resume,
    SessionCommand.COMPLETE_PHASE: session_engine.complete_phase,
    SessionCommand.SKIP_PHASE: session_engine.skip_phase,
    SessionCommand.COMPLETE_EARLY: session_engine.complete_early,
    SessionCommand.STOP: session_engine.stop,
    SessionCommand.FINISH: session_engine.finish,
    SessionCommand.CANCEL: session_engine.cancel,
    SessionCommand.RESET: session_engine.reset,
}


class SessionService:
    """Use cases for Pomodoro sessions: create, query, command, note editing."""

    def __init__(
        self,
        repository: SessionRepository,
        ownership: OwnershipResolver,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._ownership = ownership
        self._settings = settings
        self._clock = clock
        self._max_idle = timedelta(hours=settings.stale_session_hours)

    # --- Creation and queries -------------------------------------------------

    async def create(
        self,
        activity_id: ActivityId,
        user_id: UserId,
        *,
        session_type: SessionType,
        focus_minutes: int,
        break_minutes: int,
        cycles: int | None = None,
        enable_long_break: bool = False,
        long_break_minutes: int | None = None,
        long_break_interval_cycles: int | None = None,
        note: NoteInput | None = None,
    ) -> PomodoroSession:
        await self._ownership.resolve_activity(activity_id, user_id)
        settings = build_settings(
            session_type,
            focus_minutes,
            break_minutes,
            cycles=cycles,
            enable_long_break=enable_long_break,
            long_break_minutes=long_break_minutes,
            long_break_interval_cycles=long_break_interval_cycles,
            default_long_break_minutes=self._settings.default_long_break_minutes,
            default_long_break_interval_cycles=(
                self._settings.default_long_break_interval_cycles
            ),
        )
        session = session_engine.new_session(
            SessionId(uuid4()), activity_id, settings,
            now=self._clock(), note=note,
        )
        created = await self._repository.add(session)
        logger.info(
            f"Session created for activity {activity_id}",
            extra={
                "session_id": str(created.id),
                "activity_id": str(activity_id),
                "user_id": str(user_id),
                "status": created.status.value,
            },
        )
        return created

    async def get(self, session_id: SessionId, user_id: UserId) -> PomodoroSession:
        await self._ownership.resolve_session(session_id, user_id)
        return await self._load(session_id)

    async def list_for_activity(
        self,
        activity_id: ActivityId,
        user_id: UserId,
        status: SessionStatus | None = None,
    ) -> list[PomodoroSession]:
        await self._ownership.resolve_activity(activity_id, user_id)
        sessions = await self._repository.list_for_activity(activity_id)
        # Filter after expiry: a stale IN_PROGRESS row lists as ABANDONED
        refreshed = [await self._expire_if_stale(s) for s in sessions]
        if status is None:
            return refreshed
        return [s for s in refreshed if s.status == status]

    async def get_note(
        self, session_id: SessionId, user_id: UserId,
    ) -> SessionNote | None:
        session = await self.get(session_id, user_id)
        return session.note

    # --- Commands -------------------------------------------------------------

    async def execute(
        self,
        command: SessionCommand,
        session_id: SessionId,
        user_id: UserId,
        **payload,
    ) -> PomodoroSession:
        """Run one lifecycle command. payload is note= or clear_note= where accepted."""
        handler = _LIFECYCLE_COMMANDS.get(command)
        if handler is None:
            raise SessionValidationError(
                f"'{command.value}' is not a lifecycle command", "command",
            )
        return await self._run(
            command, session_id, user_id,
            lambda s, now: handler(s, now=now, **payload),
        )

    async def update_settings(
        self, session_id: SessionId, user_id: UserId, **changes,
    ) -> PomodoroSession:
        changes.setdefault(
            "default_long_break_minutes", self._settings.default_long_break_minutes,
        )
        changes.setdefault(
            "default_long_break_interval_cycles",
            self._settings.default_long_break_interval_cycles,
        )
        return await self._run(
            SessionCommand.UPDATE_SETTINGS, session_id, user_id,
            lambda s, now: session_engine.update_settings(s, now=now, **changes),
        )

    async def update_note(
        self, session_id: SessionId, user_id: UserId, note: NoteInput,
    ) -> PomodoroSession:
        return await self._run(
            SessionCommand.UPDATE_NOTE, session_id, user_id,
            lambda s, now: session_engine.update_note(s, now=now, note=note),
        )

    async def toggle_todo_item(
        self, session_id: SessionId, user_id: UserId, item_id: TodoItemId,
    ) -> PomodoroSession:
        return await self._edit_note(
            session_id, user_id, lambda note: toggle_todo_item(note, item_id),
        )

    async def patch_todo_item(
        self,
        session_id: SessionId,
        user_id: UserId,
        item_id: TodoItemId,
        text: str | None = None,
        done: bool | None = None,
        order_index: int | None = None,
    ) -> PomodoroSession:
        return await self._edit_note(
            session_id, user_id,
            lambda note: patch_todo_item(note, item_id, text, done, order_index),
        )

    async def delete_todo_item(
        self, session_id: SessionId, user_id: UserId, item_id: TodoItemId,
    ) -> PomodoroSession:
        return await self._edit_note(
            session_id, user_id, lambda note: delete_todo_item(note, item_id),
        )

    async def delete(self, session_id: SessionId, user_id: UserId) -> None:
        await self._ownership.resolve_session(session_id, user_id)
        await self._repository.soft_delete(session_id)

    # --- Internals ------------------------------------------------------------

    async def _edit_note(
        self,
        session_id: SessionId,
        user_id: UserId,
        edit: Callable[[SessionNote | None], SessionNote],
    ) -> PomodoroSession:
        return await self._run(
            SessionCommand.UPDATE_NOTE, session_id, user_id,
            lambda s, now: session_engine.replace_note(s, now=now, note=edit(s.note)),
        )

    async def _run(
        self,
        command: SessionCommand,
        session_id: SessionId,
        user_id: UserId,
        operation: Callable[[PomodoroSession, datetime], EngineResult],
    ) -> PomodoroSession:
        await self._ownership.resolve_session(session_id, user_id)
        session = await self._load(session_id, for_update=True)
        try:
            result = operation(session, self._clock())
        except InvalidTransitionError as e:
            e.context.session_id = str(session_id)
            logger.warning(
                f"Rejected {command.value}: {e.message}",
                extra={
                    "session_id": str(session_id),
                    "command": command.value,
                    "status": session.status.value,
                    "phase": session.phase.value if session.phase else None,
                    "error_code": e.code,
                },
            )
            raise
        saved = await self._repository.save(result.session)
        self._log_events(command, saved, result)
        return saved

    async def _load(
        self, session_id: SessionId, for_update: bool = False,
    ) -> PomodoroSession:
        session = await self._repository.get(session_id, for_update=for_update)
        if session is None:
            raise ResourceNotFoundError(
                "Session", str(session_id),
                ErrorContext(session_id=str(session_id)),
            )
        return await self._expire_if_stale(session)

    async def _expire_if_stale(self, session: PomodoroSession) -> PomodoroSession:
        result = session_engine.expire_if_stale(
            session, now=self._clock(), max_idle=self._max_idle,
        )
        if result is None:
            return session
        saved = await self._repository.save(result.session)
        logger.info(
            f"Session {session.id} abandoned after {self._max_idle} idle",
            extra={
                "session_id": str(session.id),
                "event": "session_abandoned",
                "status": saved.status.value,
            },
        )
        return saved

    def _log_events(
        self, command: SessionCommand, session: PomodoroSession, result: EngineResult,
    ) -> None:
        for event in result.events:
            logger.info(
                f"{command.value} -> {event.kind.value}",
                extra={
                    "session_id": str(session.id),
                    "activity_id": str(session.activity_id),
                    "command": command.value,
                    "event": event.kind.value,
                    "status": session.status.value,
                    "phase": event.phase.value if event.phase else None,
                    "cycles_completed": event.cycles_completed,
                },
            )
