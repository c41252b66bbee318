"""Session Engine — pure state machine for one Pomodoro session aggregate.

Invariants:
    - Every operation is (session, command args, now) -> EngineResult; no IO, no clock reads
    - ensure_allowed() runs first: a rejected command raises before anything is built,
      and the input aggregate is frozen, so rejection leaves state unchanged
    - cycles_completed grows by exactly 1 per completed FOCUS phase; only reset lowers it
    - A FIXED session reaching its cycle target completes instead of taking a break —
      the cap check precedes the long-break check
    - Skipping FOCUS advances the long-break schedule but never credits a cycle
    - Terminal sessions accept only note updates
    - Once attached, a note is never dropped: clearing it leaves an empty SessionNote

Design Decisions:
    - Frozen dataclass + dataclasses.replace: the caller persists the returned aggregate
      or nothing at all (ADR: all-or-nothing mutation)
    - Events returned, not dispatched: the shell decides what to log or forward
    - focus_since_long_break stored explicitly, never re-derived from cycles_completed
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable

from pomodify.core.domain_types import (
    ActivityId, CyclePhase, SessionCommand, SessionEventKind, SessionId,
    SessionStatus, SessionType, TodoItemId,
)
from pomodify.core.lifecycle import (
    Abandoned, Cancelled, Completed, Lifecycle, NotStarted, Paused, Running,
)
from pomodify.core.long_break import next_phase_after_focus
from pomodify.core.session_note import (
    NoteInput, SessionNote, new_item_id, rebuild_note,
)
from pomodify.core.session_settings import SessionSettings, merge_settings
from pomodify.core.transition_table import ensure_allowed


@dataclass(frozen=True)
class PomodoroSession:
    """Aggregate root. Mutated only through the functions in this module."""
    id: SessionId
    activity_id: ActivityId
    settings: SessionSettings
    created_at: datetime
    lifecycle: Lifecycle = NotStarted()
    cycles_completed: int = 0
    focus_since_long_break: int = 0
    note: SessionNote | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0

    @property
    def status(self) -> SessionStatus:
        return self.lifecycle.status

    @property
    def phase(self) -> CyclePhase | None:
        return self.lifecycle.phase


@dataclass(frozen=True)
class SessionEvent:
    kind: SessionEventKind
    phase: CyclePhase | None
    cycles_completed: int


@dataclass(frozen=True)
class EngineResult:
    session: PomodoroSession
    events: tuple[SessionEvent, ...] = ()


def new_session(
    session_id: SessionId,
    activity_id: ActivityId,
    settings: SessionSettings,
    *,
    now: datetime,
    note: NoteInput | None = None,
) -> PomodoroSession:
    """A fresh NOT_STARTED session. The optional note is attached immediately."""
    return PomodoroSession(
        id=session_id,
        activity_id=activity_id,
        settings=settings,
        created_at=now,
        updated_at=now,
        note=rebuild_note(note.content, note.items) if note else None,
    )


# --- Lifecycle commands -------------------------------------------------------

def start(session: PomodoroSession, *, now: datetime) -> EngineResult:
    ensure_allowed(session.lifecycle, SessionCommand.START)
    started = replace(
        session,
        lifecycle=Running(CyclePhase.FOCUS),
        cycles_completed=0,
        focus_since_long_break=0,
        started_at=now,
        completed_at=None,
        updated_at=now,
    )
    return _result(started, SessionEventKind.SESSION_STARTED)


def pause(
    session: PomodoroSession, *, now: datetime, note: NoteInput | None = None,
) -> EngineResult:
    """Phase and counters are preserved unchanged."""
    ensure_allowed(session.lifecycle, SessionCommand.PAUSE)
    paused = replace(
        session, lifecycle=Paused(session.phase), updated_at=now,
    )
    return _result(_with_note(paused, note), SessionEventKind.SESSION_PAUSED)


def resume(session: PomodoroSession, *, now: datetime) -> EngineResult:
    ensure_allowed(session.lifecycle, SessionCommand.RESUME)
    resumed = replace(
        session, lifecycle=Running(session.phase), updated_at=now,
    )
    return _result(resumed, SessionEventKind.SESSION_RESUMED)


def complete_phase(
    session: PomodoroSession, *, now: datetime, note: NoteInput | None = None,
) -> EngineResult:
    """Advance past the current phase, crediting a cycle when FOCUS completes."""
    ensure_allowed(session.lifecycle, SessionCommand.COMPLETE_PHASE)
    session = _with_note(session, note)
    finished_phase = session.phase

    if finished_phase != CyclePhase.FOCUS:
        advanced = replace(
            session, lifecycle=Running(CyclePhase.FOCUS), updated_at=now,
        )
        return EngineResult(advanced, (
            SessionEvent(
                SessionEventKind.PHASE_COMPLETED, finished_phase,
                advanced.cycles_completed,
            ),
        ))

    cycles = session.cycles_completed + 1
    completed_focus = SessionEvent(
        SessionEventKind.PHASE_COMPLETED, CyclePhase.FOCUS, cycles,
    )
    if _cycle_target_reached(session.settings, cycles):
        done = replace(
            session,
            lifecycle=Completed(),
            cycles_completed=cycles,
            completed_at=now,
            updated_at=now,
        )
        return EngineResult(done, (
            completed_focus,
            SessionEvent(SessionEventKind.SESSION_COMPLETED, None, cycles),
        ))

    advanced = _advance_from_focus(session, now, cycles_completed=cycles)
    return EngineResult(advanced, (completed_focus,) + _long_break_event(advanced))


def skip_phase(session: PomodoroSession, *, now: datetime) -> EngineResult:
    """Force the next phase without crediting a cycle for a skipped FOCUS."""
    ensure_allowed(session.lifecycle, SessionCommand.SKIP_PHASE)
    skipped_phase = session.phase
    skipped = SessionEvent(
        SessionEventKind.PHASE_SKIPPED, skipped_phase, session.cycles_completed,
    )

    if skipped_phase != CyclePhase.FOCUS:
        advanced = replace(
            session, lifecycle=Running(CyclePhase.FOCUS), updated_at=now,
        )
        return EngineResult(advanced, (skipped,))

    advanced = _advance_from_focus(
        session, now, cycles_completed=session.cycles_completed,
    )
    return EngineResult(advanced, (skipped,) + _long_break_event(advanced))


def complete_early(session: PomodoroSession, *, now: datetime) -> EngineResult:
    """End the session as COMPLETED regardless of remaining cycles."""
    ensure_allowed(session.lifecycle, SessionCommand.COMPLETE_EARLY)
    done = replace(
        session, lifecycle=Completed(), completed_at=now, updated_at=now,
    )
    return _result(done, SessionEventKind.SESSION_COMPLETED)


def stop(
    session: PomodoroSession, *, now: datetime, note: NoteInput | None = None,
) -> EngineResult:
    """User left without finishing."""
    ensure_allowed(session.lifecycle, SessionCommand.STOP)
    abandoned = replace(
        session, lifecycle=Abandoned(), completed_at=now, updated_at=now,
    )
    return _result(_with_note(abandoned, note), SessionEventKind.SESSION_ABANDONED)


def finish(
    session: PomodoroSession, *, now: datetime, note: NoteInput | None = None,
) -> EngineResult:
    """Caller considers the work done."""
    ensure_allowed(session.lifecycle, SessionCommand.FINISH)
    done = replace(
        session, lifecycle=Completed(), completed_at=now, updated_at=now,
    )
    return _result(_with_note(done, note), SessionEventKind.SESSION_COMPLETED)


def cancel(session: PomodoroSession, *, now: datetime) -> EngineResult:
    """Treat the session as if it never meaningfully started."""
    ensure_allowed(session.lifecycle, SessionCommand.CANCEL)
    cancelled = replace(session, lifecycle=Cancelled(), updated_at=now)
    return _result(cancelled, SessionEventKind.SESSION_CANCELLED)


def reset(
    session: PomodoroSession, *, now: datetime, clear_note: bool = False,
) -> EngineResult:
    """Back to NOT_STARTED with counters and run timestamps cleared."""
    ensure_allowed(session.lifecycle, SessionCommand.RESET)
    fresh = replace(
        session,
        lifecycle=NotStarted(),
        cycles_completed=0,
        focus_since_long_break=0,
        started_at=None,
        completed_at=None,
        updated_at=now,
        note=_cleared(session.note) if clear_note else session.note,
    )
    return _result(fresh, SessionEventKind.SESSION_RESET)


def _cleared(note: SessionNote | None) -> SessionNote | None:
    return SessionNote() if note is not None else None


# --- Note and settings --------------------------------------------------------

def update_note(
    session: PomodoroSession,
    *,
    now: datetime,
    note: NoteInput,
    id_factory: Callable[[], TodoItemId] = new_item_id,
) -> EngineResult:
    """Full replace-and-reindex of the note. Allowed in every status."""
    ensure_allowed(session.lifecycle, SessionCommand.UPDATE_NOTE)
    updated = replace(
        session,
        note=rebuild_note(note.content, note.items, id_factory),
        updated_at=now,
    )
    return _result(updated, SessionEventKind.NOTE_UPDATED)


def replace_note(
    session: PomodoroSession, *, now: datetime, note: SessionNote,
) -> EngineResult:
    """Swap in an already-built note (single to-do item edits)."""
    ensure_allowed(session.lifecycle, SessionCommand.UPDATE_NOTE)
    updated = replace(session, note=note, updated_at=now)
    return _result(updated, SessionEventKind.NOTE_UPDATED)


def update_settings(
    session: PomodoroSession, *, now: datetime, **changes,
) -> EngineResult:
    """Edit durations, type or cycle target. Only before the session starts."""
    ensure_allowed(session.lifecycle, SessionCommand.UPDATE_SETTINGS)
    updated = replace(
        session,
        settings=merge_settings(session.settings, **changes),
        updated_at=now,
    )
    return _result(updated, SessionEventKind.SETTINGS_UPDATED)


# --- Stale sessions -----------------------------------------------------------

def expire_if_stale(
    session: PomodoroSession, *, now: datetime, max_idle: timedelta,
) -> EngineResult | None:
    """Abandon a running/paused session untouched for longer than max_idle.

    Returns None when the session is left as-is.
    """
    if session.status not in (SessionStatus.IN_PROGRESS, SessionStatus.PAUSED):
        return None
    reference = session.updated_at or session.started_at
    if reference is None or now - reference <= max_idle:
        return None
    abandoned = replace(
        session, lifecycle=Abandoned(), completed_at=now, updated_at=now,
    )
    return _result(abandoned, SessionEventKind.SESSION_ABANDONED)


# --- Helpers ------------------------------------------------------------------

def _cycle_target_reached(settings: SessionSettings, cycles: int) -> bool:
    return (
        settings.session_type == SessionType.FIXED
        and settings.cycles is not None
        and cycles >= settings.cycles
    )


def _advance_from_focus(
    session: PomodoroSession, now: datetime, cycles_completed: int,
) -> PomodoroSession:
    next_phase, counter = next_phase_after_focus(
        session.settings.long_break_interval_cycles,
        session.focus_since_long_break,
    )
    return replace(
        session,
        lifecycle=Running(next_phase),
        cycles_completed=cycles_completed,
        focus_since_long_break=counter,
        updated_at=now,
    )


def _long_break_event(session: PomodoroSession) -> tuple[SessionEvent, ...]:
    if session.phase != CyclePhase.LONG_BREAK:
        return ()
    return (SessionEvent(
        SessionEventKind.LONG_BREAK_STARTED, CyclePhase.LONG_BREAK,
        session.cycles_completed,
    ),)


def _with_note(
    session: PomodoroSession, note: NoteInput | None,
) -> PomodoroSession:
    if note is None:
        return session
    return replace(session, note=rebuild_note(note.content, note.items))


def _result(session: PomodoroSession, kind: SessionEventKind) -> EngineResult:
    return EngineResult(session, (
        SessionEvent(kind, session.phase, session.cycles_completed),
    ))
