"""Session Snapshot — JSON-safe view of a PomodoroSession for API responses and logs.

Invariants:
    - Output contains only str/int/bool/None/list/dict (no Enums, no datetimes)
    - current_phase is None whenever status is not IN_PROGRESS or PAUSED
    - Note items are emitted in order_index order
    - Pure, no IO

Design Decisions:
    - Separate from session_engine.py: the engine owns transitions, this module owns
      presentation (ADR: ~7 functions per module)
"""

from datetime import datetime

from pomodify.core.session_engine import PomodoroSession
from pomodify.core.session_note import SessionNote, sorted_items


def session_to_snapshot(session: PomodoroSession) -> dict:
    """Serialize the aggregate to a JSON-safe dict."""
    settings = session.settings
    return {
        "id": str(session.id),
        "activity_id": str(session.activity_id),
        "session_type": settings.session_type.value,
        "status": session.status.value,
        "current_phase": session.phase.value if session.phase else None,
        "focus_minutes": settings.focus_minutes,
        "break_minutes": settings.break_minutes,
        "long_break_minutes": settings.long_break_minutes,
        "long_break_interval_cycles": settings.long_break_interval_cycles,
        "cycles": settings.cycles,
        "cycles_completed": session.cycles_completed,
        "focus_since_long_break": session.focus_since_long_break,
        "note": note_to_snapshot(session.note),
        "started_at": _iso(session.started_at),
        "completed_at": _iso(session.completed_at),
        "created_at": _iso(session.created_at),
        "updated_at": _iso(session.updated_at),
        "version": session.version,
    }


def note_to_snapshot(note: SessionNote | None) -> dict | None:
    if note is None:
        return None
    return {
        "content": note.content,
        "items": [
            {
                "id": str(item.id),
                "text": item.text,
                "done": item.done,
                "order_index": item.order_index,
            }
            for item in sorted_items(note)
        ],
    }


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
