"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - SessionId, ActivityId, UserId, TodoItemId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - TERMINAL_STATUSES accept no further phase transitions

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, map 1:1 to DB columns
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", UUID)
ActivityId = NewType("ActivityId", UUID)
UserId = NewType("UserId", UUID)
TodoItemId = NewType("TodoItemId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class SessionStatus(str, Enum):
    """Session lifecycle states — maps to DB `status` column."""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"
    CANCELLED = "CANCELLED"


class CyclePhase(str, Enum):
    """Phase of the focus/break cycle. Only meaningful while running or paused."""
    FOCUS = "FOCUS"
    BREAK = "BREAK"
    LONG_BREAK = "LONG_BREAK"


class SessionType(str, Enum):
    """FIXED runs a target number of cycles; FREESTYLE runs until stopped."""
    FIXED = "FIXED"
    FREESTYLE = "FREESTYLE"


class SessionCommand(str, Enum):
    """Every operation the Session Engine accepts."""
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    COMPLETE_PHASE = "complete_phase"
    SKIP_PHASE = "skip_phase"
    COMPLETE_EARLY = "complete_early"
    STOP = "stop"
    FINISH = "finish"
    CANCEL = "cancel"
    RESET = "reset"
    UPDATE_NOTE = "update_note"
    UPDATE_SETTINGS = "update_settings"


class SessionEventKind(str, Enum):
    """Effects emitted by the engine for the shell to log or forward."""
    SESSION_STARTED = "session_started"
    SESSION_PAUSED = "session_paused"
    SESSION_RESUMED = "session_resumed"
    PHASE_COMPLETED = "phase_completed"
    PHASE_SKIPPED = "phase_skipped"
    LONG_BREAK_STARTED = "long_break_started"
    SESSION_COMPLETED = "session_completed"
    SESSION_ABANDONED = "session_abandoned"
    SESSION_CANCELLED = "session_cancelled"
    SESSION_RESET = "session_reset"
    NOTE_UPDATED = "note_updated"
    SETTINGS_UPDATED = "settings_updated"


TERMINAL_STATUSES = frozenset({
    SessionStatus.COMPLETED,
    SessionStatus.ABANDONED,
    SessionStatus.CANCELLED,
})
