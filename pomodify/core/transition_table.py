"""Transition Table — which statuses accept which engine command.

Invariants:
    - Every SessionCommand has an entry (no implicit defaults)
    - Terminal statuses appear only under UPDATE_NOTE — no lifecycle command leaves them
    - ensure_allowed runs before any mutation, so a rejection leaves state untouched

Design Decisions:
    - Explicit dict over per-method if-chains: every legal edge visible in one place
      (ADR: no convention-over-config)
    - RESET excluded from terminal statuses: a finished session is immutable history
"""

from pomodify.core.domain_types import SessionCommand, SessionStatus
from pomodify.core.errors import InvalidTransitionError
from pomodify.core.lifecycle import Lifecycle

_ACTIVE = frozenset({SessionStatus.IN_PROGRESS, SessionStatus.PAUSED})

ALLOWED_FROM: dict[SessionCommand, frozenset[SessionStatus]] = {
    SessionCommand.START: frozenset({SessionStatus.NOT_STARTED}),
    SessionCommand.PAUSE: frozenset({SessionStatus.IN_PROGRESS}),
    SessionCommand.RESUME: frozenset({SessionStatus.PAUSED}),
    SessionCommand.COMPLETE_PHASE: frozenset({SessionStatus.IN_PROGRESS}),
    SessionCommand.SKIP_PHASE: frozenset({SessionStatus.IN_PROGRESS}),
    SessionCommand.COMPLETE_EARLY: frozenset({SessionStatus.IN_PROGRESS}),
    SessionCommand.STOP: _ACTIVE,
    SessionCommand.FINISH: _ACTIVE,
    SessionCommand.CANCEL: _ACTIVE | {SessionStatus.NOT_STARTED},
    SessionCommand.RESET: _ACTIVE | {SessionStatus.NOT_STARTED},
    SessionCommand.UPDATE_NOTE: frozenset(SessionStatus),
    SessionCommand.UPDATE_SETTINGS: frozenset({SessionStatus.NOT_STARTED}),
}


def is_allowed(lifecycle: Lifecycle, command: SessionCommand) -> bool:
    return lifecycle.status in ALLOWED_FROM[command]


def ensure_allowed(lifecycle: Lifecycle, command: SessionCommand) -> None:
    """Raise InvalidTransitionError if `command` is illegal from `lifecycle`."""
    if not is_allowed(lifecycle, command):
        raise InvalidTransitionError(
            lifecycle.status.value,
            lifecycle.phase.value if lifecycle.phase else None,
            command.value,
        )
