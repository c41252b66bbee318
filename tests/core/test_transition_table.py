"""Transition Table — verifies the legal command set per status.

Tests:
    - Every command has an entry
    - Terminal statuses accept only UPDATE_NOTE
    - ensure_allowed raises InvalidTransitionError carrying status/phase/operation
"""

import pytest

from pomodify.core.domain_types import (
    CyclePhase, SessionCommand, SessionStatus, TERMINAL_STATUSES,
)
from pomodify.core.errors import InvalidTransitionError
from pomodify.core.lifecycle import (
    Abandoned, Cancelled, Completed, NotStarted, Paused, Running,
)
from pomodify.core.transition_table import ALLOWED_FROM, ensure_allowed, is_allowed


def test_every_command_has_entry():
    assert set(ALLOWED_FROM) == set(SessionCommand)


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES))
def test_terminal_statuses_only_accept_note_updates(terminal):
    accepting = {c for c, allowed in ALLOWED_FROM.items() if terminal in allowed}
    assert accepting == {SessionCommand.UPDATE_NOTE}


def test_not_started_accepts_start_cancel_reset_and_edits():
    lifecycle = NotStarted()
    accepted = {c for c in SessionCommand if is_allowed(lifecycle, c)}
    assert accepted == {
        SessionCommand.START,
        SessionCommand.CANCEL,
        SessionCommand.RESET,
        SessionCommand.UPDATE_NOTE,
        SessionCommand.UPDATE_SETTINGS,
    }


def test_paused_rejects_phase_commands():
    lifecycle = Paused(CyclePhase.FOCUS)
    assert not is_allowed(lifecycle, SessionCommand.COMPLETE_PHASE)
    assert not is_allowed(lifecycle, SessionCommand.SKIP_PHASE)
    assert not is_allowed(lifecycle, SessionCommand.COMPLETE_EARLY)
    assert is_allowed(lifecycle, SessionCommand.RESUME)
    assert is_allowed(lifecycle, SessionCommand.STOP)


def test_running_accepts_phase_commands():
    lifecycle = Running(CyclePhase.BREAK)
    assert is_allowed(lifecycle, SessionCommand.COMPLETE_PHASE)
    assert is_allowed(lifecycle, SessionCommand.SKIP_PHASE)
    assert not is_allowed(lifecycle, SessionCommand.START)
    assert not is_allowed(lifecycle, SessionCommand.RESUME)


def test_ensure_allowed_error_carries_state():
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_allowed(Paused(CyclePhase.LONG_BREAK), SessionCommand.PAUSE)
    err = exc_info.value
    assert err.current_status == "PAUSED"
    assert err.current_phase == "LONG_BREAK"
    assert err.attempted_operation == "pause"
    assert err.http_status == 409


@pytest.mark.parametrize("lifecycle", [Completed(), Abandoned(), Cancelled()])
def test_ensure_allowed_rejects_start_from_terminal(lifecycle):
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_allowed(lifecycle, SessionCommand.START)
    assert exc_info.value.current_phase is None
