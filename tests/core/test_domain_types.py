"""Domain Types — verifies identity wrappers and enum vocabularies.

Tests:
    - NewType wrappers compare equal to the wrapped UUID
    - Status/phase/type enums have exactly the expected members
    - Enum values are the uppercase names stored in the DB
    - TERMINAL_STATUSES is exactly COMPLETED, ABANDONED, CANCELLED
"""

from uuid import uuid4

from pomodify.core.domain_types import (
    ActivityId, SessionId, TodoItemId, UserId,
    CyclePhase, SessionCommand, SessionStatus, SessionType, TERMINAL_STATUSES,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert SessionId(uid) == uid
    assert ActivityId(uid) == uid
    assert UserId(uid) == uid
    assert TodoItemId(uid) == uid


def test_session_status_has_six_states():
    assert set(SessionStatus) == {
        SessionStatus.NOT_STARTED,
        SessionStatus.IN_PROGRESS,
        SessionStatus.PAUSED,
        SessionStatus.COMPLETED,
        SessionStatus.ABANDONED,
        SessionStatus.CANCELLED,
    }


def test_cycle_phase_has_three_phases():
    assert [p.value for p in CyclePhase] == ["FOCUS", "BREAK", "LONG_BREAK"]


def test_session_type_values():
    assert SessionType("FIXED") is SessionType.FIXED
    assert SessionType("FREESTYLE") is SessionType.FREESTYLE


def test_status_values_match_db_column_values():
    for status in SessionStatus:
        assert status.value == status.name


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {
        SessionStatus.COMPLETED,
        SessionStatus.ABANDONED,
        SessionStatus.CANCELLED,
    }


def test_session_command_is_str_enum():
    assert SessionCommand.COMPLETE_PHASE == "complete_phase"
    assert isinstance(SessionCommand.START, str)
