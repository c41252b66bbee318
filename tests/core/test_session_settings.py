"""Session Settings — verifies validation and merge rules.

Tests:
    - Durations and cycle counts must be positive integers (bools rejected)
    - FIXED requires cycles, FREESTYLE forbids them
    - Enabling long breaks fills defaults; disabling clears both fields
    - merge_settings overlays only supplied fields
"""

import pytest

from pomodify.core.domain_types import SessionType
from pomodify.core.errors import SessionValidationError
from pomodify.core.session_settings import build_settings, merge_settings


def test_build_fixed_settings():
    settings = build_settings(SessionType.FIXED, 25, 5, cycles=4)
    assert settings.cycles == 4
    assert not settings.long_breaks_enabled
    assert settings.long_break_minutes is None


def test_fixed_requires_cycles():
    with pytest.raises(SessionValidationError) as exc_info:
        build_settings(SessionType.FIXED, 25, 5)
    assert exc_info.value.field == "cycles"


def test_freestyle_rejects_cycles():
    with pytest.raises(SessionValidationError):
        build_settings(SessionType.FREESTYLE, 25, 5, cycles=3)


@pytest.mark.parametrize("field,kwargs", [
    ("focus_minutes", {"focus_minutes": 0}),
    ("break_minutes", {"break_minutes": -1}),
    ("focus_minutes", {"focus_minutes": True}),
    ("cycles", {"cycles": 0}),
])
def test_non_positive_values_rejected(field, kwargs):
    values = {"focus_minutes": 25, "break_minutes": 5, "cycles": 4}
    values.update(kwargs)
    with pytest.raises(SessionValidationError) as exc_info:
        build_settings(SessionType.FIXED, **values)
    assert exc_info.value.field == field


def test_enable_long_break_uses_defaults():
    settings = build_settings(
        SessionType.FREESTYLE, 25, 5, enable_long_break=True,
        default_long_break_minutes=20, default_long_break_interval_cycles=3,
    )
    assert settings.long_break_minutes == 20
    assert settings.long_break_interval_cycles == 3
    assert settings.long_breaks_enabled


def test_disabled_long_break_clears_supplied_values():
    settings = build_settings(
        SessionType.FREESTYLE, 25, 5,
        long_break_minutes=20, long_break_interval_cycles=3,
    )
    assert settings.long_break_minutes is None
    assert settings.long_break_interval_cycles is None


def test_long_break_interval_must_be_positive():
    with pytest.raises(SessionValidationError) as exc_info:
        build_settings(
            SessionType.FREESTYLE, 25, 5,
            enable_long_break=True, long_break_interval_cycles=0,
        )
    assert exc_info.value.field == "long_break_interval_cycles"


def test_merge_keeps_unspecified_fields():
    current = build_settings(SessionType.FIXED, 25, 5, cycles=4)
    merged = merge_settings(current, break_minutes=8)
    assert merged.focus_minutes == 25
    assert merged.break_minutes == 8
    assert merged.cycles == 4


def test_merge_to_freestyle_drops_cycles():
    current = build_settings(SessionType.FIXED, 25, 5, cycles=4)
    merged = merge_settings(current, session_type=SessionType.FREESTYLE)
    assert merged.session_type == SessionType.FREESTYLE
    assert merged.cycles is None


def test_merge_to_fixed_without_cycles_rejected():
    current = build_settings(SessionType.FREESTYLE, 25, 5)
    with pytest.raises(SessionValidationError):
        merge_settings(current, session_type=SessionType.FIXED)


def test_merge_can_disable_long_breaks():
    current = build_settings(
        SessionType.FREESTYLE, 25, 5, enable_long_break=True,
    )
    merged = merge_settings(current, enable_long_break=False)
    assert not merged.long_breaks_enabled
