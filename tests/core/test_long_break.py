"""Long-Break Scheduling — verifies periodicity and counter arithmetic.

Tests:
    - With interval N, every N-th focus completion is followed by LONG_BREAK
    - Without an interval, every focus is followed by BREAK
    - Counter resets to 0 on entering a long break
    - expected_phase_sequence matches repeated next_phase_after_focus
"""

import pytest

from pomodify.core.domain_types import CyclePhase
from pomodify.core.long_break import (
    expected_phase_sequence, is_long_break_due, next_phase_after_focus,
)


def test_not_due_without_interval():
    assert not is_long_break_due(None, 4)


def test_due_exactly_at_interval():
    assert is_long_break_due(4, 4)
    assert not is_long_break_due(4, 3)


@pytest.mark.parametrize("interval", range(2, 11))
def test_every_nth_focus_is_followed_by_long_break(interval):
    counter = 0
    for k in range(1, interval * 3 + 1):
        phase, counter = next_phase_after_focus(interval, counter)
        if k % interval == 0:
            assert phase == CyclePhase.LONG_BREAK
            assert counter == 0
        else:
            assert phase == CyclePhase.BREAK
            assert counter == k % interval


@pytest.mark.parametrize("focus_count", range(1, 21))
def test_no_interval_always_short_break(focus_count):
    sequence = expected_phase_sequence(None, focus_count)
    assert CyclePhase.LONG_BREAK not in sequence
    assert sequence.count(CyclePhase.BREAK) == focus_count


def test_no_interval_leaves_counter_untouched():
    assert next_phase_after_focus(None, 0) == (CyclePhase.BREAK, 0)


def test_interval_of_one_is_always_long_break():
    assert expected_phase_sequence(1, 3) == [
        CyclePhase.FOCUS, CyclePhase.LONG_BREAK,
    ] * 3


def test_expected_sequence_with_interval_three():
    assert expected_phase_sequence(3, 4) == [
        CyclePhase.FOCUS, CyclePhase.BREAK,
        CyclePhase.FOCUS, CyclePhase.BREAK,
        CyclePhase.FOCUS, CyclePhase.LONG_BREAK,
        CyclePhase.FOCUS, CyclePhase.BREAK,
    ]


def test_expected_sequence_empty_for_zero_focus():
    assert expected_phase_sequence(4, 0) == []
