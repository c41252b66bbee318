"""Long-Break Scheduling — pure arithmetic deciding what follows a focus phase.

Invariants:
    - The counter counts focus completions since the last long break (or session start)
    - A long break is due exactly when interval is set and counter == interval
    - Entering a long break resets the counter to 0; completing one does not touch it
    - interval None never consults the counter — every focus is followed by BREAK

Design Decisions:
    - Explicit counter over cycles_completed % interval: skipped focus phases advance
      the schedule without crediting a cycle, so the two numbers diverge (ADR: auditability)
"""

from pomodify.core.domain_types import CyclePhase


def is_long_break_due(interval: int | None, counter: int) -> bool:
    """True when `counter` focus completions reach the configured interval."""
    if interval is None:
        return False
    return counter == interval


def next_phase_after_focus(
    interval: int | None, counter: int,
) -> tuple[CyclePhase, int]:
    """Advance the schedule by one focus completion.

    Args:
        interval: long_break_interval_cycles, or None when long breaks are disabled.
        counter: focus completions since the last long break, BEFORE this one.

    Returns:
        (next_phase, new_counter).
    """
    if interval is None:
        return CyclePhase.BREAK, counter
    counter += 1
    if is_long_break_due(interval, counter):
        return CyclePhase.LONG_BREAK, 0
    return CyclePhase.BREAK, counter


def expected_phase_sequence(interval: int | None, focus_count: int) -> list[CyclePhase]:
    """Reference schedule: phases visited after start for `focus_count` focus phases.

    Starts with FOCUS and ends with the break that follows the last focus.
    """
    phases: list[CyclePhase] = []
    counter = 0
    for _ in range(focus_count):
        phases.append(CyclePhase.FOCUS)
        next_phase, counter = next_phase_after_focus(interval, counter)
        phases.append(next_phase)
    return phases
