"""Session Settings — validated durations, cycle target and long-break configuration.

Invariants:
    - focus/break/long-break durations are positive whole minutes
    - FIXED sessions have cycles >= 1; FREESTYLE sessions have no cycle target
    - long_break_interval_cycles, if present, is >= 1 and requires long_break_minutes
    - Long breaks disabled => both long-break fields are None
    - Validation raises before anything is built — no partially valid settings exist

Design Decisions:
    - Frozen dataclass: settings are replaced wholesale on update, never edited in place
    - Defaults for enabled-but-unspecified long breaks are passed in by the caller
      (pydantic-settings in the shell) so this module stays free of configuration IO
"""

from dataclasses import dataclass

from pomodify.core.domain_types import SessionType
from pomodify.core.errors import SessionValidationError


@dataclass(frozen=True)
class SessionSettings:
    session_type: SessionType
    focus_minutes: int
    break_minutes: int
    long_break_minutes: int | None = None
    long_break_interval_cycles: int | None = None
    cycles: int | None = None

    @property
    def long_breaks_enabled(self) -> bool:
        return self.long_break_interval_cycles is not None


def build_settings(
    session_type: SessionType,
    focus_minutes: int,
    break_minutes: int,
    cycles: int | None = None,
    enable_long_break: bool = False,
    long_break_minutes: int | None = None,
    long_break_interval_cycles: int | None = None,
    default_long_break_minutes: int = 15,
    default_long_break_interval_cycles: int = 4,
) -> SessionSettings:
    """Validate raw values and build SessionSettings. Pure, raises SessionValidationError."""
    _require_positive(focus_minutes, "focus_minutes")
    _require_positive(break_minutes, "break_minutes")

    if session_type == SessionType.FIXED:
        if cycles is None:
            raise SessionValidationError(
                "A FIXED session requires a cycle count", "cycles",
            )
        _require_positive(cycles, "cycles")
    elif cycles is not None:
        raise SessionValidationError(
            "A FREESTYLE session cannot have a cycle count", "cycles",
        )

    if not enable_long_break:
        long_break_minutes = None
        long_break_interval_cycles = None
    else:
        if long_break_minutes is None:
            long_break_minutes = default_long_break_minutes
        if long_break_interval_cycles is None:
            long_break_interval_cycles = default_long_break_interval_cycles
        _require_positive(long_break_minutes, "long_break_minutes")
        _require_positive(long_break_interval_cycles, "long_break_interval_cycles")

    return SessionSettings(
        session_type=session_type,
        focus_minutes=focus_minutes,
        break_minutes=break_minutes,
        long_break_minutes=long_break_minutes,
        long_break_interval_cycles=long_break_interval_cycles,
        cycles=cycles,
    )


def merge_settings(
    current: SessionSettings,
    session_type: SessionType | None = None,
    focus_minutes: int | None = None,
    break_minutes: int | None = None,
    cycles: int | None = None,
    enable_long_break: bool | None = None,
    long_break_minutes: int | None = None,
    long_break_interval_cycles: int | None = None,
    default_long_break_minutes: int = 15,
    default_long_break_interval_cycles: int = 4,
) -> SessionSettings:
    """Overlay supplied fields on `current` and re-validate the result.

    Switching to FREESTYLE drops the cycle target; switching to FIXED keeps the
    current one if no new value is supplied.
    """
    new_type = session_type or current.session_type
    if new_type == SessionType.FREESTYLE:
        new_cycles = None
    else:
        new_cycles = cycles if cycles is not None else current.cycles

    enabled = (
        current.long_breaks_enabled if enable_long_break is None else enable_long_break
    )
    return build_settings(
        session_type=new_type,
        focus_minutes=focus_minutes if focus_minutes is not None else current.focus_minutes,
        break_minutes=break_minutes if break_minutes is not None else current.break_minutes,
        cycles=new_cycles,
        enable_long_break=enabled,
        long_break_minutes=(
            long_break_minutes if long_break_minutes is not None
            else current.long_break_minutes
        ),
        long_break_interval_cycles=(
            long_break_interval_cycles if long_break_interval_cycles is not None
            else current.long_break_interval_cycles
        ),
        default_long_break_minutes=default_long_break_minutes,
        default_long_break_interval_cycles=default_long_break_interval_cycles,
    )


def _require_positive(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise SessionValidationError(f"{field} must be a positive integer", field)
