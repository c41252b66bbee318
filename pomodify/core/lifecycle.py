"""Lifecycle Variants — closed set of (status, phase) combinations for a session.

Invariants:
    - Only Running and Paused carry a CyclePhase
    - NotStarted, Completed, Abandoned, Cancelled have no phase — a phase on them is unrepresentable
    - Every variant is frozen; transitions build a new variant

Design Decisions:
    - One frozen dataclass per variant over two loosely-coupled enum columns:
      illegal combinations cannot be constructed (ADR: no ad-hoc null checks on phase)
    - lifecycle_from() is the only way persisted (status, phase) columns re-enter the core
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from pomodify.core.domain_types import CyclePhase, SessionStatus
from pomodify.core.errors import SessionValidationError


@dataclass(frozen=True)
class NotStarted:
    status: ClassVar[SessionStatus] = SessionStatus.NOT_STARTED
    phase: ClassVar[None] = None


@dataclass(frozen=True)
class Running:
    phase: CyclePhase
    status: ClassVar[SessionStatus] = SessionStatus.IN_PROGRESS


@dataclass(frozen=True)
class Paused:
    phase: CyclePhase
    status: ClassVar[SessionStatus] = SessionStatus.PAUSED


@dataclass(frozen=True)
class Completed:
    status: ClassVar[SessionStatus] = SessionStatus.COMPLETED
    phase: ClassVar[None] = None


@dataclass(frozen=True)
class Abandoned:
    status: ClassVar[SessionStatus] = SessionStatus.ABANDONED
    phase: ClassVar[None] = None


@dataclass(frozen=True)
class Cancelled:
    status: ClassVar[SessionStatus] = SessionStatus.CANCELLED
    phase: ClassVar[None] = None


Lifecycle = Union[NotStarted, Running, Paused, Completed, Abandoned, Cancelled]

_PHASELESS: dict[SessionStatus, Lifecycle] = {
    SessionStatus.NOT_STARTED: NotStarted(),
    SessionStatus.COMPLETED: Completed(),
    SessionStatus.ABANDONED: Abandoned(),
    SessionStatus.CANCELLED: Cancelled(),
}


def lifecycle_from(status: SessionStatus, phase: CyclePhase | None) -> Lifecycle:
    """Rebuild a variant from stored columns. Rejects illegal combinations."""
    if status == SessionStatus.IN_PROGRESS:
        if phase is None:
            raise SessionValidationError(
                "An in-progress session must have a current phase", "current_phase",
            )
        return Running(phase)
    if status == SessionStatus.PAUSED:
        if phase is None:
            raise SessionValidationError(
                "A paused session must have a current phase", "current_phase",
            )
        return Paused(phase)
    if phase is not None:
        raise SessionValidationError(
            f"A {status.value} session cannot have a current phase", "current_phase",
        )
    return _PHASELESS[status]
