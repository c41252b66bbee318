"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Callers serialize commands per session; save() detects a lost race via version
    - list_for_activity returns every live session; status filtering happens after
      stale expiry, since expiry itself changes status

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the engine functions that consume their results are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from typing import Protocol

from pomodify.core.domain_types import ActivityId, SessionId, UserId
from pomodify.core.session_engine import PomodoroSession


class SessionRepository(Protocol):
    """Persistence Gateway for the session aggregate — implemented by shell."""
    async def get(
        self, session_id: SessionId, for_update: bool = False,
    ) -> PomodoroSession | None: ...
    async def add(self, session: PomodoroSession) -> PomodoroSession: ...
    async def save(self, session: PomodoroSession) -> PomodoroSession: ...
    async def list_for_activity(self, activity_id: ActivityId) -> list[PomodoroSession]: ...
    async def soft_delete(self, session_id: SessionId) -> None: ...


class OwnershipResolver(Protocol):
    """Confirms a resource belongs to the requesting user — implemented by shell.

    Raises ResourceNotFoundError for unknown ids, ForbiddenError on mismatch.
    """
    async def resolve_activity(
        self, activity_id: ActivityId, user_id: UserId,
    ) -> None: ...
    async def resolve_session(
        self, session_id: SessionId, user_id: UserId,
    ) -> None: ...
