"""Session Lifecycle — create, read, settings edit and soft delete of sessions.

Invariants:
    - Every route resolves the caller (X-User-Id) before touching the service
    - User input is validated by Pydantic before reaching the route handler
    - Responses come from core/session_snapshot.py (single serialization path)

Design Decisions:
    - Sessions are created under their activity, then addressed by id alone
    - to_session_response exported for reuse by session_commands and session_notes
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from pomodify.api.deps import get_current_user_id, get_session_service
from pomodify.core.domain_types import (
    ActivityId, SessionId, SessionStatus, UserId,
)
from pomodify.core.session_engine import PomodoroSession
from pomodify.core.session_snapshot import session_to_snapshot
from pomodify.schemas.session import (
    SessionCreate, SessionListResponse, SessionResponse, SessionUpdate,
)
from pomodify.services.session_service import SessionService

router = APIRouter(prefix="/api/v1", tags=["sessions"])


def to_session_response(session: PomodoroSession) -> SessionResponse:
    return SessionResponse.model_validate(session_to_snapshot(session))


@router.post(
    "/activities/{activity_id}/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    activity_id: UUID,
    body: SessionCreate,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Create a NOT_STARTED session inside an activity."""
    session = await service.create(
        ActivityId(activity_id),
        user_id,
        session_type=body.session_type,
        focus_minutes=body.focus_minutes,
        break_minutes=body.break_minutes,
        cycles=body.cycles,
        enable_long_break=body.enable_long_break,
        long_break_minutes=body.long_break_minutes,
        long_break_interval_cycles=body.long_break_interval_cycles,
        note=body.note.to_domain() if body.note else None,
    )
    return to_session_response(session)


@router.get(
    "/activities/{activity_id}/sessions",
    response_model=SessionListResponse,
)
async def list_sessions(
    activity_id: UUID,
    status_filter: SessionStatus | None = Query(None, alias="status"),
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """List an activity's sessions, newest first."""
    sessions = await service.list_for_activity(
        ActivityId(activity_id), user_id, status_filter,
    )
    return SessionListResponse(
        sessions=[to_session_response(s) for s in sessions],
    )


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Get session details."""
    session = await service.get(SessionId(session_id), user_id)
    return to_session_response(session)


@router.patch("/sessions/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: UUID,
    body: SessionUpdate,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Edit durations, type or cycle target. Only while NOT_STARTED."""
    session = await service.update_settings(
        SessionId(session_id), user_id, **body.changes(),
    )
    return to_session_response(session)


@router.delete(
    "/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_session(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Soft delete. The session disappears from every read."""
    await service.delete(SessionId(session_id), user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
