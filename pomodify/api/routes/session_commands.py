"""Session Commands — one POST endpoint per lifecycle command.

Invariants:
    - Each endpoint maps to exactly one SessionCommand
    - Illegal commands surface as 409 INVALID_TRANSITION via the global handler
    - Request bodies are optional; only pause/complete-phase/stop/finish accept a note
      and only reset accepts clear_note

Design Decisions:
    - Endpoint per command over a single /commands route: every command visible in
      the OpenAPI schema with its own body shape
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from pomodify.api.deps import get_current_user_id, get_session_service
from pomodify.api.routes.session_lifecycle import to_session_response
from pomodify.core.domain_types import SessionCommand, SessionId, UserId
from pomodify.schemas.session import CommandNoteBody, ResetBody, SessionResponse
from pomodify.services.session_service import SessionService

router = APIRouter(prefix="/api/v1/sessions", tags=["session-commands"])


def _note_payload(body: CommandNoteBody | None) -> dict:
    if body is None or body.note is None:
        return {}
    return {"note": body.note.to_domain()}


@router.post("/{session_id}/start", response_model=SessionResponse)
async def start_session(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.execute(
        SessionCommand.START, SessionId(session_id), user_id,
    )
    return to_session_response(session)


@router.post("/{session_id}/pause", response_model=SessionResponse)
async def pause_session(
    session_id: UUID,
    body: CommandNoteBody | None = None,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.execute(
        SessionCommand.PAUSE, SessionId(session_id), user_id,
        **_note_payload(body),
    )
    return to_session_response(session)


@router.post("/{session_id}/resume", response_model=SessionResponse)
async def resume_session(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.execute(
        SessionCommand.RESUME, SessionId(session_id), user_id,
    )
    return to_session_response(session)


@router.post("/{session_id}/complete-phase", response_model=SessionResponse)
async def complete_phase(
    session_id: UUID,
    body: CommandNoteBody | None = None,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Current phase ran to the end; FOCUS credits a cycle."""
    session = await service.execute(
        SessionCommand.COMPLETE_PHASE, SessionId(session_id), user_id,
        **_note_payload(body),
    )
    return to_session_response(session)


@router.post("/{session_id}/skip", response_model=SessionResponse)
async def skip_phase(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Jump to the next phase without crediting a cycle."""
    session = await service.execute(
        SessionCommand.SKIP_PHASE, SessionId(session_id), user_id,
    )
    return to_session_response(session)


@router.post("/{session_id}/complete-early", response_model=SessionResponse)
async def complete_early(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.execute(
        SessionCommand.COMPLETE_EARLY, SessionId(session_id), user_id,
    )
    return to_session_response(session)


@router.post("/{session_id}/stop", response_model=SessionResponse)
async def stop_session(
    session_id: UUID,
    body: CommandNoteBody | None = None,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Leave without finishing (ABANDONED)."""
    session = await service.execute(
        SessionCommand.STOP, SessionId(session_id), user_id,
        **_note_payload(body),
    )
    return to_session_response(session)


@router.post("/{session_id}/finish", response_model=SessionResponse)
async def finish_session(
    session_id: UUID,
    body: CommandNoteBody | None = None,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.execute(
        SessionCommand.FINISH, SessionId(session_id), user_id,
        **_note_payload(body),
    )
    return to_session_response(session)


@router.post("/{session_id}/cancel", response_model=SessionResponse)
async def cancel_session(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.execute(
        SessionCommand.CANCEL, SessionId(session_id), user_id,
    )
    return to_session_response(session)


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset_session(
    session_id: UUID,
    body: ResetBody | None = None,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """Back to NOT_STARTED; the note survives unless clear_note is set."""
    clear_note = body.clear_note if body else False
    session = await service.execute(
        SessionCommand.RESET, SessionId(session_id), user_id,
        clear_note=clear_note,
    )
    return to_session_response(session)
