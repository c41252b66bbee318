"""Session Notes — read, replace and per-item edits of a session's note.

Invariants:
    - PUT replaces the whole note (content + items, fresh item ids)
    - Item routes return 404 when the session has no note or the item is unknown
    - Note edits are accepted in every session status, terminal ones included
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from pomodify.api.deps import get_current_user_id, get_session_service
from pomodify.core.domain_types import SessionId, TodoItemId, UserId
from pomodify.core.session_engine import PomodoroSession
from pomodify.core.session_snapshot import note_to_snapshot
from pomodify.schemas.session import NoteRequest, NoteResponse, TodoItemPatch
from pomodify.services.session_service import SessionService

router = APIRouter(prefix="/api/v1/sessions", tags=["session-notes"])


def _note_response(session: PomodoroSession) -> NoteResponse | None:
    snapshot = note_to_snapshot(session.note)
    return NoteResponse.model_validate(snapshot) if snapshot else None


@router.get("/{session_id}/note", response_model=NoteResponse | None)
async def get_note(
    session_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    """The session's note, or null when none was ever written."""
    note = await service.get_note(SessionId(session_id), user_id)
    snapshot = note_to_snapshot(note)
    return NoteResponse.model_validate(snapshot) if snapshot else None


@router.put("/{session_id}/note", response_model=NoteResponse)
async def replace_note(
    session_id: UUID,
    body: NoteRequest,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.update_note(
        SessionId(session_id), user_id, body.to_domain(),
    )
    return _note_response(session)


@router.patch(
    "/{session_id}/note/items/{item_id}/toggle", response_model=NoteResponse,
)
async def toggle_item(
    session_id: UUID,
    item_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.toggle_todo_item(
        SessionId(session_id), user_id, TodoItemId(item_id),
    )
    return _note_response(session)


@router.patch(
    "/{session_id}/note/items/{item_id}", response_model=NoteResponse,
)
async def patch_item(
    session_id: UUID,
    item_id: UUID,
    body: TodoItemPatch,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.patch_todo_item(
        SessionId(session_id), user_id, TodoItemId(item_id),
        text=body.text, done=body.done, order_index=body.order_index,
    )
    return _note_response(session)


@router.delete(
    "/{session_id}/note/items/{item_id}", response_model=NoteResponse,
)
async def delete_item(
    session_id: UUID,
    item_id: UUID,
    user_id: UserId = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
):
    session = await service.delete_todo_item(
        SessionId(session_id), user_id, TodoItemId(item_id),
    )
    return _note_response(session)
