"""Request Dependencies — caller identity and per-request service wiring.

Invariants:
    - Every session route resolves the caller from the X-User-Id header
    - Missing or malformed identity -> 401, before any database access
    - One SessionService per request, bound to the request's AsyncSession

Design Decisions:
    - Identity issued upstream (gateway/auth service); this API only trusts the header
"""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from pomodify.config import get_settings
from pomodify.core.domain_types import UserId
from pomodify.infrastructure.database import get_db
from pomodify.infrastructure.ownership import SqlOwnershipResolver
from pomodify.infrastructure.session_repository import SqlSessionRepository
from pomodify.services.session_service import SessionService


async def get_current_user_id(
    x_user_id: str | None = Header(None),
) -> UserId:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing or invalid X-User-Id header",
    )
    if not x_user_id:
        raise credentials_exception
    try:
        return UserId(UUID(x_user_id))
    except ValueError:
        raise credentials_exception


async def get_session_service(
    db: AsyncSession = Depends(get_db),
) -> SessionService:
    return SessionService(
        SqlSessionRepository(db),
        SqlOwnershipResolver(db),
        get_settings(),
    )
