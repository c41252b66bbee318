"""SQL Ownership Resolver — confirms activities and sessions belong to the caller.

Invariants:
    - Unknown (or soft-deleted) ids raise ResourceNotFoundError (404)
    - Known ids owned by another user raise ForbiddenError (403)
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pomodify.core.domain_types import ActivityId, SessionId, UserId
from pomodify.core.errors import ForbiddenError, ResourceNotFoundError
from pomodify.models.activity import Activity
from pomodify.models.pomodoro_session import PomodoroSession as SessionModel


class SqlOwnershipResolver:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def resolve_activity(
        self, activity_id: ActivityId, user_id: UserId,
    ) -> None:
        result = await self._db.execute(
            select(Activity.user_id).where(Activity.id == activity_id),
        )
        owner = result.scalar_one_or_none()
        _check_owner("Activity", activity_id, owner, user_id)

    async def resolve_session(
        self, session_id: SessionId, user_id: UserId,
    ) -> None:
        result = await self._db.execute(
            select(Activity.user_id)
            .join(SessionModel, SessionModel.activity_id == Activity.id)
            .where(SessionModel.id == session_id)
            .where(SessionModel.is_deleted.is_(False)),
        )
        owner = result.scalar_one_or_none()
        _check_owner("Session", session_id, owner, user_id)


def _check_owner(
    resource_type: str, resource_id: UUID, owner: UUID | None, user_id: UUID,
) -> None:
    if owner is None:
        raise ResourceNotFoundError(resource_type, str(resource_id))
    if owner != user_id:
        raise ForbiddenError(resource_type, str(resource_id))
