"""
List Sessions Use Case
"""

from typing import List, Union
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import SessionSummary


class ListSessionsUseCase:
    """Active (not revoked, not expired) sessions of a user, most recent activity first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: Union[UUID, str]) -> List[SessionSummary]:
        owner = user_id if isinstance(user_id, UUID) else UUID(str(user_id))
        async with self.uow:
            sessions = await self.uow.sessions.list_active(owner, utcnow())
            return [SessionSummary.from_session(s) for s in sessions]
