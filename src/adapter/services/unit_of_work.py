from typing import Callable

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.store_guard import guarded
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern.

    Opens one AsyncSession per `async with` block; anything not committed
    is rolled back on exit.
    """

    def __init__(
        self, session_factory: Callable[[], AsyncSession], timeout: float = 5.0
    ):
        self.session_factory = session_factory
        self.timeout = timeout
        self.session = None

    async def __aenter__(self):
        self.session = self.session_factory()
        self.users = UserRepository(self.session, self.timeout)
        self.sessions = SessionRepository(self.session, self.timeout)
        return self

    async def __aexit__(self, *args):
        try:
            await self.rollback()
        finally:
            await self.session.close()

    async def commit(self):
        await guarded(self.session.commit(), self.timeout)

    async def rollback(self):
        await guarded(self.session.rollback(), self.timeout)
