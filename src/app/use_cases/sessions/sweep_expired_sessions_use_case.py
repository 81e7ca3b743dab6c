"""
Sweep Expired Sessions Use Case

Housekeeping: physically deletes session rows past their expiry.
Never called inline with a request.
"""

import logging
from datetime import datetime
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class SweepExpiredSessionsUseCase:
    """
    Business Rules:
    - Deletes rows with expires_at < now, revoked or not
    - Running twice with no time passing deletes nothing the second time
    """

    def __init__(self, uow: UnitOfWork, log: Optional[logging.Logger] = None):
        self.uow = uow
        self.log = log or logger

    async def execute(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        async with self.uow:
            deleted = await self.uow.sessions.delete_expired(now)
            await self.uow.commit()

        self.log.info("Expired sessions swept", extra={"deleted_count": deleted})
        return deleted
