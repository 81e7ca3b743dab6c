from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.store_guard import guarded
from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import AuthSession


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession, timeout: float = 5.0):
        self.session = session
        self.timeout = timeout

    async def _execute(self, stmt):
        return await guarded(self.session.execute(stmt), self.timeout)

    @staticmethod
    def _live(now: datetime):
        return (AuthSession.is_revoked == False, AuthSession.expires_at >= now)

    @staticmethod
    def _secondary_match(identifier: str):
        return or_(
            AuthSession.access_token_hash == identifier,
            AuthSession.refresh_token_hash == identifier,
            AuthSession.device_id == identifier,
        )

    async def create(self, session_obj: AuthSession) -> str:
        """Create a new session"""
        self.session.add(session_obj)
        await guarded(self.session.flush(), self.timeout)
        return session_obj.session_id

    async def get_by_session_id(self, session_id: str) -> Optional[AuthSession]:
        """Get session by session_id"""
        stmt = select(AuthSession).where(AuthSession.session_id == session_id)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_user_and_access_hash(
        self, user_id: UUID, access_token_hash: str, now: datetime
    ) -> Optional[AuthSession]:
        """Find live session by access token hash"""
        stmt = (
            select(AuthSession)
            .where(
                AuthSession.user_id == user_id,
                AuthSession.access_token_hash == access_token_hash,
                *self._live(now),
            )
            .limit(1)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_user_and_refresh_hash(
        self, user_id: UUID, refresh_token_hash: str, now: datetime
    ) -> Optional[AuthSession]:
        """Find live session by refresh token hash"""
        stmt = (
            select(AuthSession)
            .where(
                AuthSession.user_id == user_id,
                AuthSession.refresh_token_hash == refresh_token_hash,
                *self._live(now),
            )
            .limit(1)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def touch_activity(
        self,
        session_id: str,
        now: datetime,
        access_token_hash: Optional[str] = None,
    ) -> bool:
        """Update last_activity (and optionally the access token hash)"""
        values = {"last_activity": now}
        if access_token_hash is not None:
            values["access_token_hash"] = access_token_hash
        stmt = (
            update(AuthSession)
            .where(AuthSession.session_id == session_id, AuthSession.is_revoked == False)
            .values(**values)
        )
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def replace(
        self,
        session_id: str,
        expected_refresh_hash: str,
        new_session_id: str,
        new_access_hash: str,
        new_refresh_hash: str,
        new_expires_at: datetime,
        now: datetime,
    ) -> bool:
        """
        Rotate a session in a single conditional UPDATE.

        The WHERE clause pins the refresh hash that was read, so a second
        rotation racing on the same refresh token matches zero rows.
        """
        stmt = (
            update(AuthSession)
            .where(
                AuthSession.session_id == session_id,
                AuthSession.refresh_token_hash == expected_refresh_hash,
                *self._live(now),
            )
            .values(
                session_id=new_session_id,
                access_token_hash=new_access_hash,
                refresh_token_hash=new_refresh_hash,
                expires_at=new_expires_at,
                last_activity=now,
            )
        )
        result = await self._execute(stmt)
        return result.rowcount == 1

    async def find_by_identifier(
        self, identifier: str, user_id: Optional[UUID] = None
    ) -> List[AuthSession]:
        """Sessions matching a session_id, else a token hash or device_id"""
        owner = [AuthSession.user_id == user_id] if user_id is not None else []

        stmt = select(AuthSession).where(AuthSession.session_id == identifier, *owner)
        result = await self._execute(stmt)
        sessions = list(result.scalars().all())
        if sessions:
            return sessions

        stmt = select(AuthSession).where(self._secondary_match(identifier), *owner)
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def revoke(
        self,
        identifier: str,
        reason: str,
        now: datetime,
        user_id: Optional[UUID] = None,
    ) -> int:
        """Revoke by session_id first, then by token hash or device_id"""
        owner = [AuthSession.user_id == user_id] if user_id is not None else []
        values = {"is_revoked": True, "revoked_at": now, "revoked_reason": reason}

        stmt = (
            update(AuthSession)
            .where(
                AuthSession.session_id == identifier,
                AuthSession.is_revoked == False,
                *owner,
            )
            .values(**values)
        )
        result = await self._execute(stmt)
        if result.rowcount > 0:
            return result.rowcount

        stmt = (
            update(AuthSession)
            .where(
                self._secondary_match(identifier),
                AuthSession.is_revoked == False,
                *owner,
            )
            .values(**values)
        )
        result = await self._execute(stmt)
        return result.rowcount

    async def revoke_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        now: datetime,
        except_device_id: Optional[str] = None,
    ) -> int:
        """Revoke all non-revoked sessions for a user, optionally sparing one device"""
        conditions = [AuthSession.user_id == user_id, AuthSession.is_revoked == False]
        if except_device_id is not None:
            conditions.append(
                or_(
                    col(AuthSession.device_id).is_(None),
                    AuthSession.device_id != except_device_id,
                )
            )
        stmt = (
            update(AuthSession)
            .where(*conditions)
            .values(is_revoked=True, revoked_at=now, revoked_reason=reason)
        )
        result = await self._execute(stmt)
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions past expiry, revoked or not"""
        stmt = delete(AuthSession).where(AuthSession.expires_at < now)
        result = await self._execute(stmt)
        return result.rowcount

    async def list_active(self, user_id: UUID, now: datetime) -> List[AuthSession]:
        """Live sessions for a user ordered by last_activity descending"""
        stmt = (
            select(AuthSession)
            .where(AuthSession.user_id == user_id, *self._live(now))
            .order_by(col(AuthSession.last_activity).desc())
        )
        result = await self._execute(stmt)
        return list(result.scalars().all())
