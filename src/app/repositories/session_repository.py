from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AuthSession


class ISessionRepository(ABC):
    """Session store interface - application layer"""

    @abstractmethod
    async def create(self, session: AuthSession) -> str:
        """Persist a new session. Returns its session_id."""
        pass

    @abstractmethod
    async def get_by_session_id(self, session_id: str) -> Optional[AuthSession]:
        """Get session by session_id regardless of liveness"""
        pass

    @abstractmethod
    async def find_by_user_and_access_hash(
        self, user_id: UUID, access_token_hash: str, now: datetime
    ) -> Optional[AuthSession]:
        """Find a live (not revoked, not expired) session by access token hash"""
        pass

    @abstractmethod
    async def find_by_user_and_refresh_hash(
        self, user_id: UUID, refresh_token_hash: str, now: datetime
    ) -> Optional[AuthSession]:
        """Find a live (not revoked, not expired) session by refresh token hash"""
        pass

    @abstractmethod
    async def touch_activity(
        self,
        session_id: str,
        now: datetime,
        access_token_hash: Optional[str] = None,
    ) -> bool:
        """Update last_activity, optionally re-pointing the access token hash."""
        pass

    @abstractmethod
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
        Conditionally rotate a session.

        Only succeeds while expected_refresh_hash is still the current hash
        of a non-revoked session. Returns False if a concurrent rotation or
        revocation got there first.
        """
        pass

    @abstractmethod
    async def find_by_identifier(
        self, identifier: str, user_id: Optional[UUID] = None
    ) -> List[AuthSession]:
        """Sessions matching a session_id, else a token hash or device_id"""
        pass

    @abstractmethod
    async def revoke(
        self,
        identifier: str,
        reason: str,
        now: datetime,
        user_id: Optional[UUID] = None,
    ) -> int:
        """
        Revoke by session_id, falling back to token hash or device_id.
        Returns the number of sessions newly revoked.
        """
        pass

    @abstractmethod
    async def revoke_all_for_user(
        self,
        user_id: UUID,
        reason: str,
        now: datetime,
        except_device_id: Optional[str] = None,
    ) -> int:
        """Revoke all non-revoked sessions of a user, optionally sparing one device"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete rows with expires_at < now regardless of revocation"""
        pass

    @abstractmethod
    async def list_active(self, user_id: UUID, now: datetime) -> List[AuthSession]:
        """Live sessions of a user, most recently active first"""
        pass
