"""
Revoke Sessions Use Case

Marks sessions revoked so their tokens stop verifying and refreshing.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RevocationReason
from src.domain.errors import SessionNotFoundError
from src.domain.result import Error, Result, Return
from .dtos import RevokeResult

logger = logging.getLogger(__name__)


def _as_uuid(value: Union[UUID, str]) -> UUID:
    return value if isinstance(value, UUID) else UUID(str(value))


class RevokeSessionsUseCase:
    """
    Use case for revoking sessions.

    Business Rules:
    - Identifier may be a session_id, a token hash or a device_id;
      session_id is tried first
    - Revocation is terminal and idempotent: revoking an already-revoked
      session succeeds with zero further effect
    - Bulk revocation can spare the caller's own device
      ("log out other devices")
    """

    def __init__(self, uow: UnitOfWork, log: Optional[logging.Logger] = None):
        self.uow = uow
        self.log = log or logger

    async def revoke_session(
        self,
        identifier: str,
        reason: Optional[str] = None,
        user_id: Optional[Union[UUID, str]] = None,
    ) -> Result[RevokeResult]:
        """
        Revoke the session(s) matching an identifier.

        Args:
            identifier: session_id, token hash or device_id
            reason: Stored in revoked_reason (defaults to manual_revoke)
            user_id: When given, only this user's sessions can match

        Returns:
            Result with the number of newly revoked sessions, or
            SESSION_NOT_FOUND when nothing matches the identifier
        """
        owner = _as_uuid(user_id) if user_id is not None else None
        reason = reason or RevocationReason.manual_revoke.value

        async with self.uow:
            count = await self.uow.sessions.revoke(
                identifier, reason, utcnow(), user_id=owner
            )
            if count == 0:
                matches = await self.uow.sessions.find_by_identifier(
                    identifier, user_id=owner
                )
                if not matches:
                    return Return.err(Error(SessionNotFoundError.code, "Session not found"))
            await self.uow.commit()

        self.log.info(
            "Session revocation processed",
            extra={"revoked_count": count, "reason": reason},
        )
        return Return.ok(RevokeResult(revoked_count=count))

    async def revoke_all_for_user(
        self,
        user_id: Union[UUID, str],
        except_device_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Result[RevokeResult]:
        """
        Revoke every live session of a user.

        Args:
            user_id: Owner of the sessions
            except_device_id: Device whose sessions stay valid
            reason: Stored in revoked_reason (defaults to logout_all_devices)

        Returns:
            Result with the number of revoked sessions
        """
        owner = _as_uuid(user_id)
        reason = reason or RevocationReason.logout_all_devices.value

        async with self.uow:
            count = await self.uow.sessions.revoke_all_for_user(
                owner, reason, utcnow(), except_device_id=except_device_id
            )
            await self.uow.commit()

        self.log.info(
            "User sessions revoked",
            extra={
                "user_id": str(owner),
                "revoked_count": count,
                "kept_device": bool(except_device_id),
            },
        )
        return Return.ok(RevokeResult(revoked_count=count))

    async def revoke_other_sessions(
        self, user_id: Union[UUID, str], current_session_id: str
    ) -> Result[RevokeResult]:
        """
        Revoke every live session of a user except those on the caller's device.

        The device is read from the caller's own session row, never taken
        from client input.

        Args:
            user_id: Owner of the sessions
            current_session_id: Session behind the caller's access token

        Returns:
            Result with the number of revoked sessions, or SESSION_NOT_FOUND
            when the caller's session is gone or belongs to someone else
        """
        owner = _as_uuid(user_id)

        async with self.uow:
            current = await self.uow.sessions.get_by_session_id(current_session_id)
            if current is None or current.user_id != owner or current.is_revoked:
                return Return.err(Error(SessionNotFoundError.code, "Session not found"))
            device_id = current.device_id

        return await self.revoke_all_for_user(owner, except_device_id=device_id)
