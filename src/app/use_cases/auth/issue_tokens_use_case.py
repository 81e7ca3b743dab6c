"""
Issue Tokens Use Case

Creates an access/refresh pair for a freshly authenticated user and
records the session that backs it.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from src.app.services.token_codec import TokenCodec
from src.app.services.token_hashing import hash_token, short_id
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_uuid, utcnow
from src.domain.entities import AuthSession
from .dtos import DeviceInfo, IssueContext, TokenPair

logger = logging.getLogger(__name__)


class IssueTokensUseCase:
    """
    Use case for issuing a token pair at login.

    Business Rules:
    - Every login gets a new session_id (and device_id when the client sent none)
    - Only SHA-256 hashes of the tokens are persisted
    - Session expiry follows the refresh token lifetime
    - Persistence failure fails the login: tokens are never returned for a
      session that was not durably recorded
    """

    def __init__(
        self,
        uow: UnitOfWork,
        codec: TokenCodec,
        log: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.codec = codec
        self.log = log or logger

    async def execute(
        self,
        user_id: Union[UUID, str],
        email: str,
        role: str,
        context: Optional[IssueContext] = None,
    ) -> TokenPair:
        """
        Execute issue tokens use case.

        Args:
            user_id: Authenticated user's ID
            email: User email (copied into both tokens)
            role: User role (copied into the access token)
            context: IP, user agent and device description

        Returns:
            TokenPair for the new session

        Raises:
            PersistenceError: the session could not be stored
        """
        context = context or IssueContext()
        device = context.device_info or DeviceInfo()
        user_uuid = user_id if isinstance(user_id, UUID) else UUID(str(user_id))

        session_id = generate_uuid()
        device_id = device.device_id or generate_uuid()
        now = utcnow()

        access, refresh = self.codec.encode_pair(
            str(user_uuid), email, role, session_id, issued_at=now
        )

        async with self.uow:
            session = AuthSession(
                session_id=session_id,
                user_id=user_uuid,
                device_id=device_id,
                device_fingerprint=device.fingerprint,
                user_agent=context.user_agent,
                ip_address=context.ip_address,
                location_data=device.location,
                device_name=device.name,
                browser_name=device.browser_name,
                browser_version=device.browser_version,
                os_name=device.os_name,
                os_version=device.os_version,
                device_type=device.device_type,
                login_method=context.login_method,
                access_token_hash=hash_token(access.token),
                refresh_token_hash=hash_token(refresh.token),
                expires_at=refresh.expires_at,
                last_activity=now,
                is_revoked=False,
            )
            await self.uow.sessions.create(session)
            await self.uow.commit()

        self.log.info(
            "Session created",
            extra={"user_id": str(user_uuid), "session_id": short_id(session_id)},
        )

        return TokenPair(
            access_token=access.token,
            refresh_token=refresh.token,
            session_id=session_id,
            expires_at=access.expires_at,
            refresh_expires_at=refresh.expires_at,
        )
