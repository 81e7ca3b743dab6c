"""
Verify Access Token Use Case

Authenticates a request: cryptographic check first, then session liveness.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.token_codec import TokenCodec
from src.app.services.token_hashing import hash_token, token_fingerprint
from src.app.services.token_settings import TokenSettings
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuthSession, TokenType
from src.domain.errors import (
    UNAUTHENTICATED_MESSAGE,
    InvalidTokenError,
    PersistenceError,
    SessionNotFoundError,
)
from src.domain.result import Error, Result, Return
from .dtos import Principal

logger = logging.getLogger(__name__)


class VerifyAccessTokenUseCase:
    """
    Use case for verifying an access token on every authenticated request.

    Business Rules:
    - Token must decode with the access secret and carry type=access
    - User must exist and be active
    - A live session (not revoked, not expired) must hold this token's hash
    - Every failure carries the same message; the reason code is logged only
    - Store failures fail closed (unauthenticated), never open
    """

    def __init__(
        self,
        uow: UnitOfWork,
        codec: TokenCodec,
        settings: TokenSettings,
        log: Optional[logging.Logger] = None,
    ):
        self.uow = uow
        self.codec = codec
        self.settings = settings
        self.log = log or logger

    def _reject(self, code: str, token: str) -> Result[Principal]:
        self.log.info(
            "Access token rejected",
            extra={"reason": code, "token": token_fingerprint(token)},
        )
        return Return.err(Error(code, UNAUTHENTICATED_MESSAGE))

    def _activity_is_stale(self, session: AuthSession, now) -> bool:
        interval = self.settings.activity_touch_interval_seconds
        if interval <= 0 or session.last_activity is None:
            return True
        return (now - session.last_activity).total_seconds() >= interval

    async def execute(self, token: str) -> Result[Principal]:
        """
        Execute verify access token use case.

        Args:
            token: Raw access token

        Returns:
            Result with the Principal, or Error with a uniform message
        """
        try:
            claims = self.codec.decode(token, TokenType.access)
            user_id = UUID(str(claims["userId"]))
        except InvalidTokenError as exc:
            return self._reject(exc.code, token)
        except ValueError:
            return self._reject("INVALID_TOKEN", token)

        try:
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
                if user is None or not user.is_active:
                    return self._reject("USER_INACTIVE", token)

                now = utcnow()
                session = await self.uow.sessions.find_by_user_and_access_hash(
                    user_id, hash_token(token), now
                )
                if session is None or session.session_id != claims["sessionId"]:
                    return self._reject(SessionNotFoundError.code, token)

                # Read before the unit of work exits; its rollback expires loaded rows
                principal = Principal(
                    user_id=str(user.id),
                    email=claims.get("email") or user.email,
                    role=claims.get("role") or user.role,
                    session_id=session.session_id,
                )

                if self._activity_is_stale(session, now):
                    await self.uow.sessions.touch_activity(session.session_id, now)
                    await self.uow.commit()
        except PersistenceError as exc:
            self.log.warning(
                "Session store unavailable during verification: %s", exc.message
            )
            return self._reject(PersistenceError.code, token)

        return Return.ok(principal)
