"""
Refresh Token Use Case

Exchanges a refresh token for a new token pair, rotating the session
according to the configured RotationPolicy.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.token_codec import TokenCodec
from src.app.services.token_hashing import hash_token, short_id, token_fingerprint
from src.app.services.token_settings import TokenSettings
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_uuid, utcnow
from src.domain.entities import AuthSession, RotationPolicy, TokenType, User
from src.domain.errors import UNAUTHENTICATED_MESSAGE, InvalidTokenError, SessionNotFoundError
from src.domain.result import Error, Result, Return
from .dtos import TokenPair

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Flow: RECEIVED -> DECODED -> SESSION_VALIDATED -> ROTATED | REUSED -> RETURNED.
    Failures end in REJECTED_BAD_TOKEN or REJECTED_NO_SESSION.

    Business Rules:
    - Token must decode with the refresh secret and carry type=refresh
    - User must exist and be active
    - A live session must hold this refresh token's hash
    - rotating: new session_id and hashes, written with a conditional update
      so two concurrent refreshes of the same token cannot both succeed
    - non_rotating: session_id and refresh hash are kept; only a new access
      token is issued. The presented refresh token is handed back with the
      session's original expiry rather than a fresh refresh token, since a
      new refresh token whose hash is never stored could not be redeemed
    - Failures are never retried here; the client must log in again
    - PersistenceError propagates so callers can tell "retry" from "re-login"
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

    def _reject(self, state: str, code: str, token: str) -> Result[TokenPair]:
        self.log.info(
            "Refresh rejected",
            extra={"state": state, "reason": code, "token": token_fingerprint(token)},
        )
        return Return.err(Error(code, UNAUTHENTICATED_MESSAGE))

    async def execute(self, refresh_token: str) -> Result[TokenPair]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with the new TokenPair, or Error with a uniform message

        Raises:
            PersistenceError: the session store failed or timed out
        """
        try:
            claims = self.codec.decode(refresh_token, TokenType.refresh)
            user_id = UUID(str(claims["userId"]))
        except InvalidTokenError as exc:
            return self._reject("REJECTED_BAD_TOKEN", exc.code, refresh_token)
        except ValueError:
            return self._reject("REJECTED_BAD_TOKEN", "INVALID_TOKEN", refresh_token)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None or not user.is_active:
                return self._reject("REJECTED_BAD_TOKEN", "USER_INACTIVE", refresh_token)

            now = utcnow()
            old_hash = hash_token(refresh_token)
            session = await self.uow.sessions.find_by_user_and_refresh_hash(
                user_id, old_hash, now
            )
            if session is None:
                return self._reject(
                    "REJECTED_NO_SESSION", SessionNotFoundError.code, refresh_token
                )

            if self.settings.rotation_policy == RotationPolicy.rotating:
                pair = await self._rotate(user, session, old_hash, now)
            else:
                pair = await self._reuse(user, session, refresh_token, now)

            if pair is None:
                return self._reject(
                    "REJECTED_NO_SESSION", SessionNotFoundError.code, refresh_token
                )

            await self.uow.commit()

        return Return.ok(pair)

    async def _rotate(
        self, user: User, session: AuthSession, old_hash: str, now
    ) -> Optional[TokenPair]:
        new_session_id = generate_uuid()
        access, refresh = self.codec.encode_pair(
            str(user.id), user.email, user.role, new_session_id, issued_at=now
        )

        replaced = await self.uow.sessions.replace(
            session.session_id,
            expected_refresh_hash=old_hash,
            new_session_id=new_session_id,
            new_access_hash=hash_token(access.token),
            new_refresh_hash=hash_token(refresh.token),
            new_expires_at=refresh.expires_at,
            now=now,
        )
        if not replaced:
            # Another refresh with the same token won the conditional update
            self.log.warning(
                "Concurrent rotation detected",
                extra={"session_id": short_id(session.session_id)},
            )
            return None

        self.log.info(
            "Session rotated",
            extra={
                "user_id": str(user.id),
                "old_session_id": short_id(session.session_id),
                "new_session_id": short_id(new_session_id),
            },
        )
        return TokenPair(
            access_token=access.token,
            refresh_token=refresh.token,
            session_id=new_session_id,
            expires_at=access.expires_at,
            refresh_expires_at=refresh.expires_at,
        )

    async def _reuse(
        self, user: User, session: AuthSession, refresh_token: str, now
    ) -> Optional[TokenPair]:
        """New access token only; refresh token and its expiry are unchanged"""
        access = self.codec.encode(
            {
                "userId": str(user.id),
                "email": user.email,
                "role": user.role,
                "sessionId": session.session_id,
            },
            TokenType.access,
            issued_at=now,
        )

        touched = await self.uow.sessions.touch_activity(
            session.session_id, now, access_token_hash=hash_token(access.token)
        )
        if not touched:
            return None

        self.log.info(
            "Session reused",
            extra={"user_id": str(user.id), "session_id": short_id(session.session_id)},
        )
        return TokenPair(
            access_token=access.token,
            refresh_token=refresh_token,
            session_id=session.session_id,
            expires_at=access.expires_at,
            refresh_expires_at=session.expires_at,
        )
