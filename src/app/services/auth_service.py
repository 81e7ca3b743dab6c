"""
Auth Service

Entry point of the token/session engine for collaborators such as the
HTTP layer or a scheduler. Each call runs its use case in a fresh unit of
work; no session validity is cached in process.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union
from uuid import UUID

from src.app.services.token_codec import TokenCodec
from src.app.services.token_settings import TokenSettings
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    IssueContext,
    IssueTokensUseCase,
    Principal,
    RefreshTokenUseCase,
    TokenPair,
    VerifyAccessTokenUseCase,
)
from src.app.use_cases.sessions import (
    ListSessionsUseCase,
    RevokeSessionsUseCase,
    SessionSummary,
    SweepExpiredSessionsUseCase,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Token issuance, verification, refresh and revocation.

    Authentication failures come back as None/False. PersistenceError is
    raised everywhere except verify_access_token, which fails closed.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        settings: TokenSettings,
        codec: Optional[TokenCodec] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.uow_factory = uow_factory
        self.settings = settings
        self.log = log or logger
        self.codec = codec or TokenCodec(settings, log=self.log)

    async def issue_token_pair(
        self,
        user_id: Union[UUID, str],
        email: str,
        role: str,
        context: Optional[IssueContext] = None,
    ) -> TokenPair:
        use_case = IssueTokensUseCase(self.uow_factory(), self.codec, log=self.log)
        return await use_case.execute(user_id, email, role, context)

    async def verify_access_token(self, token: str) -> Optional[Principal]:
        use_case = VerifyAccessTokenUseCase(
            self.uow_factory(), self.codec, self.settings, log=self.log
        )
        result = await use_case.execute(token)
        return result.value if result.is_ok() else None

    async def refresh_access_token(self, refresh_token: str) -> Optional[TokenPair]:
        use_case = RefreshTokenUseCase(
            self.uow_factory(), self.codec, self.settings, log=self.log
        )
        result = await use_case.execute(refresh_token)
        return result.value if result.is_ok() else None

    async def revoke_session(
        self,
        identifier: str,
        reason: Optional[str] = None,
        user_id: Optional[Union[UUID, str]] = None,
    ) -> bool:
        use_case = RevokeSessionsUseCase(self.uow_factory(), log=self.log)
        result = await use_case.revoke_session(identifier, reason, user_id=user_id)
        return result.is_ok()

    async def revoke_all_sessions(
        self, user_id: Union[UUID, str], except_device_id: Optional[str] = None
    ) -> int:
        use_case = RevokeSessionsUseCase(self.uow_factory(), log=self.log)
        result = await use_case.revoke_all_for_user(user_id, except_device_id)
        return result.value.revoked_count

    async def revoke_other_sessions(
        self, user_id: Union[UUID, str], current_session_id: str
    ) -> int:
        """Log out every other device of the caller; 0 if the caller's session is gone"""
        use_case = RevokeSessionsUseCase(self.uow_factory(), log=self.log)
        result = await use_case.revoke_other_sessions(user_id, current_session_id)
        return result.value.revoked_count if result.is_ok() else 0

    async def list_active_sessions(
        self, user_id: Union[UUID, str]
    ) -> List[SessionSummary]:
        return await ListSessionsUseCase(self.uow_factory()).execute(user_id)

    async def sweep_expired_sessions(self) -> int:
        use_case = SweepExpiredSessionsUseCase(self.uow_factory(), log=self.log)
        return await use_case.execute()

    def decode_unsafe(self, token: str) -> Optional[Dict[str, Any]]:
        """Diagnostics only - no signature or liveness check."""
        return self.codec.decode_unsafe(token)
