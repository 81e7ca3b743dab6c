"""
Use Cases

Organized into domain folders:
- auth/: Token issuance, verification and refresh
- sessions/: Revocation, listing and reaping
"""

from .auth import (
    IssueTokensUseCase,
    RefreshTokenUseCase,
    VerifyAccessTokenUseCase,
)
from .sessions import (
    ListSessionsUseCase,
    RevokeSessionsUseCase,
    SweepExpiredSessionsUseCase,
)

__all__ = [
    # Auth
    "IssueTokensUseCase",
    "VerifyAccessTokenUseCase",
    "RefreshTokenUseCase",
    # Sessions
    "RevokeSessionsUseCase",
    "ListSessionsUseCase",
    "SweepExpiredSessionsUseCase",
]
