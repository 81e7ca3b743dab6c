"""
Session Management Use Cases

Revocation, listing and reaping of persisted sessions.
"""

from .revoke_sessions_use_case import RevokeSessionsUseCase
from .list_sessions_use_case import ListSessionsUseCase
from .sweep_expired_sessions_use_case import SweepExpiredSessionsUseCase
from .dtos import RevokeResult, SessionSummary

__all__ = [
    "RevokeSessionsUseCase",
    "ListSessionsUseCase",
    "SweepExpiredSessionsUseCase",
    "RevokeResult",
    "SessionSummary",
]
