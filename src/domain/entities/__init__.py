"""
Session Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import RevocationReason, RotationPolicy, TokenType, UserStatus
from .session import AuthSession
from .user import User

__all__ = [
    # Enums
    "UserStatus",
    "TokenType",
    "RotationPolicy",
    "RevocationReason",
    # Entities
    "User",
    "AuthSession",
]
