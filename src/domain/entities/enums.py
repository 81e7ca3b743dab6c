"""
Session Auth Domain Enums

All enumeration types used across domain entities and token claims.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class TokenType(str, Enum):
    """Token `type` claim - prevents using one kind of token as the other"""

    access = "access"
    refresh = "refresh"


class RotationPolicy(str, Enum):
    """
    What happens to the session identity on refresh.

    rotating: new session id and token hashes; the presented refresh token
        becomes unusable (single-use refresh tokens).
    non_rotating: same session id and refresh hash; the presented refresh
        token stays valid until the session expires.
    """

    rotating = "rotating"
    non_rotating = "non_rotating"


class RevocationReason(str, Enum):
    """Reasons recorded in AuthSession.revoked_reason"""

    manual_revoke = "manual_revoke"
    logout = "logout"
    logout_all_devices = "logout_all_devices"
