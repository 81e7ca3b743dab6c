"""
Session Auth Error Taxonomy

Cryptographic and structural failures are handled inside use cases and
turned into uniform "unauthenticated" outcomes. PersistenceError is the
only error that crosses the service boundary during normal operation.
"""

UNAUTHENTICATED_MESSAGE = "Invalid or expired token"


class AuthError(Exception):
    """Base class for all token/session engine errors"""

    code = "AUTH_ERROR"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class ConfigMissingError(AuthError):
    """Required configuration (signing secrets) is absent - refuse to start"""

    code = "CONFIG_MISSING"


class InvalidTokenError(AuthError):
    """Malformed token, bad signature, issuer mismatch or expiry"""

    code = "INVALID_TOKEN"


class InvalidSignatureError(InvalidTokenError):
    code = "INVALID_SIGNATURE"


class TokenExpiredError(InvalidTokenError):
    code = "TOKEN_EXPIRED"


class IssuerMismatchError(InvalidTokenError):
    code = "ISSUER_MISMATCH"


class TokenTypeMismatchError(InvalidTokenError):
    """Access token presented where a refresh token was expected, or vice versa"""

    code = "TYPE_MISMATCH"


class SessionNotFoundError(AuthError):
    """No live session matches the token (hash mismatch, revoked, or expired)"""

    code = "SESSION_NOT_FOUND"


class PersistenceError(AuthError):
    """Session store failure or timeout - retryable, distinct from auth failure"""

    code = "PERSISTENCE_ERROR"
