"""
Token Codec

Signs and verifies access/refresh JWTs. Purely cryptographic and
structural: never consults the session store.
"""

import logging
from datetime import datetime
from typing import Any, Dict, NamedTuple, Optional, Tuple

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from src.app.services.token_settings import TokenSettings
from src.domain.base import utcnow
from src.domain.entities import TokenType
from src.domain.errors import (
    InvalidSignatureError,
    InvalidTokenError,
    IssuerMismatchError,
    TokenExpiredError,
    TokenTypeMismatchError,
)

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("userId", "sessionId", "type")


class EncodedToken(NamedTuple):
    token: str
    expires_at: datetime


class TokenCodec:
    """
    Encodes and decodes signed tokens.

    Access and refresh tokens are signed with different secrets and carry a
    `type` claim, so neither can be used in place of the other.
    """

    def __init__(self, settings: TokenSettings, log: Optional[logging.Logger] = None):
        self.settings = settings
        self.log = log or logger

    def _secret(self, token_type: TokenType) -> str:
        if token_type == TokenType.access:
            return self.settings.access_secret
        return self.settings.refresh_secret

    def _ttl(self, token_type: TokenType):
        if token_type == TokenType.access:
            return self.settings.access_token_ttl
        return self.settings.refresh_token_ttl

    def encode(
        self,
        claims: Dict[str, Any],
        token_type: TokenType,
        issued_at: Optional[datetime] = None,
    ) -> EncodedToken:
        """
        Sign claims as a token of the given type.

        Args:
            claims: userId, email, sessionId and (access only) role
            token_type: access or refresh
            issued_at: naive UTC issue time, defaults to now

        Returns:
            EncodedToken with the JWT string and its expiry
        """
        now = issued_at or utcnow()
        expires_at = now + self._ttl(token_type)
        payload = {
            **claims,
            "type": token_type.value,
            "iat": now,
            "exp": expires_at,
            "iss": self.settings.issuer,
        }
        token = jwt.encode(
            payload, self._secret(token_type), algorithm=self.settings.algorithm
        )
        return EncodedToken(token=token, expires_at=expires_at)

    def encode_pair(
        self,
        user_id: str,
        email: str,
        role: str,
        session_id: str,
        issued_at: Optional[datetime] = None,
    ) -> Tuple[EncodedToken, EncodedToken]:
        """Sign an access token and a refresh token for one session"""
        now = issued_at or utcnow()
        access = self.encode(
            {"userId": user_id, "email": email, "role": role, "sessionId": session_id},
            TokenType.access,
            now,
        )
        refresh = self.encode(
            {"userId": user_id, "email": email, "sessionId": session_id},
            TokenType.refresh,
            now,
        )
        return access, refresh

    def decode(self, token: str, token_type: TokenType) -> Dict[str, Any]:
        """
        Verify signature, expiry, issuer and type, and return the claims.

        Raises:
            TokenExpiredError: exp is in the past
            IssuerMismatchError: iss differs from the configured issuer
            InvalidSignatureError: bad signature or malformed token
            TokenTypeMismatchError: type claim differs from token_type
            InvalidTokenError: required claims are missing
        """
        try:
            claims = jwt.decode(
                token,
                self._secret(token_type),
                algorithms=[self.settings.algorithm],
                issuer=self.settings.issuer,
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JWTClaimsError as exc:
            if "issuer" in str(exc).lower():
                raise IssuerMismatchError("Token issuer mismatch") from exc
            raise InvalidTokenError(f"Invalid token claims: {exc}") from exc
        except JWTError as exc:
            raise InvalidSignatureError("Token signature is invalid") from exc

        if claims.get("type") != token_type.value:
            raise TokenTypeMismatchError(
                f"Expected {token_type.value} token, got {claims.get('type')!r}"
            )

        missing = [name for name in REQUIRED_CLAIMS if not claims.get(name)]
        if missing:
            raise InvalidTokenError(f"Token missing claims: {', '.join(missing)}")

        return claims

    def decode_unsafe(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Read claims without verifying anything.

        For diagnostics only. Never authorize on the result.
        """
        try:
            return jwt.get_unverified_claims(token)
        except JWTError:
            self.log.debug("Unverified decode failed for malformed token")
            return None
