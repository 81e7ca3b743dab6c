"""
Unit tests for TokenCodec
"""

from datetime import timedelta

import pytest
from jose import jwt

from src.app.services.token_codec import TokenCodec
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


def test_access_token_round_trip_carries_claims(codec):
    access, _ = codec.encode_pair("user-1", "user@example.com", "admin", "sess-1")

    claims = codec.decode(access.token, TokenType.access)

    assert claims["userId"] == "user-1"
    assert claims["email"] == "user@example.com"
    assert claims["role"] == "admin"
    assert claims["sessionId"] == "sess-1"
    assert claims["type"] == "access"
    assert claims["iss"] == "unit-test-issuer"
    assert claims["exp"] - claims["iat"] == 15 * 60


def test_refresh_token_has_no_role_and_thirty_day_ttl(codec):
    _, refresh = codec.encode_pair("user-1", "user@example.com", "admin", "sess-1")

    claims = codec.decode(refresh.token, TokenType.refresh)

    assert "role" not in claims
    assert claims["type"] == "refresh"
    assert claims["exp"] - claims["iat"] == 30 * 24 * 3600


def test_expiry_timestamps_follow_ttls(codec):
    now = utcnow().replace(microsecond=0)
    access, refresh = codec.encode_pair("u", "e@example.com", "user", "s", issued_at=now)

    assert access.expires_at == now + timedelta(minutes=15)
    assert refresh.expires_at == now + timedelta(days=30)


def test_refresh_token_rejected_as_access(codec):
    _, refresh = codec.encode_pair("u", "e@example.com", "user", "s")

    with pytest.raises(InvalidTokenError):
        codec.decode(refresh.token, TokenType.access)


def test_type_claim_mismatch_rejected(settings, codec):
    forged = jwt.encode(
        {
            "userId": "u",
            "sessionId": "s",
            "type": "refresh",
            "iss": settings.issuer,
            "exp": utcnow() + timedelta(minutes=5),
        },
        settings.access_secret,
        algorithm="HS256",
    )

    with pytest.raises(TokenTypeMismatchError):
        codec.decode(forged, TokenType.access)


def test_expired_token_rejected(codec):
    issued = utcnow() - timedelta(hours=1)
    access, _ = codec.encode_pair("u", "e@example.com", "user", "s", issued_at=issued)

    with pytest.raises(TokenExpiredError):
        codec.decode(access.token, TokenType.access)


def test_issuer_mismatch_rejected(settings, codec):
    other = TokenCodec(settings.model_copy(update={"issuer": "someone-else"}))
    access, _ = other.encode_pair("u", "e@example.com", "user", "s")

    with pytest.raises(IssuerMismatchError):
        codec.decode(access.token, TokenType.access)


def test_foreign_secret_rejected(codec):
    other = TokenCodec(
        TokenSettings(
            access_secret="another-access",
            refresh_secret="another-refresh",
            issuer="unit-test-issuer",
        )
    )
    access, _ = other.encode_pair("u", "e@example.com", "user", "s")

    with pytest.raises(InvalidSignatureError):
        codec.decode(access.token, TokenType.access)


def test_garbage_rejected(codec):
    with pytest.raises(InvalidSignatureError):
        codec.decode("not-a-token", TokenType.access)


def test_missing_claims_rejected(codec):
    token = codec.encode({"email": "e@example.com"}, TokenType.access).token

    with pytest.raises(InvalidTokenError, match="userId"):
        codec.decode(token, TokenType.access)


def test_decode_unsafe_skips_verification(codec):
    issued = utcnow() - timedelta(hours=1)
    access, _ = codec.encode_pair("u", "e@example.com", "user", "s", issued_at=issued)

    claims = codec.decode_unsafe(access.token)

    assert claims["sessionId"] == "s"
    assert codec.decode_unsafe("garbage") is None
