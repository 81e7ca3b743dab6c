"""
Unit tests for Refresh Token Use Case
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.token_hashing import hash_token
from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.base import utcnow
from src.domain.entities import AuthSession, RotationPolicy, TokenType, User, UserStatus
from src.domain.errors import UNAUTHENTICATED_MESSAGE, PersistenceError


def _login(codec, status=UserStatus.active):
    user = User(id=uuid4(), email="user@example.com", role="user", status=status)
    access, refresh = codec.encode_pair(str(user.id), user.email, user.role, "sess-old")
    session = AuthSession(
        session_id="sess-old",
        user_id=user.id,
        device_id="device-1",
        access_token_hash=hash_token(access.token),
        refresh_token_hash=hash_token(refresh.token),
        expires_at=refresh.expires_at,
        last_activity=utcnow(),
    )
    return user, session, access.token, refresh.token


@pytest.mark.asyncio
async def test_rotating_refresh_issues_new_session(mock_uow, codec, settings):
    """Rotation replaces session id and both hashes, pinned to the presented token"""
    # Arrange
    user, session, _, refresh_token = _login(codec)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.find_by_user_and_refresh_hash.return_value = session

    # Act
    result = await RefreshTokenUseCase(mock_uow, codec, settings).execute(refresh_token)

    # Assert
    assert result.is_ok()
    pair = result.value
    assert pair.session_id != "sess-old"
    assert pair.refresh_token != refresh_token

    call = mock_uow.sessions.replace.call_args
    assert call.args[0] == "sess-old"
    assert call.kwargs["expected_refresh_hash"] == hash_token(refresh_token)
    assert call.kwargs["new_session_id"] == pair.session_id
    assert call.kwargs["new_access_hash"] == hash_token(pair.access_token)
    assert call.kwargs["new_refresh_hash"] == hash_token(pair.refresh_token)
    assert call.kwargs["new_expires_at"] == pair.refresh_expires_at

    claims = codec.decode(pair.access_token, TokenType.access)
    assert claims["sessionId"] == pair.session_id
    assert claims["role"] == "user"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_lost_rotation_race_is_rejected(mock_uow, codec, settings):
    """A concurrent refresh already replaced the row"""
    user, session, _, refresh_token = _login(codec)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.find_by_user_and_refresh_hash.return_value = session
    mock_uow.sessions.replace.return_value = False

    result = await RefreshTokenUseCase(mock_uow, codec, settings).execute(refresh_token)

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"
    assert result.error.message == UNAUTHENTICATED_MESSAGE
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_non_rotating_refresh_keeps_session(mock_uow, codec, settings):
    """Non-rotating policy reuses session id and refresh token"""
    reuse = settings.model_copy(update={"rotation_policy": RotationPolicy.non_rotating})
    user, session, _, refresh_token = _login(codec)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.find_by_user_and_refresh_hash.return_value = session

    result = await RefreshTokenUseCase(mock_uow, codec, reuse).execute(refresh_token)

    assert result.is_ok()
    pair = result.value
    assert pair.session_id == "sess-old"
    assert pair.refresh_token == refresh_token
    assert pair.refresh_expires_at == session.expires_at
    mock_uow.sessions.replace.assert_not_called()

    touch = mock_uow.sessions.touch_activity.call_args
    assert touch.args[0] == "sess-old"
    assert touch.kwargs["access_token_hash"] == hash_token(pair.access_token)


@pytest.mark.asyncio
async def test_access_token_cannot_refresh(mock_uow, codec, settings):
    _, _, access_token, _ = _login(codec)

    result = await RefreshTokenUseCase(mock_uow, codec, settings).execute(access_token)

    assert result.is_err()
    assert result.error.message == UNAUTHENTICATED_MESSAGE
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_revoked_or_unknown_session_rejected(mock_uow, codec, settings):
    user, _, _, refresh_token = _login(codec)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.find_by_user_and_refresh_hash.return_value = None

    result = await RefreshTokenUseCase(mock_uow, codec, settings).execute(refresh_token)

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.sessions.replace.assert_not_called()


@pytest.mark.asyncio
async def test_disabled_user_cannot_refresh(mock_uow, codec, settings):
    user, _, _, refresh_token = _login(codec, status=UserStatus.disabled)
    mock_uow.users.get_by_id.return_value = user

    result = await RefreshTokenUseCase(mock_uow, codec, settings).execute(refresh_token)

    assert result.is_err()
    assert result.error.code == "USER_INACTIVE"
    mock_uow.sessions.find_by_user_and_refresh_hash.assert_not_called()


@pytest.mark.asyncio
async def test_expired_refresh_token_rejected(mock_uow, codec, settings):
    issued = utcnow() - settings.refresh_token_ttl - timedelta(minutes=1)
    _, refresh = codec.encode_pair(str(uuid4()), "user@example.com", "user", "s", issued)

    result = await RefreshTokenUseCase(mock_uow, codec, settings).execute(refresh.token)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_store_failure_propagates(mock_uow, codec, settings):
    """Callers must be able to tell 'retry' from 're-login'"""
    user, _, _, refresh_token = _login(codec)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.find_by_user_and_refresh_hash.side_effect = PersistenceError("down")

    with pytest.raises(PersistenceError):
        await RefreshTokenUseCase(mock_uow, codec, settings).execute(refresh_token)
