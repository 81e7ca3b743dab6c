import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.token_codec import TokenCodec
from src.app.services.token_settings import TokenSettings


@pytest.fixture
def settings():
    return TokenSettings(
        access_secret="unit-access-secret",
        refresh_secret="unit-refresh-secret",
        issuer="unit-test-issuer",
    )


@pytest.fixture
def codec(settings):
    return TokenCodec(settings)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.get_by_session_id = AsyncMock()
    uow.sessions.find_by_user_and_access_hash = AsyncMock()
    uow.sessions.find_by_user_and_refresh_hash = AsyncMock()
    uow.sessions.touch_activity = AsyncMock(return_value=True)
    uow.sessions.replace = AsyncMock(return_value=True)
    uow.sessions.revoke = AsyncMock()
    uow.sessions.find_by_identifier = AsyncMock(return_value=[])
    uow.sessions.revoke_all_for_user = AsyncMock()
    uow.sessions.delete_expired = AsyncMock()
    uow.sessions.list_active = AsyncMock(return_value=[])
    return uow
