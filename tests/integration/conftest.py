import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.auth_service import AuthService
from src.app.services.token_settings import TokenSettings
from src.domain.entities import User, UserStatus


class IntegrationConfig:
    DB_URI = "sqlite+aiosqlite://"
    API_PREFIX = ""
    CORS_ORIGINS = []
    CORS_ALLOW_CREDENTIALS = True
    JWT_ACCESS_SECRET = "integration-access-secret"
    JWT_REFRESH_SECRET = "integration-refresh-secret"
    JWT_ISSUER = "integration-issuer"
    ACCESS_TOKEN_TTL_MINUTES = 15
    REFRESH_TOKEN_TTL_DAYS = 30
    ROTATION_POLICY = "rotating"
    STORE_TIMEOUT_SECONDS = 5.0
    ACTIVITY_TOUCH_INTERVAL_SECONDS = 0
    SESSION_SWEEP_INTERVAL_SECONDS = 0
    ADMIN_API_KEY = "test-admin-key"


@pytest.fixture
def app_config():
    return IntegrationConfig


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(app_config):
    return TokenSettings.from_config(app_config)


@pytest.fixture
def uow_factory(session_factory):
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
def auth_service(uow_factory, settings):
    return AuthService(uow_factory, settings)


async def _add_user(session_factory, email, status=UserStatus.active):
    user = User(email=email, role="user", status=status)
    async with session_factory() as session:
        session.add(user)
        await session.commit()
    return user


@pytest_asyncio.fixture
async def user(session_factory):
    return await _add_user(session_factory, "user@example.com")


@pytest_asyncio.fixture
async def other_user(session_factory):
    return await _add_user(session_factory, "other@example.com")


@pytest.fixture
def app(app_config, session_factory):
    from src.api.app import create_app

    return create_app(app_config, session_factory=session_factory)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
