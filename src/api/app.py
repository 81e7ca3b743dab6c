import asyncio
import contextlib
import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.session_sweeper import run_session_sweeper
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.auth_service import AuthService
from src.app.services.token_settings import TokenSettings
from src.domain.errors import PersistenceError
from .error import ClientError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_persistence_error(request: Request, exc: PersistenceError):
    error_dict = {"code": "SERVICE_UNAVAILABLE", "message": "Session store unavailable, retry later"}
    logger.error(f"Persistence error: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": error_dict}
    )


def create_app(
    ApplicationConfig, session_factory: Optional[Callable[[], AsyncSession]] = None
) -> FastAPI:
    # Fails with ConfigMissingError before anything can serve traffic
    settings = TokenSettings.from_config(ApplicationConfig)

    if session_factory is None:
        engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
        session_factory = sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    auth_service = AuthService(
        lambda: SqlAlchemyUnitOfWork(session_factory, settings.store_timeout_seconds),
        settings,
    )
    sweep_interval = getattr(ApplicationConfig, "SESSION_SWEEP_INTERVAL_SECONDS", 0)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if sweep_interval and sweep_interval > 0:
            sweeper = asyncio.create_task(
                run_session_sweeper(auth_service, sweep_interval)
            )
        yield
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper

    app = FastAPI(title="Session Auth API", version="0.1.0", lifespan=lifespan)
    app.state.auth_service = auth_service
    app.state.admin_api_key = getattr(ApplicationConfig, "ADMIN_API_KEY", None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check, sessions

    prefix = getattr(ApplicationConfig, "API_PREFIX", "")
    app.include_router(health_check.router, prefix=prefix, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(sessions.router, prefix=prefix, tags=["Sessions"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(PersistenceError, handle_persistence_error)

    return app
