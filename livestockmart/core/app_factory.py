from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.auth_service import AuthService
from ..application.services.livestock_service import LivestockService
from ..application.services.order_service import OrderService
from ..application.services.user_state_service import UserStateService
from ..domain.errors import LivestockMartError, StoreError
from ..infrastructure.persistence.sqlite import SQLitePersistence
from ..infrastructure.security.passwords import BcryptPasswordHasher
from ..infrastructure.security.tokens import JwtTokenSigner
from ..presentation.api.routers import auth as auth_router
from ..presentation.api.routers import livestock as livestock_router
from ..presentation.api.routers import orders as orders_router
from ..presentation.api.routers import user_state as user_state_router

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="LivestockMart API", lifespan=_create_lifespan(settings))
    app.state.settings = settings  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router.router)
    app.include_router(user_state_router.router)
    app.include_router(livestock_router.router)
    app.include_router(orders_router.router)
    _register_exception_handlers(app)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        persistence = SQLitePersistence(settings.database_path)
        auth_service = AuthService(
            users=persistence,
            password_hasher=BcryptPasswordHasher(rounds=settings.password_hash_rounds),
            token_signer=JwtTokenSigner(settings.jwt_secret),
        )
        container = ApplicationContainer(
            settings=settings,
            persistence=persistence,
            auth_service=auth_service,
            user_state_service=UserStateService(persistence, persistence, persistence),
            livestock_service=LivestockService(persistence),
            order_service=OrderService(persistence),
        )

        app.state.container = container  # type: ignore[attr-defined]
        logger.info("LivestockMart API started with database %s", settings.database_path)

        try:
            yield
        finally:
            persistence.close()
            logger.info("LivestockMart API stopped")

    return lifespan


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LivestockMartError)
    async def handle_domain_error(request: Request, exc: LivestockMartError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request %s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": StoreError.default_message},
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request"},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": StoreError.default_message},
        )
