from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.rendering import TemplateCache
from ..application.services.profile_service import ProfileService
from ..domain.ports.persistence import UserRepository
from ..infrastructure.persistence.memory import InMemoryUserStore
from ..infrastructure.persistence.sqlite import SQLiteUserStore
from ..presentation.api.routers import pages as pages_router
from ..presentation.api.routers import profiles as profiles_router
from ..presentation.security.basic_auth import BasicAuthGate
from ..presentation.security.rate_limit import FixedWindowRateLimiter, RateLimitMiddleware

logger = logging.getLogger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    repository: Optional[UserRepository] = None,
) -> FastAPI:
    settings = settings or Settings()
    container = build_container(settings, repository)

    app = FastAPI(title="User Profiles", lifespan=_create_lifespan(container))
    app.state.container = container  # type: ignore[attr-defined]

    app.add_middleware(RateLimitMiddleware, limiter=container.global_limiter)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(pages_router.router)
    app.include_router(profiles_router.router)

    @app.get("/healthz")
    async def healthz() -> Dict[str, Any]:
        return {"ok": True}

    return app


def build_container(
    settings: Settings,
    repository: Optional[UserRepository] = None,
) -> ApplicationContainer:
    if repository is None:
        repository = _create_repository(settings)
    templates = TemplateCache(settings.views_dir)
    window = settings.rate_limit_window_seconds
    return ApplicationContainer(
        settings=settings,
        repository=repository,
        templates=templates,
        profile_service=ProfileService(repository),
        global_limiter=FixedWindowRateLimiter(settings.rate_limit_max, window),
        write_limiter=FixedWindowRateLimiter(settings.write_rate_limit_max, window),
        access_gate=BasicAuthGate(settings.basic_auth_user, settings.basic_auth_pass),
    )


def _create_repository(settings: Settings) -> UserRepository:
    if settings.store_backend == "memory":
        return InMemoryUserStore()
    return SQLiteUserStore(settings.database_path)


def _create_lifespan(container: ApplicationContainer):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(container.settings.log_level)
        settings = container.settings
        logger.info(
            "Serving profiles with %s store, update auth %s",
            settings.store_backend,
            "enabled" if container.access_gate.enabled else "disabled",
        )
        try:
            yield
        finally:
            container.repository.close()

    return lifespan


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    return PlainTextResponse("Invalid request", status_code=status.HTTP_400_BAD_REQUEST)
