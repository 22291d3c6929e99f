"""
db_creator.api.app

FastAPI app factory for the HTTP front end.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Build and dispose the provisioning runtime (history engine, service).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from db_creator import __version__
from db_creator.api.routers.databases import router as databases_router
from db_creator.api.routers.health import router as health_router
from db_creator.bootstrap import build_runtime
from db_creator.errors import ConfigurationError
from db_creator.observability.logging import configure_logging, get_logger
from db_creator.observability.middleware import RequestContextMiddleware
from db_creator.settings import DEV_JWT_SECRET, Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    if settings.env == "prod" and settings.jwt_secret == DEV_JWT_SECRET:
        raise ConfigurationError("DBC_JWT_SECRET must be set when DBC_ENV=prod.")

    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        log_file=settings.log_file,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Routers reach the runtime via dependencies (see `db_creator.api.deps`).
        runtime = build_runtime(settings)
        app.state.runtime = runtime
        try:
            yield
        finally:
            runtime.close()
            log.info("shutdown")

    app = FastAPI(
        title="Database Creator",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Auth dependencies read the JWT settings from here.
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(databases_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; provisioning logic
# stays in services.
