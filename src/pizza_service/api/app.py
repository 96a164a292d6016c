"""
pizza_service.api.app

FastAPI app factory for the pizza service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Own process-scoped state (settings, auth counters) on `app.state`.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pizza_service.api.errors import register_error_handlers
from pizza_service.api.routers.auth import router as auth_router
from pizza_service.api.routers.franchises import router as franchises_router
from pizza_service.api.routers.health import router as health_router
from pizza_service.api.routers.metrics import router as metrics_router
from pizza_service.api.routers.users import router as users_router
from pizza_service.db.init_db import init_db, seed_admin
from pizza_service.db.session import create_engine, create_sessionmaker
from pizza_service.observability.logging import configure_logging, get_logger
from pizza_service.observability.metrics import AuthMetrics
from pizza_service.observability.middleware import RequestContextMiddleware
from pizza_service.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Create the async DB engine and session factory once and stash them on app.state.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically. Prod should use Alembic migrations.
            await init_db(engine)
        await seed_admin(app.state.sessionmaker, settings)
        try:
            yield
        finally:
            # Dispose the engine to close pools/FDs gracefully.
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Pizza Service",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth_metrics = AuthMetrics()

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(franchises_router)
    app.include_router(metrics_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; auth logic stays
# in the auth package and services.
