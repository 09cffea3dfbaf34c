"""
Application factory.

Builds the FastAPI app: database, identity services, middleware, routers
and the ``{code, message, details?, correlation_id?}`` error contract.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from shared.api.middleware import CorrelationIdMiddleware
from shared.config import Settings, get_settings
from shared.exceptions import register_exception_handlers
from shared.health import router as health_router
from shared.infrastructure.database import DatabaseSessionFactory
from shared.infrastructure.observability.logger import configure_logging, get_logger
from identity.api.routes import routers
from identity.infrastructure.factories import build_identity_services
from identity.infrastructure.persistence import models  # noqa: F401  (registers tables)

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, **service_overrides) -> FastAPI:
    """
    Args:
        settings: Defaults to ``get_settings()``
        **service_overrides: Passed to ``build_identity_services`` (e.g. ``clock``)
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL, settings.JSON_LOGS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = DatabaseSessionFactory(
            database_url=settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
        )
        if settings.CREATE_TABLES_ON_STARTUP:
            await db.create_tables()

        app.state.db = db
        app.state.services = build_identity_services(settings, db.session_factory, **service_overrides)
        logger.info("Application started", extra={"environment": settings.ENVIRONMENT})
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
        swagger_ui_parameters={"persistAuthorization": True},
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )
    app.add_middleware(CorrelationIdMiddleware)

    # Centralized error handling → {code, message, details?, correlation_id?}
    register_exception_handlers(app)

    for router in routers:
        app.include_router(router, prefix=settings.API_PREFIX)
    app.include_router(health_router)

    # ---- Custom OpenAPI to add Bearer auth ----
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
        schema.setdefault("components", {}).setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        schema["security"] = [{"bearerAuth": []}]
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi

    return app


app = create_app()
