"""FastAPI application for the Storefront API.

Run with::

    storefront serve
    # or
    uvicorn storefront.api.app:create_app --factory
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from starlette.middleware.base import BaseHTTPMiddleware

from storefront import __version__
from storefront.api.auth import get_settings
from storefront.api.helpers.errors import register_exception_handlers
from storefront.api.routes import admin_routers, public_routers
from storefront.config import StorefrontConfig, get_config
from storefront.db.session import close_db, create_engine_from_config, create_session_factory
from storefront.logging_config import clear_context, get_logger, set_context

logger = get_logger(__name__)

HEALTH_PATHS = ("/health", "GET /health")


def _traces_sampler(sampling_context: dict[str, Any]) -> float:
    """Skip health checks; sample everything else at 10%."""
    transaction_name = sampling_context.get("transaction_context", {}).get("name", "")
    if transaction_name in HEALTH_PATHS:
        return 0.0
    return 0.1


def _init_sentry(config: StorefrontConfig) -> None:
    """Initialize Sentry when a DSN is configured."""
    if not config.server.sentry_dsn:
        logger.info("SENTRY_DSN not configured, Sentry error tracking disabled")
        return

    sentry_sdk.init(
        dsn=config.server.sentry_dsn,
        environment=config.server.environment,
        release=__version__,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        send_default_pii=False,
        traces_sampler=_traces_sampler,
    )
    logger.info("Sentry SDK initialized", extra={"environment": config.server.environment})


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Tag every request, its log lines and its response with a correlation ID."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())

        set_context(correlation_id=correlation_id)
        sentry_sdk.set_tag("correlation_id", correlation_id)

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Storefront API", extra={"version": __version__})
    yield
    await close_db(app.state.db_engine)
    logger.info("Shutting down Storefront API")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Admin login and session introspection."},
    {"name": "products", "description": "Public product browsing with filters and pagination."},
    {"name": "categories", "description": "Public category listing with product counts."},
    {"name": "admin", "description": "Admin-only management endpoints (ADMIN bearer token)."},
    {"name": "health", "description": "Liveness probe."},
]


def create_app(config: Optional[StorefrontConfig] = None) -> FastAPI:
    """Build the application.

    Args:
        config: Configuration to serve with; the process-wide config when omitted
    """
    config = config or get_config()
    _init_sentry(config)

    app = FastAPI(
        title="Storefront API",
        description="Storefront catalog and admin backend.",
        version=__version__,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.db_engine = create_engine_from_config(config.database)
    app.state.session_factory = create_session_factory(app.state.db_engine)
    app.dependency_overrides[get_settings] = lambda: config

    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, expose_internal_errors=not config.server.is_production)

    for router in (*public_routers, *admin_routers):
        app.include_router(router)

    app.mount(
        config.uploads.url_prefix,
        StaticFiles(directory=config.uploads.directory, check_dir=False),
        name="uploads",
    )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app
