"""Async SQLAlchemy engine and per-request sessions.

Each application owns one engine, built by ``create_app`` from the
``StorefrontConfig.database`` it was given. Handlers receive their session
through the ``get_db`` dependency and never reach for a global client.
"""

import ssl
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storefront.config import DatabaseConfig
from storefront.logging_config import get_logger

logger = get_logger(__name__)

# asyncpg rejects libpq's sslmode; these values become an SSL context instead
SSL_MODES = ("require", "verify-ca", "verify-full")


def _parse_database_url(url: str) -> tuple[str, dict]:
    """Adapt a DATABASE_URL for the async drivers.

    ``postgresql://`` gets the asyncpg driver, and an ``sslmode`` query
    parameter is moved into connect_args as an SSL context. Other URLs
    (SQLite in development and tests) pass through unchanged.

    Returns:
        Tuple of (url, connect_args)
    """
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if not url.startswith("postgresql"):
        return url, {}

    parsed = make_url(url)
    sslmode = parsed.query.get("sslmode")
    if isinstance(sslmode, tuple):
        sslmode = sslmode[-1]
    parsed = parsed.difference_update_query(["sslmode"])

    connect_args: dict = {}
    if sslmode in SSL_MODES:
        ssl_context = ssl.create_default_context()
        if sslmode == "require":
            # Encrypt without verifying the certificate
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_context

    return parsed.render_as_string(hide_password=False), connect_args



def create_engine_from_config(config: DatabaseConfig) -> AsyncEngine:
    """Create an async engine for the configured database."""
    url, connect_args = _parse_database_url(config.url)

    kwargs: dict = {"echo": config.echo, "connect_args": connect_args}
    if not url.startswith("sqlite"):
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_pre_ping=True,
        )
    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request.

    Usage:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db)):
            ...

    Sessions come from the factory ``create_app`` stored on ``app.state``.
    The session is committed when the handler returns, rolled back when it
    raises, and closed in both cases.
    """
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def close_db(engine: AsyncEngine) -> None:
    """Dispose of pooled connections at application shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
