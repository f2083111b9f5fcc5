"""Global pytest configuration and fixtures.

Database tests run against in-memory SQLite (aiosqlite) with foreign keys
enforced. Route tests drive the real application through httpx, with the
database and configuration dependencies overridden.
"""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from storefront.api.app import create_app  # noqa: E402
from storefront.api.auth import TokenService  # noqa: E402
from storefront.config import (  # noqa: E402
    AuthConfig,
    DatabaseConfig,
    StorefrontConfig,
    ThemeConfig,
    UploadConfig,
)
from storefront.db.models import Base, User  # noqa: E402
from storefront.db.session import get_db  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP routes)")


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def storefront_config(tmp_path: Path) -> StorefrontConfig:
    """Configuration pointing all file output at a temporary directory."""
    return StorefrontConfig(
        database=DatabaseConfig(url=TEST_DATABASE_URL),
        auth=AuthConfig(jwt_secret=TEST_JWT_SECRET, bcrypt_rounds=4),
        uploads=UploadConfig(directory=str(tmp_path / "uploads")),
        theme=ThemeConfig(css_path=str(tmp_path / "public" / "theme.css")),
    )


@pytest.fixture
def token_service(storefront_config: StorefrontConfig) -> TokenService:
    return TokenService.from_config(storefront_config.auth)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
async def async_engine():
    """Create async SQLite engine with the full schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging test data and asserting on it."""
    async with session_factory() as session:
        yield session


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def app(storefront_config: StorefrontConfig, session_factory):
    """Application with each request getting its own session on the test engine."""
    application = create_app(storefront_config)

    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = _get_test_db
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


# =============================================================================
# Users
# =============================================================================


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Committed admin whose password is tests.factories.DEFAULT_PASSWORD."""
    from tests.factories import UserFactory

    user = await UserFactory.async_create(db_session, email="admin@example.com", admin=True)
    await db_session.commit()
    return user


@pytest.fixture
async def customer_user(db_session: AsyncSession) -> User:
    from tests.factories import UserFactory

    user = await UserFactory.async_create(db_session, email="customer@example.com")
    await db_session.commit()
    return user


@pytest.fixture
def admin_headers(admin_user: User, token_service: TokenService) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.issue(admin_user.id)}"}


@pytest.fixture
def customer_headers(customer_user: User, token_service: TokenService) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.issue(customer_user.id)}"}
