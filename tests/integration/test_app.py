"""Integration tests for application-wide behaviour."""

from dataclasses import replace

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.api.app import create_app
from storefront.config import DatabaseConfig
from storefront.db.models import Base
from storefront.db.session import create_engine_from_config, create_session_factory
from tests.factories import CategoryFactory

pytestmark = pytest.mark.integration


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_correlation_id_is_generated(client):
    response = await client.get("/health")

    assert response.headers["X-Correlation-ID"]


async def test_correlation_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "req-123"})

    assert response.headers["X-Correlation-ID"] == "req-123"


async def test_unknown_route_has_error_shape(client):
    response = await client.get("/nowhere")

    assert response.status_code == 404
    assert set(response.json()) == {"error", "errorCode"}
    assert response.json()["errorCode"] == "ERR_RES_001"


async def test_wrong_method(client):
    response = await client.delete("/health")

    assert response.status_code == 405
    assert response.json()["errorCode"] == "ERR_API_002"


async def test_malformed_json_body(client, admin_headers):
    response = await client.post(
        "/admin/categories",
        headers={**admin_headers, "Content-Type": "application/json"},
        content=b"{not json",
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "ERR_VAL_001"


async def test_cors_preflight(client):
    response = await client.options(
        "/products",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


async def test_serves_from_configured_database(storefront_config, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    database = DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}")

    engine = create_engine_from_config(database)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with create_session_factory(engine)() as session:
        await CategoryFactory.async_create(session, name="Hoodies")
        await session.commit()
    await engine.dispose()

    app = create_app(replace(storefront_config, database=database))
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
            response = await http_client.get("/categories")
    finally:
        await app.state.db_engine.dispose()

    assert response.status_code == 200
    assert [c["slug"] for c in response.json()] == ["hoodies"]
