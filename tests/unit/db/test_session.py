"""Tests for database URL handling."""

import ssl

from storefront.db.session import _parse_database_url


def test_plain_postgres_url_gets_asyncpg_driver():
    url, connect_args = _parse_database_url("postgresql://shop:pw@db:5432/shop")

    assert url == "postgresql+asyncpg://shop:pw@db:5432/shop"
    assert connect_args == {}


def test_sslmode_require_becomes_unverified_context():
    url, connect_args = _parse_database_url("postgresql://shop:pw@db/shop?sslmode=require&application_name=api")

    assert "sslmode" not in url
    assert "application_name=api" in url
    assert isinstance(connect_args["ssl"], ssl.SSLContext)
    assert connect_args["ssl"].verify_mode == ssl.CERT_NONE


def test_sqlite_url_is_untouched():
    url = "sqlite+aiosqlite:////var/lib/shop/shop.db"

    assert _parse_database_url(url) == (url, {})
