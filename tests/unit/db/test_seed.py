"""Tests for development seed data."""

from storefront.api.auth.passwords import verify_password
from storefront.db.models import UserRole
from storefront.db.repositories import CategoryRepository, ProductRepository, UserRepository
from storefront.db.seed import SEED_CATEGORIES, SEED_PRODUCTS, seed_database


async def test_seed_creates_admin_categories_and_products(db_session):
    result = await seed_database(db_session, admin_email="owner@example.com", admin_password="pw-123", bcrypt_rounds=4)

    assert result.admin_created
    assert result.categories_created == ["t-shirts", "hoodies", "accessories", "shoes"]
    assert len(result.products_created) == len(SEED_PRODUCTS)

    admin = await UserRepository(db_session).get_by_email("owner@example.com")
    assert admin.role == UserRole.ADMIN
    assert verify_password("pw-123", admin.password_hash)

    tee = await ProductRepository(db_session).get_by_slug("classic-white-t-shirt")
    assert tee.category.slug == "t-shirts"
    assert tee.compare_at_price == 39.99
    assert tee.is_featured


async def test_seed_is_idempotent(db_session):
    await seed_database(db_session, bcrypt_rounds=4)
    await db_session.commit()

    again = await seed_database(db_session, bcrypt_rounds=4)

    assert not again.admin_created
    assert again.categories_created == []
    assert again.products_created == []
    assert len(await CategoryRepository(db_session).list_with_counts()) == len(SEED_CATEGORIES)


async def test_seed_keeps_existing_admin_password(db_session):
    await seed_database(db_session, admin_password="first-pw", bcrypt_rounds=4)

    await seed_database(db_session, admin_password="second-pw", bcrypt_rounds=4)

    admin = await UserRepository(db_session).get_by_email("admin@example.com")
    assert verify_password("first-pw", admin.password_hash)
