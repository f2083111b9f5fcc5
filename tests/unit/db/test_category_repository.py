"""Unit tests for CategoryRepository."""

from uuid import uuid4

import pytest

from storefront.db.repositories import CategoryRepository
from storefront.errors import ConflictError, NotFoundError, ValidationError
from tests.factories import CategoryFactory, ProductFactory


@pytest.fixture
def repo(db_session):
    return CategoryRepository(db_session)


class TestCreate:
    async def test_slug_from_name(self, repo):
        category = await repo.create("Winter Hoodies")

        assert category.slug == "winter-hoodies"
        assert category.description is None

    async def test_explicit_slug_is_slugified(self, repo):
        category = await repo.create("Hats", slug="Caps & Hats")

        assert category.slug == "caps-hats"

    async def test_duplicate_slug(self, repo):
        await repo.create("Shoes")

        with pytest.raises(ConflictError):
            await repo.create("shoes!")

    async def test_blank_name(self, repo):
        with pytest.raises(ValidationError):
            await repo.create("   ")


class TestListWithCounts:
    async def test_counts_and_order(self, db_session, repo):
        shoes = await CategoryFactory.async_create(db_session, name="Shoes")
        bags = await CategoryFactory.async_create(db_session, name="Bags")
        await CategoryFactory.async_create(db_session, name="Empty")
        await ProductFactory.async_create(db_session, category=shoes)
        await ProductFactory.async_create(db_session, category=shoes, inactive=True)
        await ProductFactory.async_create(db_session, category=bags, inactive=True)

        all_counts = [(c.name, n) for c, n in await repo.list_with_counts()]
        active_counts = [(c.name, n) for c, n in await repo.list_with_counts(active_only=True)]

        assert all_counts == [("Bags", 1), ("Empty", 0), ("Shoes", 2)]
        assert active_counts == [("Bags", 0), ("Empty", 0), ("Shoes", 1)]


class TestUpdate:
    async def test_rename_regenerates_slug(self, db_session, repo):
        category = await CategoryFactory.async_create(db_session, name="Tees")

        updated = await repo.update(category.id, {"name": "T-Shirts"})

        assert updated.slug == "t-shirts"

    async def test_explicit_slug_wins_over_rename(self, db_session, repo):
        category = await CategoryFactory.async_create(db_session, name="Tees")

        updated = await repo.update(category.id, {"name": "T-Shirts", "slug": "tops"})

        assert updated.name == "T-Shirts"
        assert updated.slug == "tops"

    async def test_slug_conflict(self, db_session, repo):
        await CategoryFactory.async_create(db_session, name="Taken")
        category = await CategoryFactory.async_create(db_session, name="Mine")

        with pytest.raises(ConflictError):
            await repo.update(category.id, {"slug": "taken"})

    async def test_empty_name(self, db_session, repo):
        category = await CategoryFactory.async_create(db_session)

        with pytest.raises(ValidationError):
            await repo.update(category.id, {"name": ""})

    async def test_description_only(self, db_session, repo):
        category = await CategoryFactory.async_create(db_session, name="Socks")

        updated = await repo.update(category.id, {"description": "Warm feet"})

        assert updated.description == "Warm feet"
        assert updated.slug == "socks"

    async def test_missing(self, repo):
        with pytest.raises(NotFoundError):
            await repo.update(uuid4(), {"name": "x"})


class TestDelete:
    async def test_empty_category_is_deleted(self, db_session, repo):
        category = await CategoryFactory.async_create(db_session)

        await repo.delete(category.id)

        with pytest.raises(NotFoundError):
            await repo.get_by_id(category.id)

    async def test_category_with_products_is_kept(self, db_session, repo):
        category = await CategoryFactory.async_create(db_session)
        await ProductFactory.async_create(db_session, category=category, inactive=True)

        with pytest.raises(ConflictError, match="1 product"):
            await repo.delete(category.id)

        assert (await repo.get_by_id(category.id)).id == category.id

    async def test_missing(self, repo):
        with pytest.raises(NotFoundError):
            await repo.delete(uuid4())
