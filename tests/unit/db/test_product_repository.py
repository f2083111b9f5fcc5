"""Unit tests for ProductRepository."""

from uuid import uuid4

import pytest

from storefront.db.repositories import ProductRepository
from storefront.errors import ConflictError, NotFoundError, ValidationError
from tests.factories import CategoryFactory, ProductFactory


@pytest.fixture
async def category(db_session):
    return await CategoryFactory.async_create(db_session, name="T-Shirts")


@pytest.fixture
def repo(db_session):
    return ProductRepository(db_session)


class TestCreate:
    async def test_slug_is_derived_from_name(self, repo, category):
        product = await repo.create(name="  Classic White T-Shirt ", price=29.99, category_id=category.id)

        assert product.name == "Classic White T-Shirt"
        assert product.slug == "classic-white-t-shirt"
        assert product.is_active is True
        assert product.is_featured is False
        assert product.images == []
        assert product.category.slug == "t-shirts"

    async def test_duplicate_slug_conflicts(self, repo, category):
        await repo.create(name="T Shirts", price=10, category_id=category.id)

        with pytest.raises(ConflictError, match="already exists"):
            await repo.create(name="T-Shirts!!", price=12, category_id=category.id)

    async def test_unknown_category(self, repo, category):
        with pytest.raises(NotFoundError, match="Category not found"):
            await repo.create(name="Orphan", price=10, category_id=uuid4())

    async def test_name_without_slug_characters(self, repo, category):
        with pytest.raises(ValidationError):
            await repo.create(name="!!!", price=10, category_id=category.id)


class TestRead:
    async def test_get_by_slug_hides_inactive_by_default(self, db_session, repo, category):
        hidden = await ProductFactory.async_create(db_session, name="Hidden", category=category, inactive=True)

        with pytest.raises(NotFoundError):
            await repo.get_by_slug("hidden")
        assert (await repo.get_by_slug("hidden", active_only=False)).id == hidden.id

    async def test_get_by_id_missing(self, repo):
        with pytest.raises(NotFoundError, match="Product not found"):
            await repo.get_by_id(uuid4())

    async def test_exists(self, db_session, repo, category):
        await ProductFactory.async_create(db_session, name="Mug", category=category)

        assert await repo.exists("mug")
        assert not await repo.exists("cup")


class TestUpdate:
    async def test_rename_moves_slug(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, name="Old Name", category=category)

        updated = await repo.update(product.id, {"name": "New Name"})

        assert updated.slug == "new-name"
        assert not await repo.exists("old-name")

    async def test_rename_onto_existing_slug_conflicts(self, db_session, repo, category):
        await ProductFactory.async_create(db_session, name="Taken", category=category)
        product = await ProductFactory.async_create(db_session, name="Mine", category=category)

        with pytest.raises(ConflictError):
            await repo.update(product.id, {"name": "taken"})

    async def test_rename_to_same_slug_is_allowed(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, name="Cap", category=category)

        updated = await repo.update(product.id, {"name": "CAP"})

        assert updated.name == "CAP"
        assert updated.slug == "cap"

    async def test_clearing_required_field_fails(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, category=category)

        with pytest.raises(ValidationError, match="price"):
            await repo.update(product.id, {"price": None})

    async def test_optional_fields_can_be_cleared(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, category=category, compare_at_price=50, sku="X-1")

        updated = await repo.update(product.id, {"compare_at_price": None, "sku": None})

        assert updated.compare_at_price is None
        assert updated.sku is None

    async def test_unknown_fields_are_ignored(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, category=category)
        original_slug = product.slug

        updated = await repo.update(product.id, {"slug": "hijacked", "id": uuid4(), "inventory": 3})

        assert updated.slug == original_slug
        assert updated.inventory == 3

    async def test_move_to_other_category(self, db_session, repo, category):
        hoodies = await CategoryFactory.async_create(db_session, name="Hoodies")
        product = await ProductFactory.async_create(db_session, category=category)

        updated = await repo.update(product.id, {"category_id": hoodies.id})

        assert updated.category_id == hoodies.id
        assert updated.category.slug == "hoodies"

    async def test_move_to_unknown_category(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, category=category)

        with pytest.raises(NotFoundError):
            await repo.update(product.id, {"category_id": uuid4()})

    async def test_missing_product(self, repo):
        with pytest.raises(NotFoundError):
            await repo.update(uuid4(), {"price": 1})


class TestDelete:
    async def test_delete(self, db_session, repo, category):
        product = await ProductFactory.async_create(db_session, category=category)

        await repo.delete(product.id)

        with pytest.raises(NotFoundError):
            await repo.get_by_id(product.id)

    async def test_delete_missing(self, repo):
        with pytest.raises(NotFoundError):
            await repo.delete(uuid4())
