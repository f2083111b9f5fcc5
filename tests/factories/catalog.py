"""Factories for Category and Product models."""

import factory

from storefront.db.models import Category, Product
from storefront.utils import create_slug

from .base import AsyncSQLAlchemyFactory


class CategoryFactory(AsyncSQLAlchemyFactory):
    """Factory for creating Category instances.

    The slug follows the name unless given explicitly.
    """

    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    slug = factory.LazyAttribute(lambda o: create_slug(o.name))
    description = factory.Faker("sentence")
    image = None


class ProductFactory(AsyncSQLAlchemyFactory):
    """Factory for creating Product instances.

    Pass ``category=`` to attach to an existing category; otherwise a new
    one is built and persisted with the product.

    Example:
        product = await ProductFactory.async_create(session, category=tees, price=12)
        hidden = await ProductFactory.async_create(session, category=tees, inactive=True)
    """

    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    slug = factory.LazyAttribute(lambda o: create_slug(o.name))
    description = factory.Faker("sentence")
    price = 19.99
    compare_at_price = None
    images = factory.LazyFunction(list)
    inventory = 10
    sku = factory.Sequence(lambda n: f"SKU-{n:04d}")
    weight = None
    dimensions = None
    is_active = True
    is_featured = False
    category = factory.SubFactory(CategoryFactory)

    class Params:
        inactive = factory.Trait(is_active=False)
        featured = factory.Trait(is_featured=True)
