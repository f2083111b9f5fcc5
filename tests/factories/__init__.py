"""Factory Boy factories for Storefront database models.

Usage:
    from tests.factories import CategoryFactory, ProductFactory

    # Build without a database
    product = ProductFactory.build()

    # Persist (flush) in an async test
    category = await CategoryFactory.async_create(session, name="T-Shirts")
    product = await ProductFactory.async_create(session, category=category)
"""

from .catalog import CategoryFactory, ProductFactory
from .order import OrderFactory, OrderItemFactory
from .user import DEFAULT_PASSWORD, UserFactory

__all__ = [
    "CategoryFactory",
    "DEFAULT_PASSWORD",
    "OrderFactory",
    "OrderItemFactory",
    "ProductFactory",
    "UserFactory",
]
