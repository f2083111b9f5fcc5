"""SQLAlchemy ORM models for Storefront.

- User: admin and customer accounts
- Category: product categories
- Product: catalog entries
- Order / OrderItem: orders written by the checkout provider
- Setting: key/value settings (theme appearance)

Usage:
    from storefront.db.models import Category, Product

    category = Category(name="Hoodies", slug="hoodies")
"""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .category import Category
from .order import Order, OrderItem, OrderStatus
from .product import Product
from .setting import Setting
from .user import User, UserRole

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    # Models
    "User",
    "Category",
    "Product",
    "Order",
    "OrderItem",
    "Setting",
    # Enums
    "UserRole",
    "OrderStatus",
]
