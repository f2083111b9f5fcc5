"""Database package for Storefront.

Subpackages:
    models: SQLAlchemy ORM models
    repositories: Query and persistence logic, one class per aggregate
"""

from .models import (
    Base,
    Category,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    Setting,
    TimestampMixin,
    User,
    UserRole,
    UUIDPrimaryKeyMixin,
)

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
