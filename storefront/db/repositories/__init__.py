"""Repositories wrapping an AsyncSession, one per aggregate."""

from .categories import CategoryRepository
from .orders import DashboardStats, OrderRepository
from .products import ProductRepository
from .settings import SettingsRepository
from .users import UserRepository

__all__ = [
    "CategoryRepository",
    "DashboardStats",
    "OrderRepository",
    "ProductRepository",
    "SettingsRepository",
    "UserRepository",
]
