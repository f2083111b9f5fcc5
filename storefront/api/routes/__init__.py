"""API routes for Storefront."""

from storefront.api.routes.admin import routers as admin_routers
from storefront.api.routes.auth import router as auth_router
from storefront.api.routes.categories import router as categories_router
from storefront.api.routes.products import router as products_router

public_routers = [auth_router, products_router, categories_router]

__all__ = ["admin_routers", "public_routers"]
