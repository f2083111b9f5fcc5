"""Admin API routes. All require an ADMIN bearer token."""

from storefront.api.routes.admin.categories import router as categories_router
from storefront.api.routes.admin.orders import router as orders_router
from storefront.api.routes.admin.products import router as products_router
from storefront.api.routes.admin.theme import router as theme_router
from storefront.api.routes.admin.upload import router as upload_router

routers = [
    products_router,
    categories_router,
    theme_router,
    orders_router,
    upload_router,
]

__all__ = ["routers"]
