"""Services behind the API routes."""

from storefront.api.services.catalog import CatalogQueryEngine, PaginatedResult, ProductFilters
from storefront.api.services.theme import (
    DEFAULT_THEME,
    ThemeSettings,
    merge_with_defaults,
    render_theme_css,
    write_stylesheet,
)
from storefront.api.services.uploads import ImageStorage, StoredImage

__all__ = [
    "CatalogQueryEngine",
    "DEFAULT_THEME",
    "ImageStorage",
    "PaginatedResult",
    "ProductFilters",
    "StoredImage",
    "ThemeSettings",
    "merge_with_defaults",
    "render_theme_css",
    "write_stylesheet",
]
