"""Public product browsing."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.models import ErrorResponse, PaginatedProducts, ProductResponse
from storefront.api.services.catalog import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    CatalogQueryEngine,
    PaginatedResult,
    ProductFilters,
)
from storefront.db.models import Product
from storefront.db.repositories import ProductRepository
from storefront.db.session import get_db

router = APIRouter(prefix="/products", tags=["products"])


def listing_filters(
    category: Optional[str] = Query(None, description="Category slug"),
    min_price: Optional[float] = Query(None, alias="minPrice", description="Inclusive lower price bound"),
    max_price: Optional[float] = Query(None, alias="maxPrice", description="Inclusive upper price bound"),
    search: Optional[str] = Query(None, description="Case-insensitive match on name or description"),
    featured: Optional[str] = Query(None, description="'true' to list featured products only"),
    page: int = Query(DEFAULT_PAGE, description="Page number (values below 1 become 1)"),
    limit: int = Query(DEFAULT_LIMIT, description="Items per page (capped at 100)"),
    sort_by: str = Query(DEFAULT_SORT_BY, alias="sortBy", description="name, price or createdAt"),
    sort_order: str = Query(DEFAULT_SORT_ORDER, alias="sortOrder", description="asc or desc"),
) -> ProductFilters:
    return ProductFilters(
        category=category,
        min_price=min_price,
        max_price=max_price,
        search=search,
        featured=featured,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def to_paginated_response(result: PaginatedResult[Product]) -> PaginatedProducts:
    return PaginatedProducts(
        data=[ProductResponse.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("", response_model=PaginatedProducts)
async def list_products(
    filters: ProductFilters = Depends(listing_filters),
    db: AsyncSession = Depends(get_db),
) -> PaginatedProducts:
    """List active products with filtering, sorting and pagination."""
    result = await CatalogQueryEngine(db).search(filters, active_only=True)
    return to_paginated_response(result)


@router.get(
    "/{slug}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(slug: str, db: AsyncSession = Depends(get_db)) -> ProductResponse:
    """An active product by slug; inactive products are reported as missing."""
    product = await ProductRepository(db).get_by_slug(slug, active_only=True)
    return ProductResponse.model_validate(product)
