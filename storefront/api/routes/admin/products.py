"""Admin API routes for product management.

Every endpoint requires an admin bearer token. Unlike the public listing,
admin reads include inactive products.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import AuthenticatedUser, require_admin
from storefront.api.models import (
    ErrorResponse,
    PaginatedProducts,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from storefront.api.routes.products import listing_filters, to_paginated_response
from storefront.api.services.catalog import CatalogQueryEngine, ProductFilters
from storefront.db.repositories import ProductRepository
from storefront.db.session import get_db
from storefront.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/products", tags=["admin", "products"])


@router.get("", response_model=PaginatedProducts)
async def list_products(
    filters: ProductFilters = Depends(listing_filters),
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> PaginatedProducts:
    """List all products, active or not, with the public listing's filters."""
    result = await CatalogQueryEngine(db).search(filters, active_only=False)
    return to_paginated_response(result)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Category not found"},
        409: {"model": ErrorResponse, "description": "A product with this slug exists"},
    },
)
async def create_product(
    request: ProductCreate,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    """Create a product. The slug is derived from the name."""
    product = await ProductRepository(db).create(**request.model_dump())
    await db.commit()

    logger.info(
        f"Admin {admin.id} created product {product.slug}",
        extra={"product_id": str(product.id)},
    )
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse, responses={404: {"model": ErrorResponse}})
async def get_product(
    product_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    product = await ProductRepository(db).get_by_id(product_id)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse, "description": "A required field was cleared"},
        404: {"model": ErrorResponse, "description": "Product or category not found"},
        409: {"model": ErrorResponse, "description": "New name collides with another product"},
    },
)
async def update_product(
    product_id: UUID,
    request: ProductUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ProductResponse:
    """Update the fields present in the request.

    Renaming regenerates the slug.
    """
    product = await ProductRepository(db).update(product_id, request.model_dump(exclude_unset=True))
    await db.commit()

    logger.info(f"Admin {admin.id} updated product {product.slug}", extra={"product_id": str(product.id)})
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a product. Past order lines keep their name and price."""
    await ProductRepository(db).delete(product_id)
    await db.commit()

    logger.info(f"Admin {admin.id} deleted product", extra={"product_id": str(product_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
