"""Admin API routes for category management."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import AuthenticatedUser, require_admin
from storefront.api.models import CategoryCreate, CategoryResponse, CategoryUpdate, ErrorResponse
from storefront.api.routes.categories import to_category_response
from storefront.db.repositories import CategoryRepository
from storefront.db.session import get_db
from storefront.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/categories", tags=["admin", "categories"])


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> List[CategoryResponse]:
    """All categories by name, each with its total number of products."""
    rows = await CategoryRepository(db).list_with_counts(active_only=False)
    return [to_category_response(category, count) for category, count in rows]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Slug already in use"}},
)
async def create_category(
    request: CategoryCreate,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    category = await CategoryRepository(db).create(**request.model_dump())
    await db.commit()

    logger.info(f"Admin {admin.id} created category {category.slug}")
    return to_category_response(category, 0)


@router.get("/{category_id}", response_model=CategoryResponse, responses={404: {"model": ErrorResponse}})
async def get_category(
    category_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    repo = CategoryRepository(db)
    category = await repo.get_by_id(category_id)
    return to_category_response(category, await repo.count_products(category.id))


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Slug already in use"},
    },
)
async def update_category(
    category_id: UUID,
    request: CategoryUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    """Update the fields present in the request.

    Renaming regenerates the slug unless a slug is sent explicitly.
    """
    repo = CategoryRepository(db)
    category = await repo.update(category_id, request.model_dump(exclude_unset=True))
    product_count = await repo.count_products(category.id)
    await db.commit()

    logger.info(f"Admin {admin.id} updated category {category.slug}")
    return to_category_response(category, product_count)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Category still has products"},
    },
)
async def delete_category(
    category_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await CategoryRepository(db).delete(category_id)
    await db.commit()

    logger.info(f"Admin {admin.id} deleted category {category_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
