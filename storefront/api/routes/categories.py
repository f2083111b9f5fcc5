"""Public category listing."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.models import CategoryResponse
from storefront.db.models import Category
from storefront.db.repositories import CategoryRepository
from storefront.db.session import get_db

router = APIRouter(prefix="/categories", tags=["categories"])


def to_category_response(category: Category, product_count: int) -> CategoryResponse:
    response = CategoryResponse.model_validate(category)
    response.product_count = product_count
    return response


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)) -> List[CategoryResponse]:
    """All categories by name, each with its number of active products."""
    rows = await CategoryRepository(db).list_with_counts(active_only=True)
    return [to_category_response(category, count) for category, count in rows]
