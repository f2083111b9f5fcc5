"""Category repository.

Owns the category integrity rules: slugs are unique, and a category that
still owns products cannot be deleted.
"""

from typing import Any, Mapping
from uuid import UUID

from sqlalchemy import Integer, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Category, Product
from storefront.errors import ConflictError, NotFoundError, ValidationError
from storefront.logging_config import get_logger
from storefront.utils import create_slug

logger = get_logger(__name__)

# Fields an update may touch; anything else in the payload is ignored.
UPDATABLE_FIELDS = frozenset({"name", "slug", "description", "image"})


def _slug_for(name: str, explicit_slug: str | None = None) -> str:
    slug = create_slug(explicit_slug if explicit_slug else name)
    if not slug:
        raise ValidationError("Name must contain at least one letter or digit")
    return slug


class CategoryRepository:
    """CRUD operations on categories."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_with_counts(self, active_only: bool = False) -> list[tuple[Category, int]]:
        """All categories ordered by name with their product counts.

        Args:
            active_only: Count only active products (public storefront)
        """
        if active_only:
            count_expr = func.coalesce(func.sum(Product.is_active.cast(Integer)), 0)
        else:
            count_expr = func.count(Product.id)

        query = (
            select(Category, count_expr.label("product_count"))
            .outerjoin(Product, Product.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name.asc())
        )
        result = await self.session.execute(query)
        return [(category, int(count or 0)) for category, count in result.all()]

    async def get_by_id(self, category_id: UUID) -> Category:
        """Raises NotFoundError if the category does not exist."""
        category = await self.session.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def get_by_slug(self, slug: str) -> Category | None:
        result = await self.session.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def count_products(self, category_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(Product.id)).where(Product.category_id == category_id)
        )
        return result.scalar() or 0

    async def _ensure_slug_available(self, slug: str, exclude_id: UUID | None = None) -> None:
        existing = await self.get_by_slug(slug)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"A category with slug '{slug}' already exists")

    async def create(
        self,
        name: str,
        slug: str | None = None,
        description: str | None = None,
        image: str | None = None,
    ) -> Category:
        """Create a category, deriving its slug from the name unless given.

        Raises:
            ValidationError: If no usable slug can be derived
            ConflictError: If the slug is taken
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name is required")

        final_slug = _slug_for(name, slug)
        await self._ensure_slug_available(final_slug)

        category = Category(
            name=name,
            slug=final_slug,
            description=description or None,
            image=image or None,
        )
        self.session.add(category)
        await self.session.flush()

        logger.info("Created category", extra={"category_id": str(category.id), "slug": final_slug})
        return category

    async def update(self, category_id: UUID, changes: Mapping[str, Any]) -> Category:
        """Apply whitelisted changes.

        Renaming regenerates the slug unless an explicit slug is supplied.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the name is cleared
            ConflictError: If the new slug is taken
        """
        category = await self.get_by_id(category_id)
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("Category name cannot be empty")
            category.name = name

        new_slug: str | None = None
        if changes.get("slug"):
            new_slug = _slug_for(category.name, changes["slug"])
        elif "name" in changes:
            new_slug = _slug_for(category.name)

        if new_slug and new_slug != category.slug:
            await self._ensure_slug_available(new_slug, exclude_id=category.id)
            category.slug = new_slug

        if "description" in changes:
            category.description = changes["description"] or None
        if "image" in changes:
            category.image = changes["image"] or None

        await self.session.flush()
        logger.info("Updated category", extra={"category_id": str(category.id)})
        return category

    async def delete(self, category_id: UUID) -> None:
        """Delete a category that owns no products.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If any product still references it
        """
        category = await self.get_by_id(category_id)

        product_count = await self.count_products(category.id)
        if product_count > 0:
            raise ConflictError(
                f"Cannot delete category with {product_count} product(s); "
                "move or delete them first"
            )

        await self.session.delete(category)
        await self.session.flush()
        logger.info("Deleted category", extra={"category_id": str(category_id)})
