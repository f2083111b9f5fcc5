"""Product repository.

Single-row reads and the admin mutations. Listing with filters lives in
``storefront.api.services.catalog``.
"""

from typing import Any, Mapping
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Category, Product
from storefront.errors import ConflictError, NotFoundError, ValidationError
from storefront.logging_config import get_logger
from storefront.utils import create_slug

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({
    "name",
    "description",
    "price",
    "compare_at_price",
    "images",
    "inventory",
    "sku",
    "weight",
    "dimensions",
    "is_active",
    "is_featured",
    "category_id",
})

# Cannot be set to null once the product exists.
REQUIRED_FIELDS = frozenset({
    "name",
    "price",
    "images",
    "inventory",
    "is_active",
    "is_featured",
    "category_id",
})


def product_slug(name: str) -> str:
    slug = create_slug(name)
    if not slug:
        raise ValidationError("Product name must contain at least one letter or digit")
    return slug


class ProductRepository:
    """Create, read, update and delete products."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, product_id: UUID) -> Product:
        """Raises NotFoundError if the product does not exist."""
        product = await self.session.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    async def get_by_slug(self, slug: str, active_only: bool = True) -> Product:
        """Look a product up by slug.

        Inactive products are reported as missing when active_only is set.
        """
        query = select(Product).where(Product.slug == slug)
        if active_only:
            query = query.where(Product.is_active.is_(True))

        result = await self.session.execute(query)
        product = result.scalar_one_or_none()
        if product is None:
            raise NotFoundError("Product not found")
        return product

    async def exists(self, slug: str) -> bool:
        result = await self.session.execute(select(Product.id).where(Product.slug == slug))
        return result.first() is not None

    async def _get_category(self, category_id: UUID) -> Category:
        category = await self.session.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def _ensure_slug_available(self, slug: str, exclude_id: UUID | None = None) -> None:
        query = select(Product.id).where(Product.slug == slug)
        if exclude_id is not None:
            query = query.where(Product.id != exclude_id)
        result = await self.session.execute(query)
        if result.first() is not None:
            raise ConflictError("A product with this name already exists")

    async def create(
        self,
        name: str,
        price: float,
        category_id: UUID,
        description: str | None = None,
        compare_at_price: float | None = None,
        images: list[str] | None = None,
        inventory: int = 0,
        sku: str | None = None,
        weight: float | None = None,
        dimensions: str | None = None,
        is_active: bool = True,
        is_featured: bool = False,
    ) -> Product:
        """Create a product with a slug derived from its name.

        Raises:
            ValidationError: If the name yields an empty slug
            ConflictError: If the slug already exists
            NotFoundError: If the category does not exist
        """
        name = name.strip()
        slug = product_slug(name)
        await self._ensure_slug_available(slug)
        category = await self._get_category(category_id)

        product = Product(
            name=name,
            slug=slug,
            description=description,
            price=price,
            compare_at_price=compare_at_price,
            images=list(images or []),
            inventory=inventory,
            sku=sku,
            weight=weight,
            dimensions=dimensions,
            is_active=is_active,
            is_featured=is_featured,
            category_id=category.id,
        )
        product.category = category
        self.session.add(product)
        await self.session.flush()

        logger.info("Created product", extra={"product_id": str(product.id), "slug": slug})
        return product

    async def update(self, product_id: UUID, changes: Mapping[str, Any]) -> Product:
        """Apply a whitelisted set of field changes.

        Keys outside UPDATABLE_FIELDS are ignored. A name change regenerates
        the slug; a category change re-checks that the category exists.

        Raises:
            NotFoundError: If the product or the new category does not exist
            ValidationError: If a required field is cleared
            ConflictError: If the regenerated slug belongs to another product
        """
        product = await self.get_by_id(product_id)
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

        cleared = sorted(k for k, v in changes.items() if v is None and k in REQUIRED_FIELDS)
        if cleared:
            raise ValidationError(f"Required fields cannot be cleared: {', '.join(cleared)}")

        if "name" in changes:
            name = changes.pop("name").strip()
            slug = product_slug(name)
            if slug != product.slug:
                await self._ensure_slug_available(slug, exclude_id=product.id)
                product.slug = slug
            product.name = name

        if "category_id" in changes:
            category = await self._get_category(changes.pop("category_id"))
            product.category_id = category.id
            product.category = category

        if "images" in changes:
            changes["images"] = list(changes["images"])

        for field_name, value in changes.items():
            setattr(product, field_name, value)

        await self.session.flush()
        logger.info("Updated product", extra={"product_id": str(product.id)})
        return product

    async def delete(self, product_id: UUID) -> None:
        """Delete a product. Raises NotFoundError if it does not exist."""
        product = await self.get_by_id(product_id)
        await self.session.delete(product)
        await self.session.flush()
        logger.info("Deleted product", extra={"product_id": str(product_id)})
