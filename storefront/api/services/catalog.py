"""Catalog query engine.

Turns a set of listing filters into one page of products plus totals.
The same engine serves the public storefront (active products only) and
the admin product list (everything).
"""

import math
from dataclasses import dataclass, field, replace
from typing import Generic, List, Optional, TypeVar

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Category, Product
from storefront.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12
MAX_LIMIT = 100

SORT_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
    "createdAt": Product.created_at,
}
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"


@dataclass
class ProductFilters:
    """Listing parameters as received from the client.

    Call ``normalized()`` before use: it clamps paging values and replaces
    unknown sort keys with the defaults.
    """

    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None
    featured: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER

    def normalized(self) -> "ProductFilters":
        page = self.page if self.page and self.page > 0 else DEFAULT_PAGE
        if not self.limit or self.limit <= 0:
            limit = DEFAULT_LIMIT
        else:
            limit = min(self.limit, MAX_LIMIT)

        search = self.search.strip() if self.search else None

        return replace(
            self,
            category=self.category or None,
            search=search or None,
            page=page,
            limit=limit,
            sort_by=self.sort_by if self.sort_by in SORT_COLUMNS else DEFAULT_SORT_BY,
            sort_order=self.sort_order if self.sort_order in ("asc", "desc") else DEFAULT_SORT_ORDER,
        )

    @property
    def featured_only(self) -> bool:
        return self.featured == "true"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0


class CatalogQueryEngine:
    """Filter, sort and paginate products."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def build_query(self, filters: ProductFilters, active_only: bool = True) -> Select:
        """Unsorted, unpaginated SELECT matching filters (already normalized)."""
        query = select(Product)

        if active_only:
            query = query.where(Product.is_active.is_(True))

        if filters.category:
            query = query.join(Category, Product.category_id == Category.id).where(
                Category.slug == filters.category
            )

        if filters.min_price is not None:
            query = query.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(Product.price <= filters.max_price)

        if filters.search:
            query = query.where(
                or_(
                    Product.name.icontains(filters.search, autoescape=True),
                    Product.description.icontains(filters.search, autoescape=True),
                )
            )

        if filters.featured_only:
            query = query.where(Product.is_featured.is_(True))

        return query

    async def search(self, filters: ProductFilters, active_only: bool = True) -> PaginatedResult[Product]:
        """Run the listing query.

        Args:
            filters: Raw listing parameters; normalized here
            active_only: Restrict to active products (public storefront)

        Returns:
            One page of products with their categories loaded, plus totals.
            A page past the end has no items but correct totals.
        """
        filters = filters.normalized()
        query = self.build_query(filters, active_only=active_only)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar() or 0

        if filters.offset >= total:
            return PaginatedResult(items=[], total=total, page=filters.page, limit=filters.limit)

        sort_column = SORT_COLUMNS[filters.sort_by]
        if filters.sort_order == "desc":
            query = query.order_by(sort_column.desc(), Product.id.desc())
        else:
            query = query.order_by(sort_column.asc(), Product.id.asc())

        query = query.offset(filters.offset).limit(filters.limit)
        result = await self.session.execute(query)
        products = list(result.scalars().all())

        logger.debug(
            "Catalog query",
            extra={"total": total, "page": filters.page, "limit": filters.limit, "returned": len(products)},
        )
        return PaginatedResult(items=products, total=total, page=filters.page, limit=filters.limit)
