"""Product model."""

from typing import TYPE_CHECKING, List
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, generate_repr

if TYPE_CHECKING:
    from .category import Category


class Product(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A sellable product.

    Attributes:
        id: UUID primary key
        name: Display name
        slug: Unique URL slug, regenerated whenever the name changes
        description: Optional long description
        price: Selling price, never negative
        compare_at_price: Optional "was" price; a discount shows only when higher than price
        images: Ordered list of image URLs
        inventory: Units in stock, never negative
        sku: Optional stock keeping unit
        weight: Optional shipping weight
        dimensions: Optional free-form dimensions string
        is_active: Visible on the public storefront
        is_featured: Flagged for promotional placement
        category_id: Owning category (required)
        category: Owning category, loaded with every product
    """

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    slug: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False,
    )
    compare_at_price: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=True,
    )
    images: Mapped[List[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    inventory: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    sku: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    weight: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
    )
    dimensions: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("inventory >= 0", name="ck_products_inventory_non_negative"),
        Index("ix_products_active_featured", "is_active", "is_featured"),
    )

    def __repr__(self) -> str:
        return generate_repr(self, "id", "slug", "price")
