"""Category model."""

from typing import TYPE_CHECKING, List

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, generate_repr

if TYPE_CHECKING:
    from .product import Product


class Category(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A product category.

    Attributes:
        id: UUID primary key
        name: Display name
        slug: URL-friendly unique identifier derived from the name
        description: Optional long description
        image: Optional image URL
        products: Products in this category (never lazy-loaded; count via query)
    """

    __tablename__ = "categories"

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
    image: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
    )

    products: Mapped[List["Product"]] = relationship(
        "Product",
        back_populates="category",
        lazy="raise",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return generate_repr(self, "id", "slug")
