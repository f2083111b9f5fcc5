"""Order models.

Orders are written by the external checkout provider; the admin API only
reads them.
"""

import enum
from typing import TYPE_CHECKING, Any, List, Optional
from uuid import UUID

from sqlalchemy import JSON, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, generate_repr

if TYPE_CHECKING:
    from .user import User


class OrderStatus(str, enum.Enum):
    """Fulfilment states of an order."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Order(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A customer order.

    Attributes:
        id: UUID primary key
        order_number: Human-facing unique number (e.g. ORD-123456-AB12)
        status: Fulfilment status
        total: Grand total charged
        subtotal: Sum of line items
        tax: Tax charged (optional)
        shipping: Shipping charged (optional)
        customer_email: Email given at checkout
        customer_name: Name given at checkout (optional)
        customer_id: Registered user, if the customer was signed in
        shipping_address: Address mapping (optional)
        billing_address: Address mapping (optional)
        checkout_token: Reference issued by the checkout provider
        items: Order lines
    """

    __tablename__ = "orders"

    order_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status"),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    total: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    subtotal: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    tax: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    shipping: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    shipping_address: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    billing_address: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    checkout_token: Mapped[str | None] = mapped_column(String(255), nullable=True)

    customer: Mapped[Optional["User"]] = relationship(
        "User",
        back_populates="orders",
        lazy="raise",
    )
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return generate_repr(self, "id", "order_number", "status")


class OrderItem(Base, UUIDPrimaryKeyMixin):
    """A single order line.

    The product name and unit price are snapshotted so the line survives
    the product being deleted (product_id is then set to NULL).
    """

    __tablename__ = "order_items"

    order_id: Mapped[UUID] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")

    def __repr__(self) -> str:
        return generate_repr(self, "id", "product_name", "quantity")
