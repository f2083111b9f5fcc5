"""User model backing admin authentication.

Passwords are stored as bcrypt hashes only. The role column is the single
source of truth for authorization checks.
"""

import enum
from typing import TYPE_CHECKING, List

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, generate_repr

if TYPE_CHECKING:
    from .order import Order


class UserRole(str, enum.Enum):
    """Roles a user can hold. Values are the canonical spelling everywhere."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A registered user.

    Attributes:
        id: UUID primary key
        email: Login email, unique, stored lower-cased
        name: Display name (optional)
        password_hash: bcrypt hash of the password
        role: USER or ADMIN
        orders: Orders placed while signed in
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        default=UserRole.USER,
        nullable=False,
    )

    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="customer",
        lazy="raise",
        passive_deletes=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return generate_repr(self, "id", "email", "role")
