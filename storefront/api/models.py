"""Pydantic models for Storefront API requests and responses.

All models speak camelCase on the wire (``compareAtPrice``) while the
Python side uses snake_case; either spelling is accepted on input.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from storefront.db.models import OrderStatus, UserRole
from storefront.utils import calculate_discount_percentage


class CamelModel(BaseModel):
    """Base model with camelCase aliases, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(CamelModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable code (ERR_{CATEGORY}_{NUMBER})")


# =============================================================================
# Auth
# =============================================================================


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=1024)


class UserResponse(CamelModel):
    """A user as returned to clients; the password hash never leaves the server."""

    id: UUID
    email: str
    name: Optional[str] = None
    role: UserRole


class LoginResponse(CamelModel):
    token: str = Field(..., description="Bearer token valid for seven days")
    user: UserResponse


# =============================================================================
# Categories
# =============================================================================


class CategorySummary(CamelModel):
    """Category embedded in a product."""

    id: UUID
    name: str
    slug: str


class CategoryResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    image: Optional[str] = None
    product_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Explicit slug; slugified like a name. Derived from name when omitted.",
    )
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=2048)


class CategoryUpdate(CamelModel):
    """Partial category update. Only fields present in the request are applied."""

    name: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=2048)


# =============================================================================
# Products
# =============================================================================


class ProductResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    price: float
    compare_at_price: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    inventory: int
    sku: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[str] = None
    is_active: bool
    is_featured: bool
    category_id: UUID
    category: CategorySummary
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="discountPercentage")  # type: ignore[prop-decorator]
    @property
    def discount_percentage(self) -> int:
        return calculate_discount_percentage(self.compare_at_price, self.price)


class PaginatedProducts(CamelModel):
    data: List[ProductResponse]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    category_id: UUID
    description: Optional[str] = None
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    images: List[str] = Field(default_factory=list)
    inventory: int = Field(default=0, ge=0)
    sku: Optional[str] = Field(default=None, max_length=100)
    weight: Optional[float] = Field(default=None, ge=0)
    dimensions: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = True
    is_featured: bool = False


class ProductUpdate(CamelModel):
    """Partial product update.

    Only fields present in the request are applied; sending null for a
    required field is rejected by the repository.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[UUID] = None
    description: Optional[str] = None
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    images: Optional[List[str]] = None
    inventory: Optional[int] = Field(default=None, ge=0)
    sku: Optional[str] = Field(default=None, max_length=100)
    weight: Optional[float] = Field(default=None, ge=0)
    dimensions: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


# =============================================================================
# Orders & dashboard
# =============================================================================


class OrderItemResponse(CamelModel):
    id: UUID
    product_id: Optional[UUID] = None
    product_name: str
    quantity: int
    price: float


class OrderResponse(CamelModel):
    id: UUID
    order_number: str
    status: OrderStatus
    total: float
    subtotal: float
    tax: Optional[float] = None
    shipping: Optional[float] = None
    customer_email: str
    customer_name: Optional[str] = None
    customer_id: Optional[UUID] = None
    shipping_address: Optional[dict] = None
    billing_address: Optional[dict] = None
    items: List[OrderItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class StatsResponse(CamelModel):
    total_products: int
    total_orders: int
    total_revenue: float
    recent_orders: int = Field(..., description="Orders created in the last 7 days")


# =============================================================================
# Uploads & theme
# =============================================================================


class UploadResponse(CamelModel):
    url: str = Field(..., description="Public URL of the stored image")
    filename: str


class StylesheetResponse(CamelModel):
    message: str
    path: str
