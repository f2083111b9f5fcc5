"""Admin API routes for orders (read-only) and dashboard stats."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import AuthenticatedUser, require_admin
from storefront.api.models import ErrorResponse, OrderResponse, StatsResponse
from storefront.db.repositories import OrderRepository
from storefront.db.session import get_db

router = APIRouter(prefix="/admin", tags=["admin", "orders"])

DEFAULT_ORDER_LIMIT = 10
MAX_ORDER_LIMIT = 100


@router.get("/orders", response_model=List[OrderResponse])
async def list_orders(
    limit: int = Query(DEFAULT_ORDER_LIMIT, description="Number of orders (1-100)"),
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> List[OrderResponse]:
    """Most recent orders first."""
    limit = max(1, min(limit, MAX_ORDER_LIMIT))
    orders = await OrderRepository(db).list_recent(limit)
    return [OrderResponse.model_validate(order) for order in orders]


@router.get("/orders/{order_id}", response_model=OrderResponse, responses={404: {"model": ErrorResponse}})
async def get_order(
    order_id: UUID,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> OrderResponse:
    order = await OrderRepository(db).get_by_id(order_id)
    return OrderResponse.model_validate(order)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> StatsResponse:
    """Product and order totals plus orders from the last seven days."""
    stats = await OrderRepository(db).stats()
    return StatsResponse.model_validate(stats)
