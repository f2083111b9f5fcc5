"""Read-only order queries for the admin dashboard."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Order, Product
from storefront.db.models.base import utcnow
from storefront.errors import NotFoundError

RECENT_ORDER_WINDOW = timedelta(days=7)


@dataclass
class DashboardStats:
    total_products: int
    total_orders: int
    total_revenue: float
    recent_orders: int


class OrderRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_recent(self, limit: int = 10) -> list[Order]:
        """Most recent orders first, with their items."""
        result = await self.session.execute(
            select(Order).order_by(Order.created_at.desc(), Order.id).limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_id(self, order_id: UUID) -> Order:
        order = await self.session.get(Order, order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    async def stats(self, now: datetime | None = None) -> DashboardStats:
        """Counts and revenue for the dashboard.

        recent_orders counts orders created in the last seven days.
        """
        since = (now or utcnow()) - RECENT_ORDER_WINDOW

        total_products = await self.session.scalar(select(func.count(Product.id)))
        total_orders = await self.session.scalar(select(func.count(Order.id)))
        total_revenue = await self.session.scalar(select(func.coalesce(func.sum(Order.total), 0)))
        recent_orders = await self.session.scalar(
            select(func.count(Order.id)).where(Order.created_at >= since)
        )

        return DashboardStats(
            total_products=total_products or 0,
            total_orders=total_orders or 0,
            total_revenue=round(float(total_revenue or 0), 2),
            recent_orders=recent_orders or 0,
        )
