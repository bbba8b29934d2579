"""
Admin dashboard service
"""

from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from beanstore.models import Product, Order, OrderStatus
from .schemas import AdminStats

class AdminService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stats(self) -> AdminStats:
        """Catalog and order counts plus revenue across all orders"""
        total_products = await self.db.scalar(
            select(func.count(Product.id)).where(Product.is_deleted == False)
        )
        total_orders = await self.db.scalar(select(func.count(Order.id)))
        # Summed as Decimal here; SQL SUM over the sqlite text column goes through float
        amounts = await self.db.scalars(select(Order.total_amount))
        total_revenue = sum(amounts.all(), Decimal("0.00"))

        status_result = await self.db.execute(
            select(Order.status, func.count(Order.id)).group_by(Order.status)
        )
        by_status = dict(status_result.all())

        return AdminStats(
            total_products=total_products or 0,
            total_orders=total_orders or 0,
            total_revenue=total_revenue.quantize(Decimal("0.01")),
            pending_orders=by_status.get(OrderStatus.PENDING.value, 0),
            completed_orders=by_status.get(OrderStatus.COMPLETED.value, 0)
        )
