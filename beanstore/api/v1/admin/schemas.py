"""Admin dashboard schemas"""

from pydantic import BaseModel
from decimal import Decimal

class AdminStats(BaseModel):
    total_products: int
    total_orders: int
    total_revenue: Decimal
    pending_orders: int
    completed_orders: int
