"""
Order API routes
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from beanstore.core.database import get_db
from beanstore.api.v1.auth.dependencies import get_current_admin
from beanstore.utils.dependencies import get_cart_session_id
from beanstore.models.order import OrderStatus
from .schemas import OrderCreate, OrderStatusUpdate, OrderResponse, OrderDetailResponse
from .services import OrderService

router = APIRouter()

@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place order",
    description="Create an order from the given lines, or from the session's cart"
)
async def create_order(
    order_data: OrderCreate,
    session_id: str = Depends(get_cart_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Place order"""
    service = OrderService(db)
    return await service.place_order(session_id, order_data)

@router.get(
    "",
    response_model=List[OrderDetailResponse],
    summary="List orders",
    description="All orders, newest first (admin only)"
)
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Status filter"),
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """List orders"""
    service = OrderService(db)
    return await service.list_orders(status=status)

@router.get(
    "/{order_id}",
    response_model=OrderDetailResponse,
    summary="Get order",
    description="Order with its items and current product views (admin only)"
)
async def get_order(
    order_id: int,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Get order details"""
    service = OrderService(db)
    return await service.get_order(order_id)

@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status",
    description="Move an order along its lifecycle (admin only)"
)
async def update_order_status(
    order_id: int,
    status_data: OrderStatusUpdate,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update order status"""
    service = OrderService(db)
    return await service.update_order_status(
        order_id,
        status_data.status,
        changed_by=current_admin["username"]
    )
