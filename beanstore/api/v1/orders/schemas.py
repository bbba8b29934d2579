"""
Order schemas for request/response validation
"""

from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal

from beanstore.models.order import OrderStatus
from beanstore.api.v1.products.schemas import ProductSummary
from beanstore.api.v1.cart.schemas import Customizations

class CustomerInfo(BaseModel):
    """Customer contact and shipping fields"""
    customer_name: str = Field(..., min_length=2, max_length=255)
    customer_email: EmailStr
    customer_address: str = Field(..., min_length=5, max_length=500)
    customer_city: str = Field(..., min_length=2, max_length=100)
    customer_zip: str = Field(..., pattern=r'^[A-Za-z0-9][A-Za-z0-9 \-]{1,9}$')

    @field_validator('customer_name', 'customer_address', 'customer_city')
    @classmethod
    def strip_whitespace(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be blank')
        return v

class OrderLineCreate(BaseModel):
    """One requested order line; prices always come from the catalog"""
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    customizations: Optional[Customizations] = None

class OrderCreate(CustomerInfo):
    """
    Schema for placing an order

    When ``items`` is omitted the session's cart is ordered.
    """
    items: Optional[List[OrderLineCreate]] = None

class OrderStatusUpdate(BaseModel):
    """Schema for an admin status change"""
    status: OrderStatus

class OrderResponse(BaseModel):
    """Schema for order header response"""
    id: int
    session_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_address: str
    customer_city: str
    customer_zip: str
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "customer_name": "Ada Lovelace",
                "customer_email": "ada@example.com",
                "customer_address": "12 Analytical Row",
                "customer_city": "London",
                "customer_zip": "10001",
                "total_amount": "74.97",
                "status": "pending",
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-01-01T00:00:00Z"
            }
        }
    }

class OrderItemResponse(BaseModel):
    """Order line with snapshot price and the current product view"""
    id: int
    order_id: int
    product_id: int
    product_name: str
    quantity: int
    price: Decimal
    customizations: Optional[Dict[str, Any]] = None
    product: ProductSummary

class OrderStatusHistoryResponse(BaseModel):
    id: int
    previous_status: Optional[str] = None
    status: str
    changed_by: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}

class OrderDetailResponse(OrderResponse):
    """Order header with its items and status history"""
    items: List[OrderItemResponse]
    status_history: List[OrderStatusHistoryResponse] = []
