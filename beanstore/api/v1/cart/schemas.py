"""
Cart schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal
import enum

from beanstore.api.v1.products.schemas import ProductSummary

class GrindSize(str, enum.Enum):
    WHOLE_BEAN = "whole_bean"
    COARSE = "coarse"
    MEDIUM = "medium"
    FINE = "fine"
    ESPRESSO = "espresso"

class BagSize(str, enum.Enum):
    SMALL = "12oz"
    MEDIUM = "2lb"
    LARGE = "5lb"

class Customizations(BaseModel):
    """Known customization options; anything else is rejected at the edge"""
    grind: Optional[GrindSize] = None
    bag_size: Optional[BagSize] = None
    gift_message: Optional[str] = Field(None, max_length=200)

    model_config = {"extra": "forbid"}

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict of exactly the keys the client sent"""
        return self.model_dump(mode="json", exclude_unset=True)

class CartItemCreate(BaseModel):
    """Schema for adding item to cart"""
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)
    customizations: Optional[Customizations] = None

class CartItemUpdate(BaseModel):
    """Schema for updating cart item"""
    quantity: int = Field(..., gt=0)

class CartItemResponse(BaseModel):
    """Schema for a stored cart line"""
    id: int
    session_id: str
    product_id: int
    quantity: int
    customizations: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class CartLineResponse(CartItemResponse):
    """Cart line joined with the current product, for display only"""
    product: ProductSummary
    subtotal: Decimal

class CartResponse(BaseModel):
    """Schema for complete cart response"""
    items: List[CartLineResponse]
    total_items: int
    subtotal: Decimal

    model_config = {
        "json_schema_extra": {
            "example": {
                "items": [],
                "total_items": 0,
                "subtotal": "0.00"
            }
        }
    }
