"""
Product schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

class ProductBase(BaseModel):
    """Base schema for products"""
    name: str = Field(..., min_length=2, max_length=255)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    image_url: str = Field(..., min_length=1, max_length=500)
    category: str = Field(..., min_length=1, max_length=100)
    origin: str = Field(..., min_length=1, max_length=100)
    roast_level: str = Field(..., min_length=1, max_length=50)
    in_stock: bool = True

class ProductCreate(ProductBase):
    """Schema for creating product"""
    pass

class ProductUpdate(BaseModel):
    """Schema for updating product"""
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(None, min_length=1, max_length=500)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    origin: Optional[str] = Field(None, min_length=1, max_length=100)
    roast_level: Optional[str] = Field(None, min_length=1, max_length=50)
    in_stock: Optional[bool] = None

class ProductResponse(ProductBase):
    """Schema for product response"""
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "name": "Ethiopian Sidamo",
                "description": "A bright, floral coffee with wine-like acidity.",
                "price": "24.99",
                "image_url": "https://images.example.com/sidamo.jpg",
                "category": "Single Origin",
                "origin": "Ethiopia",
                "roast_level": "Light Roast",
                "in_stock": True,
                "created_at": "2025-01-01T00:00:00Z",
                "updated_at": "2025-01-01T00:00:00Z"
            }
        }
    }

class ProductSummary(BaseModel):
    """Product fields embedded in cart and order views"""
    id: int
    name: str
    price: Optional[Decimal] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    origin: Optional[str] = None
    roast_level: Optional[str] = None
    in_stock: bool = False
    is_deleted: bool = False

    model_config = {"from_attributes": True}
