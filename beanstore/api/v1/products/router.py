"""Products API router"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from beanstore.core.database import get_db
from beanstore.api.v1.auth.dependencies import get_current_admin
from .schemas import ProductCreate, ProductUpdate, ProductResponse
from .services import ProductService

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    category: Optional[str] = Query(None, description="Category filter"),
    db: AsyncSession = Depends(get_db)
):
    """List catalog products"""
    service = ProductService(db)
    return await service.list_products(category=category)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get a single product"""
    service = ProductService(db)
    return await service.get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create product (admin only)"""
    service = ProductService(db)
    return await service.create_product(product_data)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Update product (admin only)"""
    service = ProductService(db)
    return await service.update_product(product_id, product_data)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    current_admin: dict = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete product (admin only)"""
    service = ProductService(db)
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
