"""
Cart API routes

The cart belongs to the caller's session cookie; no login is needed.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from beanstore.core.database import get_db
from beanstore.utils.dependencies import get_cart_session_id
from .schemas import CartItemCreate, CartItemUpdate, CartItemResponse, CartResponse
from .services import CartService

router = APIRouter()

@router.get("", response_model=CartResponse)
async def get_cart(
    session_id: str = Depends(get_cart_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Get the session's cart"""
    service = CartService(db)
    return await service.get_cart(session_id)

@router.post("", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    item_data: CartItemCreate,
    session_id: str = Depends(get_cart_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Add item to cart; repeated adds merge into one line"""
    service = CartService(db)
    customizations = None
    if item_data.customizations is not None:
        customizations = item_data.customizations.to_payload()
    return await service.add_item(
        session_id,
        item_data.product_id,
        item_data.quantity,
        customizations
    )

@router.put("/{item_id}", response_model=CartItemResponse)
async def update_cart_item(
    item_id: int,
    item_data: CartItemUpdate,
    session_id: str = Depends(get_cart_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Update cart item quantity"""
    service = CartService(db)
    return await service.update_quantity(item_id, item_data.quantity, session_id=session_id)

@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_cart(
    item_id: int,
    session_id: str = Depends(get_cart_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Remove item from cart"""
    service = CartService(db)
    await service.remove_item(item_id, session_id=session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(
    session_id: str = Depends(get_cart_session_id),
    db: AsyncSession = Depends(get_db)
):
    """Clear cart"""
    service = CartService(db)
    await service.clear(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
