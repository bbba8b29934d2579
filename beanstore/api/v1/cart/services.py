"""
Cart service layer
Handles the session-scoped cart ledger
"""

from typing import List, Optional, Dict, Any
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import selectinload
import logging

from beanstore.models import CartItem, Product
from beanstore.core.exceptions import NotFoundException, InvalidArgumentException
from beanstore.api.v1.products.schemas import ProductSummary
from .schemas import CartResponse, CartLineResponse

logger = logging.getLogger(__name__)

# Dialects whose INSERT supports ON CONFLICT ... DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

def validate_quantity(quantity: int) -> None:
    """Quantities are positive integers; zero means 'remove', which is a separate call"""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidArgumentException("Quantity must be a positive integer")

def product_view(product: Optional[Product], product_id: int, fallback_name: str) -> ProductSummary:
    """Current product fields, or a tombstone when the catalog row is gone"""
    if product is None:
        return ProductSummary(id=product_id, name=fallback_name, in_stock=False, is_deleted=True)
    return ProductSummary.model_validate(product)

class CartService:
    """Shopping cart service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_live_product(self, product_id: int) -> Product:
        result = await self.db.execute(
            select(Product).where(
                Product.id == product_id,
                Product.is_deleted == False
            )
        )
        product = result.scalar_one_or_none()
        if not product:
            raise NotFoundException(f"Product {product_id} not found")
        return product

    async def _get_item(self, item_id: int, session_id: Optional[str] = None) -> Optional[CartItem]:
        query = select(CartItem).where(CartItem.id == item_id)
        if session_id is not None:
            query = query.where(CartItem.session_id == session_id)
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def get_cart(self, session_id: str) -> CartResponse:
        """
        Get cart lines joined with their current product

        The joined prices are for display only; orders re-read the catalog.
        """
        items = await self.list_items(session_id)

        lines = []
        subtotal = Decimal("0.00")
        for item in items:
            product = product_view(item.product, item.product_id, "Unavailable product")
            line_subtotal = Decimal("0.00")
            if product.price is not None and not product.is_deleted:
                line_subtotal = product.price * item.quantity
            subtotal += line_subtotal

            line = CartLineResponse.model_validate({
                "id": item.id,
                "session_id": item.session_id,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "customizations": item.customizations,
                "created_at": item.created_at,
                "updated_at": item.updated_at,
                "product": product,
                "subtotal": line_subtotal,
            })
            lines.append(line)

        return CartResponse(
            items=lines,
            total_items=sum(line.quantity for line in lines),
            subtotal=subtotal
        )

    async def list_items(self, session_id: str) -> List[CartItem]:
        result = await self.db.execute(
            select(CartItem)
            .options(selectinload(CartItem.product))
            .where(CartItem.session_id == session_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        return list(result.scalars().all())

    async def add_item(
        self,
        session_id: str,
        product_id: int,
        quantity: int,
        customizations: Optional[Dict[str, Any]] = None
    ) -> CartItem:
        """
        Add item to cart, merging with an existing line for the same product

        Args:
            session_id: Cart session id
            product_id: Product to add
            quantity: Units to add to the line
            customizations: Replaces the stored payload when given, otherwise
                the stored payload is kept

        Returns:
            Created or updated cart item

        Raises:
            InvalidArgumentException: If quantity is not positive
            NotFoundException: If product not found
        """
        validate_quantity(quantity)
        await self._get_live_product(product_id)

        dialect_name = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect_name)

        if insert is not None:
            # Single statement, so concurrent adds to the same line both count
            stmt = insert(CartItem).values(
                session_id=session_id,
                product_id=product_id,
                quantity=quantity,
                customizations=customizations
            )
            merge_values = {
                "quantity": CartItem.quantity + stmt.excluded.quantity,
                "updated_at": func.now(),
            }
            if customizations is not None:
                merge_values["customizations"] = stmt.excluded.customizations
            stmt = stmt.on_conflict_do_update(
                index_elements=[CartItem.session_id, CartItem.product_id],
                set_=merge_values
            )
            await self.db.execute(stmt)
        else:
            await self._merge_with_row_lock(session_id, product_id, quantity, customizations)

        result = await self.db.execute(
            select(CartItem)
            .where(
                CartItem.session_id == session_id,
                CartItem.product_id == product_id
            )
            .execution_options(populate_existing=True)
        )
        cart_item = result.scalar_one()
        await self.db.commit()

        logger.info(
            f"Cart {session_id}: product {product_id} +{quantity} -> {cart_item.quantity}"
        )
        return cart_item

    async def _merge_with_row_lock(
        self,
        session_id: str,
        product_id: int,
        quantity: int,
        customizations: Optional[Dict[str, Any]]
    ) -> None:
        """Read-lock-write merge for backends without ON CONFLICT support"""
        result = await self.db.execute(
            select(CartItem)
            .where(
                CartItem.session_id == session_id,
                CartItem.product_id == product_id
            )
            .with_for_update()
        )
        existing_item = result.scalar_one_or_none()

        if existing_item:
            existing_item.quantity = existing_item.quantity + quantity
            if customizations is not None:
                existing_item.customizations = customizations
            self.db.add(existing_item)
        else:
            self.db.add(CartItem(
                session_id=session_id,
                product_id=product_id,
                quantity=quantity,
                customizations=customizations
            ))
        await self.db.flush()

    async def update_quantity(
        self,
        item_id: int,
        quantity: int,
        session_id: Optional[str] = None
    ) -> CartItem:
        """
        Set cart item quantity

        Raises:
            InvalidArgumentException: If quantity is not positive
            NotFoundException: If item not found
        """
        validate_quantity(quantity)

        cart_item = await self._get_item(item_id, session_id)
        if not cart_item:
            raise NotFoundException("Cart item not found")

        cart_item.quantity = quantity

        self.db.add(cart_item)
        await self.db.commit()
        await self.db.refresh(cart_item)

        return cart_item

    async def remove_item(self, item_id: int, session_id: Optional[str] = None) -> None:
        """Remove item from cart; removing an absent item is a no-op"""
        conditions = [CartItem.id == item_id]
        if session_id is not None:
            conditions.append(CartItem.session_id == session_id)

        await self.db.execute(delete(CartItem).where(*conditions))
        await self.db.commit()

    async def clear(self, session_id: str) -> None:
        """Clear all items from cart"""
        await self.db.execute(
            delete(CartItem).where(CartItem.session_id == session_id)
        )
        await self.db.commit()
