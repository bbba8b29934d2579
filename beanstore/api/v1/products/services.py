"""
Product service layer
Catalog reads and admin mutations
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
import logging

from beanstore.models import Product, CartItem
from beanstore.core.exceptions import NotFoundException
from .schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

class ProductService:
    """Catalog service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self, category: Optional[str] = None) -> List[Product]:
        """All live products, newest first"""
        query = select(Product).where(Product.is_deleted == False)
        if category:
            query = query.where(Product.category == category)
        query = query.order_by(Product.created_at.desc(), Product.id.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_product(self, product_id: int) -> Product:
        """
        Get a live product

        Raises:
            NotFoundException: If product is unknown or deleted
        """
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

    async def create_product(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())

        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)

        logger.info(f"Product {product.id} created: {product.name} at {product.price}")
        return product

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """
        Apply a partial update

        Price edits only affect carts and future orders; placed orders keep
        their snapshot.
        """
        product = await self.get_product(product_id)

        changes = data.model_dump(exclude_unset=True)
        for key, value in changes.items():
            setattr(product, key, value)

        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)

        logger.info(f"Product {product_id} updated: {sorted(changes)}")
        return product

    async def delete_product(self, product_id: int) -> None:
        """Tombstone the product and drop it from every cart"""
        product = await self.get_product(product_id)

        product.soft_delete()
        self.db.add(product)
        await self.db.execute(
            delete(CartItem).where(CartItem.product_id == product_id)
        )
        await self.db.commit()

        logger.info(f"Product {product_id} deleted")
