"""
Order service layer
Handles order placement, status changes and order reads
"""

from typing import List, Optional, Dict, Any, Tuple
from decimal import Decimal, ROUND_HALF_UP
from collections import defaultdict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
import logging

from beanstore.models import Order, OrderItem, OrderStatus, OrderStatusHistory, Product, CartItem
from beanstore.core.exceptions import (
    BeanStoreException, NotFoundException, InvalidArgumentException,
    OutOfStockException, OrderCommitException, InvalidStatusTransitionException
)
from beanstore.api.v1.cart.services import product_view
from .schemas import OrderCreate, OrderDetailResponse, OrderItemResponse, OrderStatusHistoryResponse
from .state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")

# (product_id, quantity, customizations)
OrderLine = Tuple[int, int, Optional[Dict[str, Any]]]

# Cart rows an order was built from; None when lines were given explicitly
CartItemIds = Optional[List[int]]

def order_total(priced_lines: List[Tuple[Decimal, int]]) -> Decimal:
    """Sum of price x quantity, rounded once to cents"""
    total = sum((price * quantity for price, quantity in priced_lines), Decimal("0"))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)

class OrderService:
    """Order service for business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.state_machine = OrderStateMachine()

    async def place_order(self, session_id: str, data: OrderCreate) -> Order:
        """
        Turn requested lines (or the session's cart) into a pending order

        Prices are read from the catalog inside the same transaction that
        writes the order and removes the ordered lines from the cart.
        Either all of it is committed or none of it is.

        Args:
            session_id: Cart session placing the order
            data: Customer fields and optional explicit lines

        Returns:
            Created order header

        Raises:
            InvalidArgumentException: If there is nothing to order
            NotFoundException: If a product is unknown or deleted
            OutOfStockException: If a product is not in stock
            OrderCommitException: If the store rejected the write
        """
        try:
            lines, cart_item_ids = await self._requested_lines(session_id, data)
            products = await self._resolve_products([line[0] for line in lines])

            total = order_total(
                [(products[product_id].price, quantity) for product_id, quantity, _ in lines]
            )

            order = Order(
                session_id=session_id,
                customer_name=data.customer_name,
                customer_email=data.customer_email,
                customer_address=data.customer_address,
                customer_city=data.customer_city,
                customer_zip=data.customer_zip,
                total_amount=total,
                status=OrderStatus.PENDING.value
            )
            self.db.add(order)
            await self.db.flush()

            self.db.add_all([
                OrderItem(
                    order_id=order.id,
                    product_id=product_id,
                    product_name=products[product_id].name,
                    quantity=quantity,
                    price=products[product_id].price,
                    customizations=customizations
                )
                for product_id, quantity, customizations in lines
            ])
            self.db.add(OrderStatusHistory(
                order_id=order.id,
                previous_status=None,
                status=OrderStatus.PENDING.value
            ))
            await self.db.flush()
            # Load server-stamped columns while the transaction is still open
            await self.db.refresh(order)

            await self._clear_cart(session_id, cart_item_ids)

            await self.db.commit()
        except BeanStoreException:
            await self.db.rollback()
            raise
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception(f"Order commit failed for session {session_id}")
            raise OrderCommitException()

        logger.info(
            f"Order {order.id} placed: total {order.total_amount}, {len(lines)} line(s)"
        )
        return order

    async def _requested_lines(
        self,
        session_id: str,
        data: OrderCreate
    ) -> Tuple[List[OrderLine], CartItemIds]:
        cart_item_ids = None
        if data.items is not None:
            lines = [
                (
                    item.product_id,
                    item.quantity,
                    item.customizations.to_payload() if item.customizations is not None else None
                )
                for item in data.items
            ]
        else:
            # Lock the cart rows where the backend supports FOR UPDATE
            result = await self.db.execute(
                select(CartItem)
                .where(CartItem.session_id == session_id)
                .order_by(CartItem.created_at, CartItem.id)
                .with_for_update()
            )
            cart_items = result.scalars().all()
            cart_item_ids = [item.id for item in cart_items]
            lines = [
                (item.product_id, item.quantity, item.customizations)
                for item in cart_items
            ]

        if not lines:
            raise InvalidArgumentException("Order must contain at least one item")

        return lines, cart_item_ids

    async def _resolve_products(self, product_ids: List[int]) -> Dict[int, Product]:
        """Load every referenced product in one query and check it can be sold"""
        result = await self.db.execute(
            select(Product).where(Product.id.in_(list(set(product_ids))))
        )
        products = {product.id: product for product in result.scalars().all()}

        for product_id in product_ids:
            product = products.get(product_id)
            if product is None or product.is_deleted:
                raise NotFoundException(f"Product {product_id} not found")
            if not product.in_stock:
                raise OutOfStockException(product.name)

        return products

    async def _clear_cart(self, session_id: str, cart_item_ids: CartItemIds = None) -> None:
        """Drop the ordered cart rows, or the whole cart for explicit lines"""
        query = delete(CartItem).where(CartItem.session_id == session_id)
        if cart_item_ids is not None:
            # Lines added after the cart was read stay for a later order
            query = query.where(CartItem.id.in_(cart_item_ids))
        await self.db.execute(query)

    async def get_order(self, order_id: int) -> OrderDetailResponse:
        """
        Get order with items, status history and product views

        Raises:
            NotFoundException: If order not found
        """
        result = await self.db.execute(
            select(Order).where(Order.id == order_id)
        )
        order = result.scalar_one_or_none()

        if not order:
            raise NotFoundException("Order not found")

        details = await self._with_details([order])
        return details[0]

    async def list_orders(self, status: Optional[OrderStatus] = None) -> List[OrderDetailResponse]:
        """All orders, newest first, optionally filtered by status"""
        query = select(Order)
        if status:
            query = query.where(Order.status == OrderStatus(status).value)
        query = query.order_by(Order.created_at.desc(), Order.id.desc())

        result = await self.db.execute(query)
        return await self._with_details(list(result.scalars().all()))

    async def _with_details(self, orders: List[Order]) -> List[OrderDetailResponse]:
        """
        Attach items, history and product views to order headers

        Items are read from order_items on their own so that lines whose
        product has left the catalog still show up, with a tombstone view.
        """
        if not orders:
            return []

        order_ids = [order.id for order in orders]

        items_result = await self.db.execute(
            select(OrderItem)
            .where(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.id)
        )
        items_by_order = defaultdict(list)
        for item in items_result.scalars().all():
            items_by_order[item.order_id].append(item)

        history_result = await self.db.execute(
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id.in_(order_ids))
            .order_by(OrderStatusHistory.id)
        )
        history_by_order = defaultdict(list)
        for entry in history_result.scalars().all():
            history_by_order[entry.order_id].append(entry)

        product_ids = {item.product_id for items in items_by_order.values() for item in items}
        products = {}
        if product_ids:
            products_result = await self.db.execute(
                select(Product).where(Product.id.in_(list(product_ids)))
            )
            products = {product.id: product for product in products_result.scalars().all()}

        details = []
        for order in orders:
            items = [
                OrderItemResponse(
                    id=item.id,
                    order_id=item.order_id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    price=item.price,
                    customizations=item.customizations,
                    product=product_view(products.get(item.product_id), item.product_id, item.product_name)
                )
                for item in items_by_order[order.id]
            ]
            history = [
                OrderStatusHistoryResponse.model_validate(entry)
                for entry in history_by_order[order.id]
            ]

            detail = OrderDetailResponse.model_validate({
                "id": order.id,
                "session_id": order.session_id,
                "customer_name": order.customer_name,
                "customer_email": order.customer_email,
                "customer_address": order.customer_address,
                "customer_city": order.customer_city,
                "customer_zip": order.customer_zip,
                "total_amount": order.total_amount,
                "status": order.status,
                "created_at": order.created_at,
                "updated_at": order.updated_at,
                "items": items,
                "status_history": history,
            })
            details.append(detail)

        return details

    async def update_order_status(
        self,
        order_id: int,
        new_status: OrderStatus,
        changed_by: Optional[str] = None
    ) -> Order:
        """
        Update order status

        Args:
            order_id: Order ID
            new_status: New status
            changed_by: Username of the acting admin

        Returns:
            Updated order

        Raises:
            NotFoundException: If order not found
            InvalidStatusTransitionException: If transition not allowed
        """
        new_status = OrderStatus(new_status)

        result = await self.db.execute(
            select(Order).where(Order.id == order_id).with_for_update()
        )
        order = result.scalar_one_or_none()

        if not order:
            raise NotFoundException("Order not found")

        previous_status = order.status

        # Validate state transition
        if not self.state_machine.can_transition(previous_status, new_status):
            raise InvalidStatusTransitionException(previous_status, new_status.value)

        order.status = new_status.value
        self.db.add(order)
        self.db.add(OrderStatusHistory(
            order_id=order.id,
            previous_status=previous_status,
            status=new_status.value,
            changed_by=changed_by
        ))

        await self.db.flush()
        await self.db.refresh(order)
        await self.db.commit()

        logger.info(
            f"Order {order_id} status {previous_status} -> {new_status.value} by {changed_by}"
        )
        return order
