"""Order models"""

from sqlalchemy import Column, String, Integer, ForeignKey, Index, Text, CheckConstraint, JSON
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, IntegerIDModel, Money

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class Order(Base, TimestampedModel, IntegerIDModel):
    """Order header; immutable apart from status"""

    __tablename__ = "orders"

    # Cart session the order was placed from
    session_id = Column(String(255), nullable=True, index=True)

    # Customer contact and shipping
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_address = Column(Text, nullable=False)
    customer_city = Column(String(100), nullable=False)
    customer_zip = Column(String(20), nullable=False)

    # Amounts
    total_amount = Column(Money(), nullable=False)

    # Status
    status = Column(String(50), default=OrderStatus.PENDING.value, nullable=False, index=True)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="raise",
    )
    status_history = relationship(
        "OrderStatusHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderStatusHistory.id",
        lazy="raise",
    )

    # Indexes
    __table_args__ = (
        Index("idx_orders_created_status", "created_at", "status"),
    )

class OrderItem(Base, IntegerIDModel):
    """Individual items within an order"""

    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    # Item details (snapshot at time of order)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Money(), nullable=False)
    customizations = Column(JSON(none_as_null=True), nullable=True)

    # Relationships
    order = relationship("Order", back_populates="items")

    # Constraints
    __table_args__ = (
        CheckConstraint("quantity > 0", name="check_positive_order_quantity"),
        Index("idx_order_items_order_product", "order_id", "product_id"),
    )

class OrderStatusHistory(Base, TimestampedModel, IntegerIDModel):
    """Track order status changes"""

    __tablename__ = "order_status_history"

    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    status = Column(String(50), nullable=False)
    previous_status = Column(String(50), nullable=True)
    changed_by = Column(String(100), nullable=True)

    # Relationships
    order = relationship("Order", back_populates="status_history")

    # Indexes
    __table_args__ = (
        Index("idx_order_status_history_order", "order_id"),
    )
