"""
Shopping cart model
Carts are keyed by an opaque session id, not by a user
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Index, UniqueConstraint, CheckConstraint, JSON
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, IntegerIDModel

class CartItem(Base, TimestampedModel, IntegerIDModel):
    """Shopping cart items"""

    __tablename__ = "cart_items"

    session_id = Column(String(255), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)

    # Validated at the API edge, stored and echoed back as-is
    customizations = Column(JSON(none_as_null=True), nullable=True)

    # Relationships
    product = relationship("Product", lazy="raise")

    # Constraints
    __table_args__ = (
        UniqueConstraint("session_id", "product_id", name="uq_cart_session_product"),
        CheckConstraint("quantity > 0", name="check_positive_cart_quantity"),
        Index("idx_cart_items_session", "session_id"),
    )
