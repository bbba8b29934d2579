"""
Notification model for product announcements
"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, Index, DateTime
from sqlalchemy.sql import func

from .base import Base, IntegerIDModel

class Notification(Base, IntegerIDModel):
    """Write-once message tied to a product"""

    __tablename__ = "notifications"

    product_id = Column(Integer, ForeignKey("products.id"), nullable=True)

    # Notification content
    type = Column(String(50), nullable=False)  # restock, price_drop, new_arrival, promotion
    message = Column(Text, nullable=False)

    sent_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Indexes
    __table_args__ = (
        Index("idx_notifications_product", "product_id"),
        Index("idx_notifications_sent", "sent_at"),
    )
