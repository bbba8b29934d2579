"""Coffee product model"""

from sqlalchemy import Column, String, Text, Boolean, Index, CheckConstraint

from .base import Base, TimestampedModel, IntegerIDModel, SoftDeleteModel, Money

class Product(Base, TimestampedModel, IntegerIDModel, SoftDeleteModel):
    """Catalog entry; deleting a product only tombstones it"""

    __tablename__ = "products"

    # Basic info
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False)

    # Pricing
    price = Column(Money(), nullable=False)

    # Categorization
    category = Column(String(100), nullable=False, index=True)
    origin = Column(String(100), nullable=False)
    roast_level = Column(String(50), nullable=False)

    # Inventory
    in_stock = Column(Boolean, default=True, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint("price > 0", name="check_positive_price"),
        Index("idx_products_category_deleted", "category", "is_deleted"),
    )
