"""Administrator account model"""

from sqlalchemy import Column, String

from .base import Base, TimestampedModel, IntegerIDModel

class AdminUser(Base, TimestampedModel, IntegerIDModel):
    """Credential record for store administrators"""

    __tablename__ = "admin_users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    email = Column(String(255), unique=True, nullable=False)
