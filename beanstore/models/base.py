"""Declarative base and column mixins shared by the store's tables"""

from sqlalchemy import Column, DateTime, Boolean, Integer, Numeric, String, false
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import DeclarativeBase, declared_attr
from sqlalchemy.sql import func
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")

class Base(DeclarativeBase):
    pass

class Money(TypeDecorator):
    """
    Fixed-point amount with two decimal places

    SQLite has no exact NUMERIC storage, so there the amount is kept as
    decimal text; other backends use NUMERIC(10, 2).
    """

    impl = Numeric(10, 2)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(20))
        return dialect.type_descriptor(Numeric(10, 2, asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
        if dialect.name == "sqlite":
            return str(amount)
        return amount

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

class IntegerIDModel:
    """Surrogate integer primary key"""

    @declared_attr
    def id(cls):
        return Column(Integer, primary_key=True, autoincrement=True)

class TimestampedModel:
    """created_at / updated_at, both stamped by the database"""

    @declared_attr
    def created_at(cls):
        return Column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            index=True
        )

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            onupdate=func.now()
        )

class SoftDeleteModel:
    """Rows are flagged instead of removed so history can still point at them"""

    @declared_attr
    def is_deleted(cls):
        return Column(
            Boolean,
            default=False,
            server_default=false(),
            nullable=False,
            index=True
        )

    @declared_attr
    def deleted_at(cls):
        return Column(DateTime(timezone=True), nullable=True)

    def soft_delete(self):
        self.is_deleted = True
        self.deleted_at = datetime.now(timezone.utc)
