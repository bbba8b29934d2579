"""Models package initialization"""

from .base import Base, Money
from .product import Product
from .cart import CartItem
from .order import Order, OrderItem, OrderStatus, OrderStatusHistory
from .admin import AdminUser
from .notification import Notification

__all__ = [
    "Base",
    "Money",
    "Product",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderStatusHistory",
    "AdminUser",
    "Notification",
]
