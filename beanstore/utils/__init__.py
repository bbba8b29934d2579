"""Utilities package"""

from .dependencies import get_app_settings, get_cart_session_id

__all__ = [
    "get_app_settings",
    "get_cart_session_id"
]
