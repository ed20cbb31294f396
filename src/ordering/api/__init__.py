"""Ordering domain API package."""

from ordering.api.errors import register_error_handlers
from ordering.api.routes import (
    admin_router,
    cart_router,
    order_router,
    payment_router,
    wishlist_router,
)

__all__ = [
    "admin_router",
    "cart_router",
    "order_router",
    "payment_router",
    "wishlist_router",
    "register_error_handlers",
]
