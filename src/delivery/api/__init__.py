"""Delivery domain API package."""

from delivery.api.errors import register_error_handlers
from delivery.api.routes import order_router, product_router, route_router, shipment_router, user_router

ROUTERS = [user_router, product_router, order_router, route_router, shipment_router]

__all__ = [
    "ROUTERS",
    "order_router",
    "product_router",
    "register_error_handlers",
    "route_router",
    "shipment_router",
    "user_router",
]
