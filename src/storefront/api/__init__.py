"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import (
    admin_router,
    customer_router,
    health_router,
    payment_router,
    product_router,
    review_router,
    showcase_router,
)

ROUTERS = [
    product_router,
    review_router,
    payment_router,
    customer_router,
    showcase_router,
    admin_router,
    health_router,
]

__all__ = [
    "ROUTERS",
    "admin_router",
    "customer_router",
    "health_router",
    "payment_router",
    "product_router",
    "register_error_handlers",
    "review_router",
    "showcase_router",
]
