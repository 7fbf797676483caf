"""Storefront API package."""

from storefront.api.categories import router as category_router
from storefront.api.errors import register_error_handlers
from storefront.api.orders import router as order_router
from storefront.api.products import router as product_router
from storefront.api.users import router as user_router

__all__ = ["user_router", "product_router", "category_router", "order_router", "register_error_handlers"]
