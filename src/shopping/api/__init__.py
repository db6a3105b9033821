"""Shopping domain API package."""

from shopping.api.routes import basket_router, discount_router, product_router

__all__ = ["basket_router", "product_router", "discount_router"]
