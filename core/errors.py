"""
Common Error Constants

Centralized error messages to avoid string duplication (SonarQube S1192).
"""

# Session errors
ERROR_SESSION_REQUIRED = "X-Session-Id header is required"

# Cart errors
ERROR_CART_EMPTY = "Cart is empty"
ERROR_CART_UNAVAILABLE = "Cart service unavailable"

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"

# Generic errors
ERROR_INTERNAL = "Internal server error"


class CheckoutError(ValueError):
    """Checkout request that cannot be fulfilled (empty cart, unknown order)."""


class OrderNotFoundError(CheckoutError):
    def __init__(self, order_id: str):
        super().__init__(ERROR_ORDER_NOT_FOUND)
        self.order_id = order_id


class CartUnavailableError(Exception):
    """Stored cart could not be read; the cart must not be rebuilt from scratch."""
