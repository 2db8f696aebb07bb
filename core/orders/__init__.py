"""Order processing module: checkout hand-off and status workflow."""
from .checkout import CheckoutService
from .constants import OrderStatus, PaymentStatus
from .serializer import (
    CheckoutItem,
    CheckoutPayload,
    build_checkout_payload,
    generate_order_id_display,
)
from .status_service import OrderStatusService, can_transition

__all__ = [
    "CheckoutService",
    "OrderStatusService",
    "OrderStatus",
    "PaymentStatus",
    "CheckoutItem",
    "CheckoutPayload",
    "build_checkout_payload",
    "generate_order_id_display",
    "can_transition",
]
