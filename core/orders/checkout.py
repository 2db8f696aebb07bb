"""
Checkout Service

Hands the unified cart over to order creation and drives the bank-transfer
payment workflow:

    create_order      -> order pending, admins notified
    confirm_payment   -> payment pending_verification, admins notified, cart cleared
    verify_payment    -> verified: order confirmed, kitchen notified
                         rejected: payment failed, order cancelled
                         (only from statuses that allow the move)
"""
import asyncio
from datetime import datetime, timezone
from typing import Optional

from core.cart import UnifiedCart
from core.errors import ERROR_CART_EMPTY, CheckoutError, OrderNotFoundError
from core.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from core.services.models import Order
from core.services.money import to_float
from core.services.repositories import OrderRepository

from .constants import OrderStatus, PaymentStatus
from .serializer import build_checkout_payload, generate_order_id_display
from .status_service import can_transition

logger = get_logger(__name__)


class CheckoutService:
    """Creates orders from carts and moves them through payment."""

    def __init__(self, orders: OrderRepository, notifications):
        self.orders = orders
        self.notifications = notifications

    async def _notify(self, method: str, order: Order) -> None:
        # Notifications are best effort; the order is already stored
        try:
            await getattr(self.notifications, method)(order)
        except Exception:
            logger.exception(f"{method} failed for order {order.order_id_display}")

    async def _get_order(self, order_id: str) -> Order:
        order = await self.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def create_order(
        self,
        cart: UnifiedCart,
        user_id: Optional[str] = None,
        username: Optional[str] = None,
    ) -> Order:
        """Persist the cart as a pending order. The cart itself is left untouched."""
        if cart.is_empty():
            raise CheckoutError(ERROR_CART_EMPTY)

        payload = build_checkout_payload(cart)
        order = await self.orders.create(
            order_id_display=generate_order_id_display(),
            items=payload.to_order_items(),
            total_amount=to_float(payload.total_amount),
            user_id=user_id,
            username=username,
        )
        logger.info(
            f"Order {order.order_id_display} created: {len(payload.items)} line(s), "
            f"total {payload.total_amount}"
        )

        await self._notify("notify_new_order", order)
        return order

    async def confirm_payment(
        self,
        order_id: str,
        cart: UnifiedCart,
        reference: Optional[str] = None,
    ) -> Order:
        """Customer reports the transfer; the cart is emptied once the order is flagged."""
        order = await self._get_order(order_id)

        fields = {"payment_status": PaymentStatus.PENDING_VERIFICATION.value}
        if reference:
            fields["payment_reference"] = reference
        order = await self.orders.update(order_id, **fields) or order

        await asyncio.to_thread(cart.clear_cart)
        logger.info(
            f"Payment submitted for order {sanitize_id_for_logging(order_id)}, "
            f"reference {sanitize_string_for_logging(reference)}"
        )

        await self._notify("notify_payment", order)
        return order

    async def verify_payment(self, order_id: str, verified: bool) -> Order:
        """Admin decision on a submitted payment. Final orders cannot be reopened."""
        existing = await self._get_order(order_id)

        target = OrderStatus.CONFIRMED if verified else OrderStatus.CANCELLED
        allowed, reason = can_transition(existing.status, target.value)
        if not allowed:
            raise CheckoutError(reason)

        if verified:
            order = await self.orders.update(
                order_id,
                payment_status=PaymentStatus.VERIFIED.value,
                status=OrderStatus.CONFIRMED.value,
                confirmed_at=datetime.now(timezone.utc),
            ) or existing
            await self._notify("notify_kitchen", order)
        else:
            order = await self.orders.update(
                order_id,
                payment_status=PaymentStatus.FAILED.value,
                status=OrderStatus.CANCELLED.value,
            ) or existing

        logger.info(
            f"Payment for order {sanitize_id_for_logging(order_id)} "
            f"{'verified' if verified else 'rejected'}"
        )
        return order
