"""
Order Status Management Service

Centralized service for order status transitions after payment.
Each transition stamps the matching `<status>_at` column when one exists.
"""
from datetime import datetime, timezone
from typing import Optional

from core.errors import OrderNotFoundError
from core.logging import get_logger
from core.services.models import Order
from core.services.repositories import OrderRepository

from .constants import OrderStatus

logger = get_logger(__name__)

# Status transition rules
TRANSITIONS: dict[str, list[str]] = {
    OrderStatus.PENDING.value: [OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value],
    OrderStatus.CONFIRMED.value: [OrderStatus.PREPARING.value, OrderStatus.CANCELLED.value],
    OrderStatus.PREPARING.value: [OrderStatus.READY.value, OrderStatus.CANCELLED.value],
    OrderStatus.READY.value: [OrderStatus.OUT_FOR_DELIVERY.value, OrderStatus.DELIVERED.value],
    OrderStatus.OUT_FOR_DELIVERY.value: [OrderStatus.DELIVERED.value],
    OrderStatus.DELIVERED.value: [],  # Final state
    OrderStatus.CANCELLED.value: [],  # Final state
}

TIMESTAMP_COLUMNS = {
    OrderStatus.CONFIRMED.value: "confirmed_at",
    OrderStatus.PREPARING.value: "preparing_at",
    OrderStatus.READY.value: "ready_at",
    OrderStatus.DELIVERED.value: "delivered_at",
}


def can_transition(current_status: str, target_status: str) -> tuple[bool, Optional[str]]:
    """
    Check if an order may move from current_status to target_status.

    Returns:
        (can_transition, reason_if_not)
    """
    current_status = current_status.lower()
    target_status = target_status.lower()

    if target_status not in TRANSITIONS:
        return False, f"Unknown status: {target_status}"

    allowed = TRANSITIONS.get(current_status, [])
    if target_status not in allowed:
        return False, f"Cannot transition from {current_status} to {target_status}"
    return True, None


class OrderStatusService:
    """Moves orders through the fulfilment statuses and tells the bots about it."""

    def __init__(self, orders: OrderRepository, notifications):
        self.orders = orders
        self.notifications = notifications

    async def update_status(self, order_id: str, status: str) -> Order:
        order = await self.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        allowed, reason = can_transition(order.status, status)
        if not allowed:
            raise ValueError(reason)

        fields = {"status": status}
        column = TIMESTAMP_COLUMNS.get(status)
        if column:
            fields[column] = datetime.now(timezone.utc)

        updated = await self.orders.update(order_id, **fields) or order
        logger.info(f"Order {updated.order_id_display}: {order.status} -> {status}")

        try:
            await self.notifications.notify_status_change(updated)
        except Exception:
            logger.exception(f"Status notification failed for {updated.order_id_display}")

        return updated
