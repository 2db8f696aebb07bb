"""
Order Notifications

Admin and kitchen notifications for the order lifecycle.
"""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from core.logging import get_logger
from core.orders.constants import OrderStatus
from core.services.models import Order, OrderItem
from core.services.money import format_money

from .base import (
    NotificationServiceBase,
    customer_name,
    format_item_line,
    format_order_time,
    service_emoji,
    status_emoji,
)

logger = get_logger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================


def _group_items_by_service(items: list[OrderItem]) -> dict[str, list[OrderItem]]:
    groups: dict[str, list[OrderItem]] = {}
    for item in items:
        groups.setdefault(item.service_type, []).append(item)
    return groups


def build_new_order_text(order: Order) -> str:
    first_service = order.items[0].service_type if order.items else None
    service_line = (
        f"{service_emoji(first_service)} {first_service}" if first_service else "📦 General"
    )
    items_list = "\n".join(format_item_line(item) for item in order.items)

    return (
        f"<b>🆕 New Order {order.order_id_display}</b>\n\n"
        f"<b>Customer:</b> {customer_name(order)}\n"
        f"<b>Service:</b> {service_line}\n"
        f"<b>Time:</b> {format_order_time(order)}\n"
        f"<b>Total:</b> {format_money(order.total_amount)}\n\n"
        f"<b>Items:</b>\n{items_list}\n\n"
        f"<b>Status:</b> {status_emoji(order.status)} {order.status}"
    )


def build_new_order_keyboard(order: Order) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="✅ Accept", callback_data=f"order_accept_{order.id}"),
            InlineKeyboardButton(text="❌ Reject", callback_data=f"order_reject_{order.id}"),
        ],
        [
            InlineKeyboardButton(text="👨‍🍳 Kitchen", callback_data=f"order_kitchen_{order.id}"),
        ],
    ])


def build_kitchen_text(order: Order) -> str:
    """Kitchen ticket: items grouped per service so each station sees its part."""
    sections = []
    for service, items in _group_items_by_service(order.items).items():
        lines = "\n".join(format_item_line(item) for item in items)
        sections.append(f"{service_emoji(service)} <b>{service}</b>\n{lines}")

    return (
        f"<b>🍔 Kitchen Order {order.order_id_display}</b>\n\n"
        f"<b>Customer:</b> {customer_name(order)}\n"
        f"<b>Time:</b> {format_order_time(order)}\n"
        f"<b>Total:</b> {format_money(order.total_amount)}\n\n"
        + "\n\n".join(sections)
    )


STATUS_MESSAGES = {
    OrderStatus.PREPARING.value: "👨‍🍳 Started preparing order {order_id}",
    OrderStatus.READY.value: "🍽️ Order {order_id} is ready!",
    OrderStatus.OUT_FOR_DELIVERY.value: "🚗 Order {order_id} is out for delivery!",
    OrderStatus.DELIVERED.value: "🎉 Order {order_id} delivered!",
}


class OrderNotificationsMixin(NotificationServiceBase):
    """Mixin for order-related notifications."""

    async def notify_new_order(self, order: Order) -> bool:
        """Tell admins about a freshly created order."""
        return await self._send_admin(build_new_order_text(order), build_new_order_keyboard(order))

    async def notify_kitchen(self, order: Order) -> bool:
        """Hand a confirmed order to the kitchen chat."""
        keyboard = InlineKeyboardMarkup(inline_keyboard=[[
            InlineKeyboardButton(text="👨‍🍳 Start preparing", callback_data=f"kitchen_start_{order.id}"),
        ]])
        return await self._send_kitchen(build_kitchen_text(order), keyboard)

    async def notify_status_change(self, order: Order) -> bool:
        """Post a one-liner for fulfilment steps; preparing goes to the kitchen, the rest to admins."""
        template = STATUS_MESSAGES.get(order.status)
        if template is None:
            return False

        text = template.format(order_id=order.order_id_display)
        if order.status == OrderStatus.PREPARING.value:
            return await self._send_kitchen(text)
        return await self._send_admin(text)
