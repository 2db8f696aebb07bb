"""
NotificationService Base Module

Core class and helpers shared by all notification types.
Messages go out through telegram_messaging.py.
"""

import os
from html import escape
from typing import Optional

from core.cart.models import SERVICE_EMOJI, ServiceType
from core.logging import get_logger
from core.orders.constants import STATUS_EMOJI
from core.services.models import Order, OrderItem
from core.services.money import format_money

logger = get_logger(__name__)

GUEST_NAME = "Guest"


def _parse_chat_id(value: str) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        logger.warning(f"Invalid Telegram chat id in environment: {value!r}")
        return None


TELEGRAM_ADMIN_CHAT_ID = _parse_chat_id(os.environ.get("TELEGRAM_ADMIN_CHAT_ID", ""))
TELEGRAM_KITCHEN_CHAT_ID = _parse_chat_id(os.environ.get("TELEGRAM_KITCHEN_CHAT_ID", ""))


def service_emoji(service_type: str) -> str:
    try:
        return SERVICE_EMOJI[ServiceType(service_type)]
    except ValueError:
        return "📦"


def status_emoji(status: str) -> str:
    return STATUS_EMOJI.get(status, "")


def customer_name(order: Order) -> str:
    return escape(order.username) if order.username else GUEST_NAME


def format_order_time(order: Order) -> str:
    if order.order_date is None:
        return "N/A"
    return order.order_date.strftime("%Y-%m-%d %H:%M")


def format_item_line(item: OrderItem) -> str:
    """`• Jollof Rice x2 - ₦3,000`"""
    return f"• {escape(item.name)} x{item.qty} - {format_money(item.line_total)}"


class NotificationServiceBase:
    """Base class for NotificationService.

    Holds the chat ids the hub bots post to. Missing ids disable the
    matching notifications instead of failing the caller.
    """

    def __init__(
        self,
        admin_chat_id: Optional[int] = None,
        kitchen_chat_id: Optional[int] = None,
    ):
        self.admin_chat_id = admin_chat_id if admin_chat_id is not None else TELEGRAM_ADMIN_CHAT_ID
        self.kitchen_chat_id = kitchen_chat_id if kitchen_chat_id is not None else TELEGRAM_KITCHEN_CHAT_ID

    async def _send_admin(self, text: str, keyboard=None) -> bool:
        if not self.admin_chat_id:
            logger.info("Admin chat not configured, skipping notification")
            return False

        from core.services.telegram_messaging import send_via_admin_bot

        return await send_via_admin_bot(self.admin_chat_id, text, keyboard)

    async def _send_kitchen(self, text: str, keyboard=None) -> bool:
        if not self.kitchen_chat_id:
            logger.info("Kitchen chat not configured, skipping notification")
            return False

        from core.services.telegram_messaging import send_via_kitchen_bot

        return await send_via_kitchen_bot(self.kitchen_chat_id, text, keyboard)
