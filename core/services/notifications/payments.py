"""
Payment Notifications

Bank transfers are verified by hand, so admins get a message with
Verify / Reject buttons whenever a customer reports a payment.
"""

from html import escape

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from core.services.models import Order
from core.services.money import format_money

from .base import NotificationServiceBase, customer_name


def build_payment_text(order: Order) -> str:
    reference = escape(order.payment_reference) if order.payment_reference else "N/A"
    return (
        "💰 <b>Payment Received</b>\n\n"
        f"<b>Order:</b> {order.order_id_display}\n"
        f"<b>Amount:</b> {format_money(order.total_amount)}\n"
        f"<b>Customer:</b> {customer_name(order)}\n"
        f"<b>Reference:</b> {reference}\n\n"
        "Please verify the payment and confirm the order."
    )


class PaymentNotificationsMixin(NotificationServiceBase):
    """Mixin for payment notifications."""

    async def notify_payment(self, order: Order) -> bool:
        keyboard = InlineKeyboardMarkup(inline_keyboard=[[
            InlineKeyboardButton(text="✅ Verify Payment", callback_data=f"verify_{order.id}"),
            InlineKeyboardButton(text="❌ Reject", callback_data=f"reject_payment_{order.id}"),
        ]])
        return await self._send_admin(build_payment_text(order), keyboard)
