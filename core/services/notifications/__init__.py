"""
Notification Service Module

Unified notification service combining all notification types.
"""

from .orders import OrderNotificationsMixin
from .payments import PaymentNotificationsMixin


class NotificationService(
    OrderNotificationsMixin,
    PaymentNotificationsMixin,
):
    """
    Service for posting hub events to the admin and kitchen Telegram chats.

    Combines all notification mixins into a single service class.
    """


__all__ = [
    "NotificationService",
]
