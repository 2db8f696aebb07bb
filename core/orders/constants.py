"""Order constants and enums."""
from enum import Enum


class OrderStatus(str, Enum):
    """
    Order status lifecycle.

    Flow:
        pending -> confirmed -> preparing -> ready -> out-for-delivery -> delivered
                -> cancelled

    - pending: Created at checkout, awaiting payment verification
    - confirmed: Payment verified by an admin, handed to the kitchen
    - cancelled: Payment rejected (final)
    """
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """
    Payment workflow for bank transfers.

    pending -> pending_verification (customer says they paid)
            -> verified | failed (admin decision)
    """
    PENDING = "pending"
    PENDING_VERIFICATION = "pending_verification"
    VERIFIED = "verified"
    FAILED = "failed"


STATUS_EMOJI: dict[str, str] = {
    OrderStatus.PENDING.value: "⏳",
    OrderStatus.CONFIRMED.value: "✅",
    OrderStatus.PREPARING.value: "👨‍🍳",
    OrderStatus.READY.value: "🍽️",
    OrderStatus.OUT_FOR_DELIVERY.value: "🚗",
    OrderStatus.DELIVERED.value: "🎉",
    OrderStatus.CANCELLED.value: "❌",
}

ORDER_ID_PREFIX = "DH-"
