"""Checkout payload built from the unified cart."""
import time
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from core.cart import UnifiedCart
from core.services.money import normalize, to_decimal, to_float

from .constants import ORDER_ID_PREFIX


class CheckoutItem(BaseModel):
    """Line item as handed to order creation."""
    menu_item_id: Optional[str] = Field(default=None, alias="menuItemId")
    service_type: str = Field(alias="serviceType")
    name: str
    price: Decimal
    qty: int
    details: Optional[dict[str, Any]] = None

    class Config:
        populate_by_name = True

    @field_validator("price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return to_decimal(v)


class CheckoutPayload(BaseModel):
    """Cart snapshot plus the grand total."""
    items: list[CheckoutItem]
    total_amount: Decimal = Field(alias="totalAmount")

    class Config:
        populate_by_name = True

    def to_order_items(self) -> list[dict]:
        """Rows for the orders.items JSON column."""
        return [
            {
                "menu_item_id": item.menu_item_id,
                "name": item.name,
                "price": to_float(item.price),
                "qty": item.qty,
                "service_type": item.service_type,
                "details": item.details or {},
            }
            for item in self.items
        ]


def build_checkout_payload(cart: UnifiedCart) -> CheckoutPayload:
    """Snapshot the cart into the shape order creation expects."""
    items = [
        CheckoutItem(
            menu_item_id=item.id,
            service_type=item.service_type.value,
            name=item.name,
            price=normalize(item.price),
            qty=item.qty,
            details=item.details,
        )
        for item in cart.items
    ]
    return CheckoutPayload(items=items, total_amount=cart.get_total_amount())


def generate_order_id_display(now_ms: Optional[int] = None) -> str:
    """Human-facing order reference: DH- plus the last 8 digits of the epoch millis."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{ORDER_ID_PREFIX}{str(now_ms)[-8:]}"
