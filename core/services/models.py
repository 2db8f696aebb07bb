"""Database Models - Pydantic models for persisted entities."""
from decimal import Decimal
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, field_validator

from core.services.money import to_decimal as _to_decimal


class OrderItem(BaseModel):
    """Line item snapshot stored with an order."""
    menu_item_id: Optional[str] = None
    name: str
    price: Decimal
    qty: int
    service_type: str = "restaurant"
    details: dict[str, Any] = {}

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("details", mode="before")
    @classmethod
    def default_details(cls, v):
        return v or {}

    @property
    def line_total(self) -> Decimal:
        return self.price * self.qty


class Order(BaseModel):
    """Order model."""
    id: str
    order_id_display: str
    user_id: Optional[str] = None
    username: Optional[str] = None
    items: list[OrderItem] = []
    total_amount: Decimal
    status: str = "pending"
    payment_status: str = "pending"
    payment_method: str = "bank_transfer"
    payment_reference: Optional[str] = None
    order_date: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    preparing_at: Optional[datetime] = None
    ready_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)
