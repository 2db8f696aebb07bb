"""Order Repository - Order operations."""
from datetime import datetime, timezone
from typing import Optional

from core.services.models import Order

from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Order database operations."""

    async def create(
        self,
        order_id_display: str,
        items: list[dict],
        total_amount: float,
        user_id: Optional[str] = None,
        username: Optional[str] = None,
        payment_method: str = "bank_transfer",
    ) -> Order:
        """Create a pending order from a checkout payload."""
        data = {
            "order_id_display": order_id_display,
            "items": items,
            "total_amount": total_amount,
            "status": "pending",
            "payment_status": "pending",
            "payment_method": payment_method,
            "order_date": datetime.now(timezone.utc).isoformat(),
        }
        if user_id:
            data["user_id"] = user_id
        if username:
            data["username"] = username

        result = await self.client.table("orders").insert(data).execute()
        return Order(**result.data[0])

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID."""
        result = await self.client.table("orders").select("*").eq("id", order_id).execute()
        return Order(**result.data[0]) if result.data else None

    async def update(self, order_id: str, **fields) -> Optional[Order]:
        """Update order columns and return the stored row."""
        for key, value in list(fields.items()):
            if isinstance(value, datetime):
                fields[key] = value.isoformat()

        result = await self.client.table("orders").update(fields).eq("id", order_id).execute()
        return Order(**result.data[0]) if result.data else None
