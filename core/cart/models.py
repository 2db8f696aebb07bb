"""Unified cart models with Decimal-based pricing."""
import json
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from core.services.money import multiply, normalize, to_decimal


class ServiceType(str, Enum):
    """Business domains a cart line item can belong to."""
    RESTAURANT = "restaurant"
    GAME = "game"
    PRINT = "print"
    ECOMMERCE = "ecommerce"
    LOGISTICS = "logistics"
    STREAMING = "streaming"
    DOWNLOAD = "download"


SERVICE_LABELS: dict[ServiceType, str] = {
    ServiceType.RESTAURANT: "🍔 Food & Drinks",
    ServiceType.GAME: "🎮 Gaming",
    ServiceType.PRINT: "🖨️ Printing",
    ServiceType.ECOMMERCE: "🛍️ Shopping",
    ServiceType.LOGISTICS: "🚗 Delivery",
    ServiceType.STREAMING: "📺 Streaming",
    ServiceType.DOWNLOAD: "📥 Downloads",
}

SERVICE_EMOJI: dict[ServiceType, str] = {
    ServiceType.RESTAURANT: "🍔",
    ServiceType.GAME: "🎮",
    ServiceType.PRINT: "🖨️",
    ServiceType.ECOMMERCE: "🛍️",
    ServiceType.LOGISTICS: "🚗",
    ServiceType.STREAMING: "📺",
    ServiceType.DOWNLOAD: "📥",
}


def canonical_details(details: Optional[dict]) -> str:
    """Serialize a details bag so equal bags always produce the same string."""
    return json.dumps(details, sort_keys=True, default=str, ensure_ascii=False)


@dataclass
class CartItem:
    """Single line item in the unified cart."""
    id: str
    service_type: ServiceType
    name: str
    price: Decimal
    qty: Optional[int] = 1
    details: Optional[dict[str, Any]] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        self.service_type = ServiceType(self.service_type)
        self.price = to_decimal(self.price)

    @property
    def merge_key(self) -> tuple[str, ServiceType, str]:
        """Identity used to merge duplicate adds."""
        return (self.id, self.service_type, canonical_details(self.details))

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line."""
        return multiply(self.price, self.qty or 0)

    def matches(self, item_id: str, service_type: ServiceType) -> bool:
        return self.id == item_id and self.service_type == ServiceType(service_type)

    def to_dict(self) -> dict:
        """Convert to the persisted / checkout shape."""
        data = {
            "id": self.id,
            "serviceType": self.service_type.value,
            "name": self.name,
            "price": str(normalize(self.price)),
            "qty": self.qty,
        }
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        if self.details is not None:
            data["details"] = self.details
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            service_type=ServiceType(data["serviceType"]),
            name=data["name"],
            price=Decimal(str(data["price"])),
            qty=int(data["qty"]),
            details=data.get("details"),
            image_url=data.get("imageUrl"),
        )
