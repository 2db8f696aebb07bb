"""Cart package: models, pricing, storage, and the unified cart service."""
from .models import SERVICE_EMOJI, SERVICE_LABELS, CartItem, ServiceType
from .service import UnifiedCart
from .storage import CartStorage, MemoryCartStorage, RedisCartStorage

__all__ = [
    "CartItem",
    "ServiceType",
    "SERVICE_LABELS",
    "SERVICE_EMOJI",
    "UnifiedCart",
    "CartStorage",
    "MemoryCartStorage",
    "RedisCartStorage",
]
