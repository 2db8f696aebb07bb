"""
Shared Dependencies for Routers

Lazy-loaded singletons to optimize cold start, plus the per-session cart.
Import heavy modules only when needed.
"""

import os
from typing import Optional, TYPE_CHECKING

from fastapi import Header, HTTPException

from core.cart import MemoryCartStorage, RedisCartStorage, UnifiedCart
from core.cart.storage import CartStorage
from core.db import RedisKeys
from core.errors import ERROR_CART_UNAVAILABLE, ERROR_SESSION_REQUIRED, CartUnavailableError

if TYPE_CHECKING:
    from core.orders import CheckoutService, OrderStatusService
    from core.services.notifications import NotificationService


CART_STORAGE = os.environ.get("CART_STORAGE", "memory").lower()

# Slots for the in-process backend, keyed like the Redis keys
_memory_slots: dict[str, str] = {}


# ==================== SESSION CART ====================

def get_cart_storage(session_id: str) -> CartStorage:
    """Storage slot for one session, chosen by CART_STORAGE (memory | redis)."""
    if CART_STORAGE == "redis":
        return RedisCartStorage(session_id)
    return MemoryCartStorage(key=RedisKeys.unified_cart_key(session_id), slots=_memory_slots)


def get_session_cart(x_session_id: Optional[str] = Header(default=None)) -> UnifiedCart:
    """Build the caller's cart from its storage slot (loaded once per request)."""
    if not x_session_id or not x_session_id.strip():
        raise HTTPException(status_code=400, detail=ERROR_SESSION_REQUIRED)
    try:
        return UnifiedCart(get_cart_storage(x_session_id.strip()))
    except CartUnavailableError:
        raise HTTPException(status_code=503, detail=ERROR_CART_UNAVAILABLE)


# ==================== LAZY SINGLETONS ====================

_notification_service: Optional["NotificationService"] = None
_checkout_service: Optional["CheckoutService"] = None
_status_service: Optional["OrderStatusService"] = None


def get_notification_service() -> "NotificationService":
    """Get or create NotificationService singleton (lazy loaded)"""
    global _notification_service
    if _notification_service is None:
        from core.services.notifications import NotificationService
        _notification_service = NotificationService()
    return _notification_service


async def _get_order_repository():
    from core.db import get_supabase
    from core.services.repositories import OrderRepository
    return OrderRepository(await get_supabase())


async def get_checkout_service() -> "CheckoutService":
    """Get or create CheckoutService singleton (lazy loaded)"""
    global _checkout_service
    if _checkout_service is None:
        from core.orders import CheckoutService
        _checkout_service = CheckoutService(await _get_order_repository(), get_notification_service())
    return _checkout_service


async def get_status_service() -> "OrderStatusService":
    """Get or create OrderStatusService singleton (lazy loaded)"""
    global _status_service
    if _status_service is None:
        from core.orders import OrderStatusService
        _status_service = OrderStatusService(await _get_order_repository(), get_notification_service())
    return _status_service
