"""
Cart persistence strategies.

The whole item list lives in a single string slot (JSON array). It is written
after every mutation and read once when a cart is constructed. A slot that
cannot be parsed is treated as absent; a backend that cannot be reached raises
CartUnavailableError so the stored cart is never overwritten.
"""
import json
from abc import ABC, abstractmethod
from decimal import InvalidOperation
from typing import Optional

from core.db import RedisKeys, get_redis_sync
from core.errors import ERROR_CART_UNAVAILABLE, CartUnavailableError
from core.logging import get_logger, sanitize_id_for_logging

from .models import CartItem

logger = get_logger(__name__)

DEFAULT_SLOT_KEY = "unifiedCart"


def serialize_items(items: list[CartItem]) -> str:
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


def deserialize_items(raw: Optional[str]) -> list[CartItem]:
    """Parse a stored slot. Missing or corrupted data yields an empty list."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise TypeError(f"expected a list, got {type(data).__name__}")
        return [CartItem.from_dict(entry) for entry in data]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
        logger.warning(f"Discarding corrupted cart data: {e}")
        return []


class CartStorage(ABC):
    """Where a cart's items are kept between sessions."""

    @abstractmethod
    def load(self) -> list[CartItem]:
        ...

    @abstractmethod
    def save(self, items: list[CartItem]) -> None:
        ...


class SlotCartStorage(CartStorage):
    """Storage backed by a single string-keyed slot."""

    def __init__(self, key: str = DEFAULT_SLOT_KEY):
        self.key = key

    @abstractmethod
    def read_slot(self) -> Optional[str]:
        ...

    @abstractmethod
    def write_slot(self, value: str) -> None:
        ...

    def load(self) -> list[CartItem]:
        return deserialize_items(self.read_slot())

    def save(self, items: list[CartItem]) -> None:
        self.write_slot(serialize_items(items))


class MemoryCartStorage(SlotCartStorage):
    """In-process slot store. Pass a shared dict to keep carts between instances."""

    def __init__(self, key: str = DEFAULT_SLOT_KEY, slots: Optional[dict[str, str]] = None):
        super().__init__(key)
        self.slots = slots if slots is not None else {}

    def read_slot(self) -> Optional[str]:
        return self.slots.get(self.key)

    def write_slot(self, value: str) -> None:
        self.slots[self.key] = value


class RedisCartStorage(SlotCartStorage):
    """
    Upstash Redis slot store, one key per session.

    Carts never expire on their own, so keys are written without a TTL.
    """

    def __init__(self, session_id: str, redis=None):
        super().__init__(RedisKeys.unified_cart_key(session_id))
        self.session_id = session_id
        self._redis = redis  # Lazy initialization

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def read_slot(self) -> Optional[str]:
        try:
            return self.redis.get(self.key)
        except Exception as e:
            logger.error(
                f"Failed to read cart for session {sanitize_id_for_logging(self.session_id)}: {e}"
            )
            raise CartUnavailableError(f"{ERROR_CART_UNAVAILABLE}: {e}") from e

    def write_slot(self, value: str) -> None:
        self.redis.set(self.key, value)
