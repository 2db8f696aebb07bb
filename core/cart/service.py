"""Unified cart service: one cart per session, persisted through a CartStorage."""
from decimal import Decimal
from typing import Any, Optional

from core.logging import get_logger
from core.services.money import to_decimal, total_of

from . import pricing
from .details import (
    DeliveryDetails,
    DetailsInput,
    DownloadDetails,
    GameSessionDetails,
    PrintJobDetails,
    ProductDetails,
    RestaurantItemDetails,
    StreamingDetails,
    validate_details,
)
from .models import CartItem, ServiceType, canonical_details
from .storage import CartStorage, MemoryCartStorage

logger = get_logger(__name__)

_ANY_DETAILS = object()


class UnifiedCart:
    """
    Cart holding line items from every hub service.

    Features:
    - Duplicate adds merge on (id, service type, details)
    - Per-service helpers derive the unit price before adding
    - Write-through persistence after every mutation

    Mutations are synchronous and the cart has a single owner, so no locking
    is done here.
    """

    def __init__(self, storage: Optional[CartStorage] = None):
        self._storage = storage or MemoryCartStorage()
        self._items: list[CartItem] = self._storage.load()

    @property
    def items(self) -> list[CartItem]:
        """Snapshot of the line items in insertion order."""
        return list(self._items)

    def _persist(self) -> None:
        # Fire-and-forget: a failed write never fails the mutation
        try:
            self._storage.save(self._items)
        except Exception as e:
            logger.warning(f"Failed to persist cart: {e}")

    # ==================== MUTATIONS ====================

    def add_item(self, item: CartItem) -> CartItem:
        """Insert a line item, merging quantity into an existing one with the same merge key."""
        if not item.qty:
            item.qty = 1

        key = item.merge_key
        existing = next((i for i in self._items if i.merge_key == key), None)
        if existing:
            existing.qty += item.qty
            self._persist()
            return existing

        self._items.append(item)
        self._persist()
        return item

    def add_restaurant_item(
        self,
        item_id: str,
        name: str,
        price,
        quantity: int = 1,
        details: Optional[DetailsInput] = None,
        image_url: Optional[str] = None,
    ) -> CartItem:
        """Add a menu item. Catalog price is used as-is; category defaults to the item name."""
        if details is None:
            bag = {"category": name}
        else:
            _, bag = validate_details(RestaurantItemDetails, details)
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.RESTAURANT,
            name=name,
            price=to_decimal(price),
            qty=quantity,
            details=bag,
            image_url=image_url,
        ))

    def add_game_session(
        self,
        item_id: str,
        name: str,
        duration: int,
        session_type: str,
        image_url: Optional[str] = None,
    ) -> CartItem:
        details = GameSessionDetails(session_type=session_type, duration=duration)
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.GAME,
            name=name,
            price=pricing.game_session_price(session_type, duration),
            qty=1,
            details=details.to_bag(),
            image_url=image_url,
        ))

    def add_print_job(
        self,
        item_id: str,
        name: str,
        file_details: DetailsInput,
        image_url: Optional[str] = None,
    ) -> CartItem:
        details, bag = validate_details(PrintJobDetails, file_details)
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.PRINT,
            name=name,
            price=pricing.print_job_price(details.num_pages, details.print_options.color),
            qty=1,
            details=bag,
            image_url=image_url,
        ))

    def add_product(
        self,
        item_id: str,
        name: str,
        price,
        product_details: DetailsInput,
        image_url: Optional[str] = None,
    ) -> CartItem:
        details, bag = validate_details(ProductDetails, product_details)
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.ECOMMERCE,
            name=name,
            price=to_decimal(price),
            qty=1,
            details=bag,
            image_url=image_url,
        ))

    def add_delivery(
        self,
        item_id: str,
        name: str,
        delivery_details: DetailsInput,
        image_url: Optional[str] = None,
    ) -> CartItem:
        details, bag = validate_details(DeliveryDetails, delivery_details)
        price = pricing.delivery_price(
            details.package_size,
            details.estimated_distance,
            details.vehicle_type,
        )
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.LOGISTICS,
            name=name,
            price=price,
            qty=1,
            details=bag,
            image_url=image_url,
        ))

    def add_streaming_content(
        self,
        item_id: str,
        name: str,
        streaming_details: DetailsInput,
        image_url: Optional[str] = None,
    ) -> CartItem:
        details, bag = validate_details(StreamingDetails, streaming_details)
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.STREAMING,
            name=name,
            price=pricing.streaming_price(details.access_type),
            qty=1,
            details=bag,
            image_url=image_url,
        ))

    def add_download(
        self,
        item_id: str,
        name: str,
        download_details: DetailsInput,
        image_url: Optional[str] = None,
    ) -> CartItem:
        details, bag = validate_details(DownloadDetails, download_details)
        return self.add_item(CartItem(
            id=item_id,
            service_type=ServiceType.DOWNLOAD,
            name=name,
            price=pricing.download_price(details.file_type),
            qty=1,
            details=bag,
            image_url=image_url,
        ))

    def remove_item(self, item_id: str, service_type, details: Any = _ANY_DETAILS) -> int:
        """
        Remove line items matching (id, service type).

        Without ``details`` every variant of the pair is removed. With
        ``details`` only the line sharing that merge key goes.
        Returns the number of removed lines.
        """
        service_type = ServiceType(service_type)
        if details is _ANY_DETAILS:
            keep = [i for i in self._items if not i.matches(item_id, service_type)]
        else:
            key = (item_id, service_type, canonical_details(details))
            keep = [i for i in self._items if i.merge_key != key]

        removed = len(self._items) - len(keep)
        self._items = keep
        self._persist()
        return removed

    def update_quantity(
        self,
        item_id: str,
        service_type,
        quantity: int,
        details: Any = _ANY_DETAILS,
    ) -> Optional[CartItem]:
        """
        Set the quantity of the first line matching (id, service type).

        A quantity of zero or less removes that single line. Returns the
        updated line, or None when it was removed or nothing matched.
        """
        service_type = ServiceType(service_type)
        if details is _ANY_DETAILS:
            index = next(
                (idx for idx, i in enumerate(self._items) if i.matches(item_id, service_type)),
                None,
            )
        else:
            key = (item_id, service_type, canonical_details(details))
            index = next(
                (idx for idx, i in enumerate(self._items) if i.merge_key == key),
                None,
            )

        if index is None:
            return None

        if quantity <= 0:
            del self._items[index]
            self._persist()
            return None

        item = self._items[index]
        item.qty = quantity
        self._persist()
        return item

    def clear_cart(self) -> None:
        self._items = []
        self._persist()

    # ==================== QUERIES ====================

    def get_service_items(self, service_type) -> list[CartItem]:
        service_type = ServiceType(service_type)
        return [i for i in self._items if i.service_type == service_type]

    def get_service_total(self, service_type) -> Decimal:
        return total_of(i.line_total for i in self.get_service_items(service_type))

    def get_total_amount(self) -> Decimal:
        return total_of(i.line_total for i in self._items)

    def get_total_items(self) -> int:
        return sum(i.qty for i in self._items)

    def get_item_count(self, service_type) -> int:
        return sum(i.qty for i in self.get_service_items(service_type))

    def has_items(self) -> bool:
        return len(self._items) > 0

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def group_by_service(self) -> dict[ServiceType, list[CartItem]]:
        """Line items grouped by service, services in order of first appearance."""
        groups: dict[ServiceType, list[CartItem]] = {}
        for item in self._items:
            groups.setdefault(item.service_type, []).append(item)
        return groups

    def to_list(self) -> list[dict]:
        """Items in the persisted / checkout shape."""
        return [item.to_dict() for item in self._items]
