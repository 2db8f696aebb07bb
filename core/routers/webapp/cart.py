"""
WebApp Cart Router

Unified cart endpoints. The cart is scoped to the X-Session-Id header and
persisted after every mutation. Handlers are plain functions: cart storage
calls are blocking, so FastAPI runs them in its threadpool.

Response format:
- items in client shape (id, serviceType, name, price, qty, details)
- per-service totals and counts for the services present
- grand totals
"""
import json
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core.cart import SERVICE_LABELS, CartItem, ServiceType, UnifiedCart
from core.logging import get_logger
from core.routers.deps import get_session_cart
from core.services.money import to_float
from .models import (
    AddCartItemRequest,
    AddDetailsRequest,
    AddGameSessionRequest,
    AddPrintJobRequest,
    AddProductRequest,
    AddRestaurantItemRequest,
    UpdateCartItemRequest,
)

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-cart"])


def _format_cart_response(cart: UnifiedCart) -> dict:
    items = []
    for item in cart.items:
        data = item.to_dict()
        data["price"] = to_float(item.price)
        data["lineTotal"] = to_float(item.line_total)
        items.append(data)

    services = {
        service.value: {
            "label": SERVICE_LABELS[service],
            "total": to_float(cart.get_service_total(service)),
            "count": cart.get_item_count(service),
        }
        for service in cart.group_by_service()
    }

    return {
        "items": items,
        "services": services,
        "totalItems": cart.get_total_items(),
        "totalAmount": to_float(cart.get_total_amount()),
        "isEmpty": cart.is_empty(),
    }


def _run_add(cart: UnifiedCart, add: Callable[[], object]) -> dict:
    """Apply an add and map bad details to 400."""
    try:
        add()
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except Exception as e:
        logger.error(f"Failed to add to cart: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add item to cart")
    return _format_cart_response(cart)


@router.get("/cart")
def get_cart(cart: UnifiedCart = Depends(get_session_cart)):
    """Get the session's cart."""
    return _format_cart_response(cart)


@router.get("/cart/summary")
def get_cart_summary(cart: UnifiedCart = Depends(get_session_cart)):
    """Order review: lines grouped per service, in order of first appearance."""
    groups = [
        {
            "serviceType": service.value,
            "label": SERVICE_LABELS[service],
            "items": [
                {"name": item.name, "qty": item.qty, "lineTotal": to_float(item.line_total)}
                for item in items
            ],
            "total": to_float(cart.get_service_total(service)),
        }
        for service, items in cart.group_by_service().items()
    ]
    return {"groups": groups, "totalAmount": to_float(cart.get_total_amount())}


@router.post("/cart/items")
def add_cart_item(request: AddCartItemRequest, cart: UnifiedCart = Depends(get_session_cart)):
    """Add a pre-priced line item (price taken as given)."""
    return _run_add(cart, lambda: cart.add_item(CartItem(
        id=request.id,
        service_type=request.service_type,
        name=request.name,
        price=request.price,
        qty=request.qty,
        details=request.details,
        image_url=request.image_url,
    )))


@router.post("/cart/restaurant")
def add_restaurant_item(request: AddRestaurantItemRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_restaurant_item(
        request.id, request.name, request.price,
        quantity=request.quantity, details=request.details, image_url=request.image_url,
    ))


@router.post("/cart/game")
def add_game_session(request: AddGameSessionRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_game_session(
        request.id, request.name, request.duration, request.session_type, image_url=request.image_url,
    ))


@router.post("/cart/print")
def add_print_job(request: AddPrintJobRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_print_job(
        request.id, request.name, request.details, image_url=request.image_url,
    ))


@router.post("/cart/product")
def add_product(request: AddProductRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_product(
        request.id, request.name, request.price, request.details, image_url=request.image_url,
    ))


@router.post("/cart/delivery")
def add_delivery(request: AddDetailsRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_delivery(
        request.id, request.name, request.details, image_url=request.image_url,
    ))


@router.post("/cart/streaming")
def add_streaming_content(request: AddDetailsRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_streaming_content(
        request.id, request.name, request.details, image_url=request.image_url,
    ))


@router.post("/cart/download")
def add_download(request: AddDetailsRequest, cart: UnifiedCart = Depends(get_session_cart)):
    return _run_add(cart, lambda: cart.add_download(
        request.id, request.name, request.details, image_url=request.image_url,
    ))


@router.patch("/cart/item")
def update_cart_item(request: UpdateCartItemRequest, cart: UnifiedCart = Depends(get_session_cart)):
    """Update line quantity (0 = remove). Sending details targets one variant."""
    if "details" in request.model_fields_set:
        cart.update_quantity(request.id, request.service_type, request.qty, details=request.details)
    else:
        cart.update_quantity(request.id, request.service_type, request.qty)
    return _format_cart_response(cart)


@router.delete("/cart/item")
def remove_cart_item(
    item_id: str = Query(..., alias="id"),
    service_type: ServiceType = Query(..., alias="serviceType"),
    details: Optional[str] = Query(default=None, description="JSON details of the one variant to remove"),
    cart: UnifiedCart = Depends(get_session_cart),
):
    """Remove every line for (id, serviceType), or only the variant whose details are given."""
    if details is None:
        cart.remove_item(item_id, service_type)
    else:
        try:
            variant = json.loads(details)
        except json.JSONDecodeError:
            raise HTTPException(status_code=400, detail="details must be JSON")
        cart.remove_item(item_id, service_type, details=variant)
    return _format_cart_response(cart)


@router.delete("/cart")
def clear_cart(cart: UnifiedCart = Depends(get_session_cart)):
    cart.clear_cart()
    return _format_cart_response(cart)
