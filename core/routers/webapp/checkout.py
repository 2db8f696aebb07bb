"""
WebApp Checkout Router

Checkout hand-off and the bank-transfer payment workflow.
"""
from fastapi import APIRouter, Depends, HTTPException

from core.cart import UnifiedCart
from core.errors import ERROR_INTERNAL, CheckoutError, OrderNotFoundError
from core.logging import get_logger
from core.routers.deps import get_checkout_service, get_session_cart, get_status_service
from core.services.models import Order
from core.services.money import to_float
from .models import CheckoutRequest, ConfirmPaymentRequest, UpdateOrderStatusRequest, VerifyPaymentRequest

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-orders"])


def _order_response(order: Order) -> dict:
    return {
        "orderId": order.id,
        "orderIdDisplay": order.order_id_display,
        "amount": to_float(order.total_amount),
        "status": order.status,
        "paymentStatus": order.payment_status,
    }


def _raise_for(e: Exception, action: str):
    if isinstance(e, OrderNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (CheckoutError, ValueError)):
        raise HTTPException(status_code=400, detail=str(e))
    logger.error(f"Failed to {action}: {e}", exc_info=True)
    raise HTTPException(status_code=500, detail=ERROR_INTERNAL)


@router.post("/orders/checkout", status_code=201)
async def checkout(
    request: CheckoutRequest,
    cart: UnifiedCart = Depends(get_session_cart),
    service=Depends(get_checkout_service),
):
    """Create a pending order from the session's cart."""
    try:
        order = await service.create_order(cart, user_id=request.user_id, username=request.username)
    except Exception as e:
        _raise_for(e, "create order")
    return _order_response(order)


@router.post("/orders/{order_id}/confirm-payment")
async def confirm_payment(
    order_id: str,
    request: ConfirmPaymentRequest,
    cart: UnifiedCart = Depends(get_session_cart),
    service=Depends(get_checkout_service),
):
    """Customer reports the transfer; clears the session cart."""
    try:
        order = await service.confirm_payment(order_id, cart, reference=request.reference)
    except Exception as e:
        _raise_for(e, "confirm payment")
    return {"message": "Payment confirmation submitted", **_order_response(order)}


@router.post("/orders/{order_id}/verify")
async def verify_payment(
    order_id: str,
    request: VerifyPaymentRequest,
    service=Depends(get_checkout_service),
):
    try:
        order = await service.verify_payment(order_id, request.verified)
    except Exception as e:
        _raise_for(e, "verify payment")

    message = "Payment verified, order confirmed" if request.verified else "Payment not verified"
    return {"message": message, "notes": request.notes, **_order_response(order)}


@router.put("/orders/{order_id}/status")
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    service=Depends(get_status_service),
):
    try:
        order = await service.update_status(order_id, request.status)
    except Exception as e:
        _raise_for(e, "update order status")
    return _order_response(order)
