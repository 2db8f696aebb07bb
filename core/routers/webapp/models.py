"""
WebApp API Pydantic Models

Request bodies for the cart and checkout endpoints.
Field names are camelCase on the wire, matching the hub client.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field

from core.cart import ServiceType


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True


# ==================== CART MODELS ====================

class CatalogItem(_CamelModel):
    """Fields every add request carries."""
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class AddCartItemRequest(CatalogItem):
    service_type: ServiceType = Field(alias="serviceType")
    price: float = Field(..., ge=0)
    qty: Optional[int] = None
    details: Optional[dict[str, Any]] = None


class AddRestaurantItemRequest(CatalogItem):
    price: float = Field(..., ge=0)
    quantity: int = Field(default=1, ge=1)
    details: Optional[dict[str, Any]] = None


class AddGameSessionRequest(CatalogItem):
    duration: int = Field(..., ge=0)
    session_type: str = Field(alias="sessionType")


class AddPrintJobRequest(CatalogItem):
    details: dict[str, Any]


class AddProductRequest(CatalogItem):
    price: float = Field(..., ge=0)
    details: dict[str, Any]


class AddDetailsRequest(CatalogItem):
    """Delivery, streaming and download adds are priced from their details."""
    details: dict[str, Any]


class UpdateCartItemRequest(_CamelModel):
    id: str
    service_type: ServiceType = Field(alias="serviceType")
    qty: int  # 0 or less removes the line
    details: Optional[dict[str, Any]] = None


# ==================== ORDER MODELS ====================

class CheckoutRequest(_CamelModel):
    user_id: Optional[str] = Field(default=None, alias="userId")
    username: Optional[str] = None


class ConfirmPaymentRequest(_CamelModel):
    reference: Optional[str] = None


class VerifyPaymentRequest(_CamelModel):
    verified: bool
    notes: Optional[str] = None


class UpdateOrderStatusRequest(_CamelModel):
    status: str
