"""
Service Detail Models

Typed views of the per-service ``details`` bag carried by cart items.
The cart engine never looks inside ``details``; only the service-specific
add helpers use these models, to reject malformed input and to read the
fields a price depends on. The bag itself is stored as sent.

Key names are camelCase on the wire (``numPages``, ``printOptions``) to match
the payload the hub client sends and persists.
"""
import copy
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class _Details(BaseModel):
    class Config:
        populate_by_name = True
        extra = "allow"

    def to_bag(self) -> dict:
        """Dump to the plain dict stored on the cart item."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RestaurantItemDetails(_Details):
    category: str
    preparation_time: Optional[int] = Field(default=None, alias="preparationTime")
    special_instructions: Optional[str] = Field(default=None, alias="specialInstructions")


class GameSessionDetails(_Details):
    session_type: str = Field(alias="sessionType")  # casual | tournament | practice
    duration: int  # minutes
    opponent_type: Literal["random", "friend", "ai"] = Field(default="random", alias="opponentType")
    game_version: str = Field(default="FC26", alias="gameVersion")


class PrintOptions(_Details):
    color: bool = False
    duplex: bool = False
    binding: Literal["none", "staple", "spiral"] = "none"


class PrintJobDetails(_Details):
    file_name: str = Field(alias="fileName")
    file_size: int = Field(default=0, alias="fileSize")
    num_pages: int = Field(alias="numPages", ge=0)
    print_options: PrintOptions = Field(default_factory=PrintOptions, alias="printOptions")


class ProductDetails(_Details):
    category: str
    brand: str
    size: Optional[str] = None
    color: Optional[str] = None
    stock: int = 0


class DeliveryDetails(_Details):
    pickup_address: str = Field(alias="pickupAddress")
    delivery_address: str = Field(alias="deliveryAddress")
    package_size: Literal["small", "medium", "large"] = Field(alias="packageSize")
    vehicle_type: Literal["bike", "car", "van"] = Field(alias="vehicleType")
    estimated_distance: float = Field(alias="estimatedDistance", ge=0)


class StreamingDetails(_Details):
    type: Literal["podcast", "live_tv", "live_stream"]
    title: str
    duration: int = 0
    access_type: Literal["single", "subscription"] = Field(alias="accessType")
    content_id: Optional[str] = Field(default=None, alias="contentId")


class DownloadDetails(_Details):
    file_type: Literal["movie", "music", "pdf", "image", "software"] = Field(alias="fileType")
    file_size: int = Field(default=0, alias="fileSize")
    download_links: list[str] = Field(default_factory=list, alias="downloadLinks")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")


DetailsInput = Union[_Details, dict]


def validate_details(model: type[_Details], details: DetailsInput) -> tuple[_Details, dict]:
    """
    Check a details bag against its service model.

    Returns the typed view (for pricing) and the bag to store on the cart
    item. A dict is stored exactly as the caller sent it, so passing the same
    dict back to update_quantity / remove_item hits the same line. A model is
    stored with only the fields that were set.
    """
    if isinstance(details, _Details):
        bag = details.model_dump(mode="json", by_alias=True, exclude_unset=True)
    else:
        bag = copy.deepcopy(details)
    typed = details if isinstance(details, model) else model.model_validate(bag)
    return typed, bag
