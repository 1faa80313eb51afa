"""Pydantic models for the storefront HTTP payloads."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A purchasable item as stored in the catalog.

    Documents the response shape only; stored documents are returned as-is,
    extra fields (e.g. an image path) included. A missing availability
    means no stock.

    Attributes:
        id (str): Store-assigned identifier, serialized as ``_id``.
        name (str): Display name.
        location (str): Where the item is offered.
        price (float): Unit price.
        availability (int): Units left in stock.
    """

    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    location: Optional[str] = None
    price: Optional[Union[int, float]] = None
    availability: Optional[int] = None

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        json_schema_extra={
            "properties": {
                "_id": {"example": "6571f1c2a9b3e4d5f6a7b8c9"},
                "name": {"example": "Chess Club"},
                "location": {"example": "Hendon"},
                "price": {"example": 100},
                "availability": {"example": 5},
            }
        },
    )


class OrderRequest(BaseModel):
    """Body of ``POST /orders``.

    Fields are optional here so that missing customer details are reported by
    the order recorder as a 400 rather than by FastAPI as a 422.
    """

    name: Optional[str] = None
    phone: Optional[str] = None
    totalPrice: Any = None
    order: Any = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "phone": "07123456789",
                "totalPrice": 200,
                "order": [{"_id": "6571f1c2a9b3e4d5f6a7b8c9", "name": "Chess Club"}],
            }
        }
    )


class OrderCreated(BaseModel):
    message: str
    orderId: str


class ReservationRequest(BaseModel):
    """Body of ``PUT /products/updateAvailability``."""

    cart: Any = None

    model_config = ConfigDict(
        json_schema_extra={"example": {"cart": [{"_id": "6571f1c2a9b3e4d5f6a7b8c9"}]}}
    )


class Message(BaseModel):
    message: str
