from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Upper bound of the INTEGER stock columns.
MAX_QUANTITY = 2_147_483_647


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class PlaceOrderLineRequest(CamelBaseModel):
    item_id: str
    quantity: int = Field(le=MAX_QUANTITY)


class PlaceOrderRequest(CamelBaseModel):
    menu_id: str
    customer_id: str | None = None
    contact: str | None = None
    address: str | None = None
    name: str | None = None
    items: list[PlaceOrderLineRequest] = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _accept_whatsapp_number(cls, data: object) -> object:
        if isinstance(data, dict) and "contact" not in data and "whatsapp_number" in data:
            data = {**data, "contact": data["whatsapp_number"]}
        return data


class UpdatePaymentStatusRequest(CamelBaseModel):
    payment_status: str


class CreateMenuItemRequest(CamelBaseModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    quantity_available: int = Field(ge=0, le=MAX_QUANTITY)


class CreateMenuRequest(CamelBaseModel):
    menu_date: date = Field(alias="date")
    delivery_window_start: time
    delivery_window_end: time
    upi_phone_number: str = Field(min_length=1)
    items: list[CreateMenuItemRequest] = Field(default_factory=list)


class UpdateMenuItemRequest(CamelBaseModel):
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    quantity_available: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)


class SendMenuRequest(CamelBaseModel):
    customer_numbers: list[str] = Field(default_factory=list)


class RegisterCustomerRequest(CamelBaseModel):
    whatsapp_number: str = Field(min_length=1)
    address: str = Field(min_length=1)
    name: str | None = None


class UpdateCustomerRequest(CamelBaseModel):
    address: str | None = None
    name: str | None = None


class CreateReviewRequest(CamelBaseModel):
    order_id: str
    customer_id: str
    menu_item_id: str | None = None
    rating: int
    comments: str | None = None
