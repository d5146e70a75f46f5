from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Union

from mskitchen.domain.common.ids import CustomerId


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    whatsapp_number: str
    address: str
    name: str | None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.whatsapp_number.strip():
            raise ValueError("whatsapp_number must be non-empty")
        if not self.address.strip():
            raise ValueError("address must be non-empty")

    def with_details(self, address: str | None, name: str | None, now: datetime) -> Customer:
        return replace(
            self,
            address=address if address is not None else self.address,
            name=name if name is not None else self.name,
            updated_at=now,
        )


@dataclass(frozen=True)
class ExistingCustomer:
    customer_id: CustomerId


@dataclass(frozen=True)
class NewCustomerInfo:
    whatsapp_number: str
    address: str
    name: str | None = None


CustomerRef = Union[ExistingCustomer, NewCustomerInfo]


def new_customer(
    customer_id: CustomerId,
    info: NewCustomerInfo,
    now: datetime,
) -> Customer:
    return Customer(
        customer_id=customer_id,
        whatsapp_number=info.whatsapp_number.strip(),
        address=info.address.strip(),
        name=info.name,
        created_at=now,
        updated_at=now,
    )
