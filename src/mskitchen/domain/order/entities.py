from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from mskitchen.domain.common.ids import CustomerId, MenuId, MenuItemId, OrderId, OrderLineId
from mskitchen.domain.common.money import Money

# Largest amount a NUMERIC(10, 2) order or line column can hold.
MAX_ORDER_VALUE = Decimal("99999999.99")


class OrderValueTooLargeError(ValueError):
    def __init__(self, amount: Decimal) -> None:
        super().__init__(f"order value {amount} exceeds the maximum of {MAX_ORDER_VALUE}")
        self.amount = amount


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PAID = "paid"

    @property
    def is_settled(self) -> bool:
        return self in (PaymentStatus.CONFIRMED, PaymentStatus.PAID)


@dataclass(frozen=True)
class OrderLine:
    line_id: OrderLineId
    item_id: MenuItemId
    name: str
    quantity: int
    unit_price: Money
    subtotal: Money

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if self.unit_price.currency != self.subtotal.currency:
            raise ValueError("subtotal currency must match unit_price currency")
        if self.subtotal != self.unit_price.times(self.quantity):
            raise ValueError("subtotal must equal unit_price * quantity")


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    menu_id: MenuId
    customer_id: CustomerId
    status: OrderStatus
    payment_status: PaymentStatus
    lines: list[OrderLine]
    total: Money
    created_at: datetime
    payment_confirmed_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        currency = self.lines[0].subtotal.currency
        if self.total.currency != currency:
            raise ValueError("order total currency must match line currency")
        expected_total = sum(
            (line.subtotal for line in self.lines[1:]),
            start=self.lines[0].subtotal,
        )
        if self.total != expected_total:
            raise ValueError("order total must equal sum of line subtotals")
        if self.payment_status.is_settled != (self.payment_confirmed_at is not None):
            raise ValueError("payment_confirmed_at must be set iff payment is confirmed or paid")

    def with_payment_status(self, payment_status: PaymentStatus, now: datetime) -> Order:
        if payment_status == self.payment_status:
            return self
        confirmed_at: datetime | None = None
        if payment_status.is_settled:
            confirmed_at = self.payment_confirmed_at or now
        return replace(self, payment_status=payment_status, payment_confirmed_at=confirmed_at)

    @property
    def items_summary(self) -> str:
        return ", ".join(f"{line.name} x{line.quantity}" for line in self.lines)


def create_confirmed_order(
    order_id: OrderId,
    menu_id: MenuId,
    customer_id: CustomerId,
    lines: list[OrderLine],
    now: datetime,
) -> Order:
    if not lines:
        raise ValueError("order must contain at least one line")

    total = Money.zero(lines[0].subtotal.currency)
    for line in lines:
        total = total + line.subtotal
        if total.amount > MAX_ORDER_VALUE:
            raise OrderValueTooLargeError(total.amount)
    return Order(
        order_id=order_id,
        menu_id=menu_id,
        customer_id=customer_id,
        status=OrderStatus.CONFIRMED,
        payment_status=PaymentStatus.PENDING,
        lines=lines,
        total=total,
        created_at=now,
    )
