from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time

from mskitchen.domain.common.ids import MenuId, MenuItemId
from mskitchen.domain.common.money import Money


class StockExhaustedError(Exception):
    def __init__(self, item_id: MenuItemId, requested: int, available: int) -> None:
        super().__init__(
            f"insufficient quantity for menu item {item_id}: "
            f"requested={requested}, available={available}"
        )
        self.item_id = item_id
        self.requested = requested
        self.available = available


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    menu_id: MenuId
    name: str
    price: Money
    quantity_available: int
    quantity_sold: int = 0

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.quantity_available < 0:
            raise ValueError("quantity_available must be >= 0")
        if self.quantity_sold < 0:
            raise ValueError("quantity_sold must be >= 0")

    def sell(self, quantity: int) -> MenuItem:
        if quantity < 1:
            raise ValueError("quantity must be >= 1")
        if quantity > self.quantity_available:
            raise StockExhaustedError(
                item_id=self.item_id,
                requested=quantity,
                available=self.quantity_available,
            )
        return replace(
            self,
            quantity_available=self.quantity_available - quantity,
            quantity_sold=self.quantity_sold + quantity,
        )

    def reprice(self, price: Money) -> MenuItem:
        return replace(self, price=price)

    def restock(self, quantity_available: int) -> MenuItem:
        return replace(self, quantity_available=quantity_available)


@dataclass(frozen=True)
class Menu:
    menu_id: MenuId
    menu_date: date
    delivery_window_start: time
    delivery_window_end: time
    upi_phone_number: str
    items: list[MenuItem] = field(default_factory=list)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.upi_phone_number.strip():
            raise ValueError("upi_phone_number must be non-empty")
        for item in self.items:
            if item.menu_id != self.menu_id:
                raise ValueError(f"menu item {item.item_id} belongs to another menu")

    @property
    def delivery_window(self) -> str:
        return (
            f"{self.delivery_window_start.strftime('%H:%M')} - "
            f"{self.delivery_window_end.strftime('%H:%M')}"
        )
