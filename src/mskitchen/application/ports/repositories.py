from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Protocol

from mskitchen.domain.common.ids import CustomerId, MenuId, MenuItemId, OrderId, ReviewId
from mskitchen.domain.common.money import Money
from mskitchen.domain.common.period import DatePeriod
from mskitchen.domain.customer.entities import Customer
from mskitchen.domain.menu.entities import Menu, MenuItem
from mskitchen.domain.order.entities import Order, OrderStatus, PaymentStatus
from mskitchen.domain.review.entities import Review


class MenuRepository(Protocol):
    def get(self, menu_id: MenuId) -> Menu | None: ...

    def get_by_date(self, menu_date: date) -> Menu | None: ...

    def add(self, menu: Menu) -> None: ...

    def list_with_totals(self) -> list[MenuSummaryData]: ...

    def get_item(self, item_id: MenuItemId) -> MenuItem | None: ...

    def update_item(
        self,
        menu_id: MenuId,
        item_id: MenuItemId,
        price: Decimal | None,
        quantity_available: int | None,
    ) -> MenuItem | None: ...


class CustomerRepository(Protocol):
    def get(self, customer_id: CustomerId) -> Customer | None: ...

    def get_by_whatsapp_number(self, whatsapp_number: str) -> Customer | None: ...

    def add(self, customer: Customer) -> None: ...

    def update(self, customer: Customer) -> None: ...

    def list_with_totals(self) -> list[CustomerSummaryData]: ...


class OrderRepository(Protocol):
    def get(self, order_id: OrderId) -> Order | None: ...

    def list_orders(
        self,
        status: OrderStatus | None,
        payment_status: PaymentStatus | None,
        menu_id: MenuId | None,
        period: DatePeriod,
    ) -> list[Order]: ...

    def update_payment(self, order: Order) -> None: ...

    def list_pending_payments(self, menu_date: date) -> list[PendingPaymentData]: ...


class ReviewRepository(Protocol):
    def get(self, review_id: ReviewId) -> Review | None: ...

    def exists_for(self, order_id: OrderId, customer_id: CustomerId) -> bool: ...

    def add(self, review: Review) -> None: ...

    def list_reviews(self, filters: ReviewFilters) -> list[ReviewDetailData]: ...

    def item_ratings(self, period: DatePeriod) -> list[ItemRatingData]: ...


class ReportRepository(Protocol):
    def customer_order_values(self, period: DatePeriod) -> list[CustomerOrderValueData]: ...

    def item_order_counts(self, period: DatePeriod) -> list[ItemOrderCountData]: ...


class PlacementTransaction(Protocol):
    def get_customer(self, customer_id: CustomerId) -> Customer | None: ...

    def get_customer_by_whatsapp_number(self, whatsapp_number: str) -> Customer | None: ...

    def add_customer(self, customer: Customer) -> None: ...

    def menu_exists(self, menu_id: MenuId) -> bool: ...

    def lock_menu_items(
        self,
        menu_id: MenuId,
        item_ids: list[MenuItemId],
    ) -> dict[MenuItemId, MenuItem]: ...

    def add_order(self, order: Order) -> None: ...

    def record_sale(self, item_id: MenuItemId, quantity: int) -> None: ...


class OrderPlacementUnitOfWork(Protocol):
    def begin(self) -> AbstractContextManager[PlacementTransaction]: ...


class DuplicateCustomerError(Exception):
    pass


class DuplicateMenuDateError(Exception):
    pass


class DuplicateReviewError(Exception):
    pass


class TransactionConflictError(Exception):
    pass


class MissingReferenceError(Exception):
    pass


@dataclass(frozen=True)
class MenuSummaryData:
    menu: Menu
    total_orders: int
    total_revenue: Decimal


@dataclass(frozen=True)
class PendingPaymentData:
    order_id: OrderId
    order_value: Decimal
    currency: str
    menu_date: date
    whatsapp_number: str
    address: str
    customer_name: str | None
    items_summary: str

    @property
    def order_money(self) -> Money:
        return Money(amount=self.order_value, currency=self.currency)


@dataclass(frozen=True)
class ItemRatingData:
    menu_item_id: MenuItemId
    menu_item_name: str
    review_count: int
    average_rating: Decimal


@dataclass(frozen=True)
class CustomerSummaryData:
    customer: Customer
    total_orders: int
    totals_spent: list[Money]


@dataclass(frozen=True)
class ReviewFilters:
    period: DatePeriod = field(default_factory=DatePeriod)
    menu_item_id: MenuItemId | None = None
    min_rating: int | None = None


@dataclass(frozen=True)
class ReviewDetailData:
    review: Review
    customer_whatsapp: str
    customer_name: str | None
    menu_item_name: str | None
    order_value: Money


@dataclass(frozen=True)
class CustomerOrderValueData:
    customer_id: CustomerId
    whatsapp_number: str
    name: str | None
    address: str
    total_orders: int
    total_value: Money


@dataclass(frozen=True)
class ItemOrderCountData:
    menu_item_id: MenuItemId
    name: str
    order_count: int
    total_quantity: int
    total_revenue: Money
