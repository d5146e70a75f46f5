from __future__ import annotations

from datetime import date

from mskitchen.application.dto.responses import OrderListResponse
from mskitchen.application.mappers.order_mapper import to_order_response
from mskitchen.application.ports.repositories import OrderRepository
from mskitchen.domain.common.ids import MenuId
from mskitchen.domain.common.period import DatePeriod
from mskitchen.domain.order.entities import OrderStatus, PaymentStatus


class InvalidOrderFilterError(Exception):
    pass


def _parse_status(value: str | None) -> OrderStatus | None:
    if value is None:
        return None
    try:
        return OrderStatus(value.lower())
    except ValueError as exc:
        raise InvalidOrderFilterError(f"invalid order status: {value}") from exc


def _parse_payment_status(value: str | None) -> PaymentStatus | None:
    if value is None:
        return None
    try:
        return PaymentStatus(value.lower())
    except ValueError as exc:
        raise InvalidOrderFilterError(f"invalid payment status: {value}") from exc


def _parse_period(start_date: date | None, end_date: date | None) -> DatePeriod:
    try:
        return DatePeriod(start=start_date, end=end_date)
    except ValueError as exc:
        raise InvalidOrderFilterError(str(exc)) from exc


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(
        self,
        *,
        status: str | None = None,
        payment_status: str | None = None,
        menu_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> OrderListResponse:
        orders = self._order_repository.list_orders(
            status=_parse_status(status),
            payment_status=_parse_payment_status(payment_status),
            menu_id=MenuId(menu_id) if menu_id else None,
            period=_parse_period(start_date, end_date),
        )
        return OrderListResponse(orders=[to_order_response(order) for order in orders])
