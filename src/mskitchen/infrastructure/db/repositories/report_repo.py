from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Engine, func, select
from sqlalchemy.orm import Session

from mskitchen.application.ports.repositories import (
    CustomerOrderValueData,
    ItemOrderCountData,
    ReportRepository,
)
from mskitchen.domain.common.ids import CustomerId, MenuItemId
from mskitchen.domain.common.money import CENT, Money
from mskitchen.domain.common.period import DatePeriod
from mskitchen.infrastructure.db.models.customer import CustomerModel
from mskitchen.infrastructure.db.models.menu import MenuItemModel
from mskitchen.infrastructure.db.models.order import OrderItemModel, OrderModel
from mskitchen.infrastructure.db.session import get_engine


def _within(statement, period: DatePeriod):
    if period.starts_at is not None:
        statement = statement.where(OrderModel.created_at >= period.starts_at)
    if period.ends_before is not None:
        statement = statement.where(OrderModel.created_at < period.ends_before)
    return statement


def _money(amount: object, currency: str) -> Money:
    return Money(amount=Decimal(str(amount or 0)).quantize(CENT), currency=currency)


class SqlAlchemyReportRepository(ReportRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def customer_order_values(self, period: DatePeriod) -> list[CustomerOrderValueData]:
        total_orders = func.count(func.distinct(OrderModel.id))
        total_value = func.coalesce(func.sum(OrderModel.order_value), 0)
        statement = _within(
            select(
                CustomerModel.id,
                CustomerModel.whatsapp_number,
                CustomerModel.name,
                CustomerModel.address,
                OrderModel.currency,
                total_orders,
                total_value,
            ).join(OrderModel, OrderModel.customer_id == CustomerModel.id),
            period,
        )
        statement = statement.group_by(CustomerModel.id, OrderModel.currency).order_by(
            total_value.desc(),
            CustomerModel.id,
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return [
            CustomerOrderValueData(
                customer_id=CustomerId(customer_id),
                whatsapp_number=whatsapp_number,
                name=name,
                address=address,
                total_orders=int(order_count),
                total_value=_money(value, currency),
            )
            for customer_id, whatsapp_number, name, address, currency, order_count, value in rows
        ]

    def item_order_counts(self, period: DatePeriod) -> list[ItemOrderCountData]:
        order_count = func.count(OrderItemModel.id)
        statement = _within(
            select(
                MenuItemModel.id,
                MenuItemModel.name,
                MenuItemModel.currency,
                order_count,
                func.coalesce(func.sum(OrderItemModel.quantity), 0),
                func.coalesce(func.sum(OrderItemModel.subtotal), 0),
            )
            .join(OrderItemModel, OrderItemModel.menu_item_id == MenuItemModel.id)
            .join(OrderModel, OrderModel.id == OrderItemModel.order_id),
            period,
        )
        statement = statement.group_by(
            MenuItemModel.id,
            MenuItemModel.name,
            MenuItemModel.currency,
        ).order_by(order_count.desc(), MenuItemModel.id)
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return [
            ItemOrderCountData(
                menu_item_id=MenuItemId(item_id),
                name=name,
                order_count=int(count),
                total_quantity=int(quantity),
                total_revenue=_money(revenue, currency),
            )
            for item_id, name, currency, count, quantity, revenue in rows
        ]
