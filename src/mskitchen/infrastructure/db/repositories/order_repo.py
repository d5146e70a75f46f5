from __future__ import annotations

from datetime import date

from sqlalchemy import Engine, func, select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from mskitchen.application.ports.repositories import OrderRepository, PendingPaymentData
from mskitchen.domain.common.ids import MenuId, OrderId
from mskitchen.domain.common.period import DatePeriod
from mskitchen.domain.order.entities import Order, OrderStatus, PaymentStatus
from mskitchen.infrastructure.db.models.menu import MenuModel
from mskitchen.infrastructure.db.models.order import OrderItemModel, OrderModel
from mskitchen.infrastructure.db.repositories.converters import order_to_domain
from mskitchen.infrastructure.db.session import get_engine


def _with_items(statement):
    return statement.options(selectinload(OrderModel.items).joinedload(OrderItemModel.menu_item))


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, order_id: OrderId) -> Order | None:
        statement = _with_items(select(OrderModel).where(OrderModel.id == str(order_id)).limit(1))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return order_to_domain(model)

    def list_orders(
        self,
        status: OrderStatus | None,
        payment_status: PaymentStatus | None,
        menu_id: MenuId | None,
        period: DatePeriod,
    ) -> list[Order]:
        statement = select(OrderModel)
        if period.starts_at is not None:
            statement = statement.where(OrderModel.created_at >= period.starts_at)
        if period.ends_before is not None:
            statement = statement.where(OrderModel.created_at < period.ends_before)
        if status is not None:
            statement = statement.where(OrderModel.status == status.value)
        if payment_status is not None:
            statement = statement.where(OrderModel.payment_status == payment_status.value)
        if menu_id is not None:
            statement = statement.where(OrderModel.menu_id == str(menu_id))
        statement = _with_items(statement.order_by(OrderModel.created_at.desc(), OrderModel.id))

        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [order_to_domain(model) for model in models]

    def update_payment(self, order: Order) -> None:
        statement = (
            update(OrderModel)
            .where(OrderModel.id == str(order.order_id))
            .values(
                payment_status=order.payment_status.value,
                payment_confirmed_at=order.payment_confirmed_at,
                updated_at=func.now(),
            )
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def list_pending_payments(self, menu_date: date) -> list[PendingPaymentData]:
        statement = _with_items(
            select(OrderModel)
            .join(MenuModel, MenuModel.id == OrderModel.menu_id)
            .options(joinedload(OrderModel.customer))
            .where(
                MenuModel.menu_date == menu_date,
                OrderModel.payment_status == PaymentStatus.PENDING.value,
            )
            .order_by(OrderModel.created_at, OrderModel.id)
        )
        with Session(self._engine) as session:
            models = session.execute(statement).unique().scalars().all()
            return [
                PendingPaymentData(
                    order_id=OrderId(model.id),
                    order_value=model.order_value,
                    currency=model.currency,
                    menu_date=menu_date,
                    whatsapp_number=model.customer.whatsapp_number,
                    address=model.customer.address,
                    customer_name=model.customer.name,
                    items_summary=order_to_domain(model).items_summary,
                )
                for model in models
            ]
