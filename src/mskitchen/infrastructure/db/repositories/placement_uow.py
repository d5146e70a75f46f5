from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, func, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from mskitchen.application.ports.repositories import (
    DuplicateCustomerError,
    OrderPlacementUnitOfWork,
    PlacementTransaction,
    TransactionConflictError,
)
from mskitchen.domain.common.ids import CustomerId, MenuId, MenuItemId
from mskitchen.domain.customer.entities import Customer
from mskitchen.domain.menu.entities import MenuItem
from mskitchen.domain.order.entities import Order
from mskitchen.infrastructure.db.models.customer import CustomerModel
from mskitchen.infrastructure.db.models.menu import MenuItemModel, MenuModel
from mskitchen.infrastructure.db.repositories.converters import (
    customer_to_domain,
    customer_to_model,
    menu_item_to_domain,
    order_to_model,
)
from mskitchen.infrastructure.db.session import get_engine

# serialization_failure, deadlock_detected
_CONFLICT_SQLSTATES = frozenset({"40001", "40P01"})


def _is_transaction_conflict(exc: DBAPIError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return sqlstate in _CONFLICT_SQLSTATES


class SqlAlchemyPlacementTransaction(PlacementTransaction):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_customer(self, customer_id: CustomerId) -> Customer | None:
        statement = select(CustomerModel).where(CustomerModel.id == str(customer_id))
        model = self._session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return customer_to_domain(model)

    def get_customer_by_whatsapp_number(self, whatsapp_number: str) -> Customer | None:
        statement = select(CustomerModel).where(CustomerModel.whatsapp_number == whatsapp_number)
        model = self._session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return customer_to_domain(model)

    def add_customer(self, customer: Customer) -> None:
        self._session.add(customer_to_model(customer))
        try:
            self._session.flush()
        except IntegrityError as exc:
            raise DuplicateCustomerError(
                f"customer with WhatsApp number {customer.whatsapp_number} already exists"
            ) from exc

    def menu_exists(self, menu_id: MenuId) -> bool:
        statement = select(MenuModel.id).where(MenuModel.id == str(menu_id)).limit(1)
        return self._session.execute(statement).scalar_one_or_none() is not None

    def lock_menu_items(
        self,
        menu_id: MenuId,
        item_ids: list[MenuItemId],
    ) -> dict[MenuItemId, MenuItem]:
        if not item_ids:
            return {}
        statement = (
            select(MenuItemModel)
            .where(
                MenuItemModel.menu_id == str(menu_id),
                MenuItemModel.id.in_([str(item_id) for item_id in item_ids]),
            )
            .order_by(MenuItemModel.id)
            .with_for_update()
        )
        models = self._session.execute(statement).scalars().all()
        return {MenuItemId(model.id): menu_item_to_domain(model) for model in models}

    def add_order(self, order: Order) -> None:
        self._session.add(order_to_model(order))
        self._session.flush()

    def record_sale(self, item_id: MenuItemId, quantity: int) -> None:
        statement = (
            update(MenuItemModel)
            .where(
                MenuItemModel.id == str(item_id),
                MenuItemModel.quantity_available >= quantity,
            )
            .values(
                quantity_available=MenuItemModel.quantity_available - quantity,
                quantity_sold=MenuItemModel.quantity_sold + quantity,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = self._session.execute(statement)
        if result.rowcount != 1:
            raise TransactionConflictError(f"stock for menu item {item_id} changed concurrently")


class SqlAlchemyOrderPlacementUnitOfWork(OrderPlacementUnitOfWork):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    @contextmanager
    def begin(self) -> Iterator[PlacementTransaction]:
        try:
            with Session(self._engine) as session, session.begin():
                yield SqlAlchemyPlacementTransaction(session)
        except DBAPIError as exc:
            if _is_transaction_conflict(exc):
                raise TransactionConflictError(
                    "order placement conflicted with another transaction"
                ) from exc
            raise
