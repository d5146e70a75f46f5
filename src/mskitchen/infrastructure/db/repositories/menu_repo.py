from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from mskitchen.application.ports.repositories import (
    DuplicateMenuDateError,
    MenuRepository,
    MenuSummaryData,
)
from mskitchen.domain.common.ids import MenuId, MenuItemId
from mskitchen.domain.common.money import Money
from mskitchen.domain.menu.entities import Menu, MenuItem
from mskitchen.infrastructure.db.models.menu import MenuItemModel, MenuModel
from mskitchen.infrastructure.db.models.order import OrderModel
from mskitchen.infrastructure.db.repositories.converters import (
    menu_item_to_domain,
    menu_to_domain,
    menu_to_model,
)
from mskitchen.infrastructure.db.session import get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, menu_id: MenuId) -> Menu | None:
        statement = (
            select(MenuModel)
            .options(selectinload(MenuModel.items))
            .where(MenuModel.id == str(menu_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return menu_to_domain(model)

    def get_by_date(self, menu_date: date) -> Menu | None:
        statement = (
            select(MenuModel)
            .options(selectinload(MenuModel.items))
            .where(MenuModel.menu_date == menu_date)
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return menu_to_domain(model)

    def add(self, menu: Menu) -> None:
        with Session(self._engine) as session:
            session.add(menu_to_model(menu))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateMenuDateError(
                    f"menu already exists for date {menu.menu_date.isoformat()}"
                ) from exc

    def list_with_totals(self) -> list[MenuSummaryData]:
        statement = (
            select(
                MenuModel,
                func.count(func.distinct(OrderModel.id)),
                func.coalesce(func.sum(OrderModel.order_value), 0),
            )
            .outerjoin(OrderModel, OrderModel.menu_id == MenuModel.id)
            .options(selectinload(MenuModel.items))
            .group_by(MenuModel.id)
            .order_by(MenuModel.menu_date.desc())
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
            return [
                MenuSummaryData(
                    menu=menu_to_domain(model),
                    total_orders=int(order_count or 0),
                    total_revenue=Decimal(str(revenue or 0)).quantize(Decimal("0.01")),
                )
                for model, order_count, revenue in rows
            ]

    def get_item(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._engine) as session:
            model = session.get(MenuItemModel, str(item_id))
            if model is None:
                return None
            return menu_item_to_domain(model)

    def update_item(
        self,
        menu_id: MenuId,
        item_id: MenuItemId,
        price: Decimal | None,
        quantity_available: int | None,
    ) -> MenuItem | None:
        statement = (
            select(MenuItemModel)
            .where(
                MenuItemModel.id == str(item_id),
                MenuItemModel.menu_id == str(menu_id),
            )
            .with_for_update()
        )
        with Session(self._engine) as session, session.begin():
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            item = menu_item_to_domain(model)
            if price is not None:
                item = item.reprice(Money(amount=price, currency=item.price.currency))
                model.price = item.price.amount
            if quantity_available is not None:
                item = item.restock(quantity_available)
                model.quantity_available = item.quantity_available
            if price is not None or quantity_available is not None:
                model.updated_at = func.now()
            return item
