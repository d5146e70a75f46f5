from __future__ import annotations

import concurrent.futures
import secrets
import threading
import time
from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db_helpers import create_menu, item_id
from mskitchen.api.main import app
from mskitchen.application.dto.requests import PlaceOrderLineRequest, PlaceOrderRequest
from mskitchen.application.use_cases.place_order import (
    InsufficientStockError,
    OrderConflictError,
    PlaceOrder,
)
from mskitchen.domain.common.ids import MenuId, MenuItemId
from mskitchen.infrastructure.db.models.customer import CustomerModel
from mskitchen.infrastructure.db.models.menu import MenuItemModel
from mskitchen.infrastructure.db.models.order import OrderModel
from mskitchen.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from mskitchen.infrastructure.db.repositories.placement_uow import (
    SqlAlchemyOrderPlacementUnitOfWork,
)
from mskitchen.infrastructure.db.session import get_engine
from mskitchen.infrastructure.notifications.twilio_whatsapp import UnconfiguredNotifier


def test_last_unit_is_sold_exactly_once(menu_date: date) -> None:
    with TestClient(app) as client:
        menu = create_menu(client, menu_date, [("Dal", "50.00", 1)])
    dal_id = item_id(menu, "Dal")

    use_case = PlaceOrder(
        unit_of_work=SqlAlchemyOrderPlacementUnitOfWork(),
        notifier=UnconfiguredNotifier(),
        kitchen_whatsapp_number=None,
    )

    def _place(_: int) -> str:
        request = PlaceOrderRequest(
            menu_id=menu["menuId"],
            contact=f"+91{secrets.randbelow(10**10):010d}",
            address="7 Park Street",
            items=[PlaceOrderLineRequest(item_id=dal_id, quantity=1)],
        )
        try:
            use_case.execute(request)
            return "PLACED"
        except (InsufficientStockError, OrderConflictError):
            return "REJECTED"

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        results = list(executor.map(_place, [0, 1]))

    assert sorted(results) == ["PLACED", "REJECTED"]
    with Session(get_engine()) as session:
        item = session.get(MenuItemModel, dal_id)
        assert item is not None
        assert (item.quantity_available, item.quantity_sold) == (0, 1)


def test_first_orders_from_one_new_contact_create_one_customer(menu_date: date) -> None:
    with TestClient(app) as client:
        menu = create_menu(client, menu_date, [("Dal", "50.00", 10)])
    dal_id = item_id(menu, "Dal")
    contact = f"+91{secrets.randbelow(10**10):010d}"
    barrier = threading.Barrier(2)

    use_case = PlaceOrder(
        unit_of_work=SqlAlchemyOrderPlacementUnitOfWork(),
        notifier=UnconfiguredNotifier(),
        kitchen_whatsapp_number=None,
    )

    def _place(_: int) -> str:
        request = PlaceOrderRequest(
            menu_id=menu["menuId"],
            contact=contact,
            address="7 Park Street",
            items=[PlaceOrderLineRequest(item_id=dal_id, quantity=1)],
        )
        barrier.wait(timeout=10)
        try:
            use_case.execute(request)
            return "PLACED"
        except OrderConflictError:
            return "REJECTED"

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        results = list(executor.map(_place, [0, 1]))

    placed = results.count("PLACED")
    assert placed >= 1
    assert set(results) <= {"PLACED", "REJECTED"}
    with Session(get_engine()) as session:
        customer_ids = session.scalars(
            select(CustomerModel.id).where(CustomerModel.whatsapp_number == contact)
        ).all()
        assert len(customer_ids) == 1
        order_count = session.scalar(
            select(func.count())
            .select_from(OrderModel)
            .where(OrderModel.customer_id == customer_ids[0])
        )
        assert order_count == placed
        item = session.get(MenuItemModel, dal_id)
        assert item is not None
        assert (item.quantity_available, item.quantity_sold) == (10 - placed, placed)


def test_price_update_keeps_a_sale_committed_while_it_waited(menu_date: date) -> None:
    with TestClient(app) as client:
        menu = create_menu(client, menu_date, [("Dal", "50.00", 10)])
    dal_id = item_id(menu, "Dal")
    repository = SqlAlchemyMenuRepository()
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)

    try:
        with Session(get_engine()) as session, session.begin():
            locked = session.execute(
                select(MenuItemModel).where(MenuItemModel.id == dal_id).with_for_update()
            ).scalar_one()
            update = executor.submit(
                repository.update_item,
                MenuId(menu["menuId"]),
                MenuItemId(dal_id),
                Decimal("60.00"),
                None,
            )
            time.sleep(0.3)
            assert not update.done()
            locked.quantity_available -= 3
            locked.quantity_sold += 3
        updated = update.result(timeout=10)
    finally:
        executor.shutdown(wait=True)

    assert updated is not None
    assert (updated.quantity_available, updated.quantity_sold) == (7, 3)
    with Session(get_engine()) as session:
        item = session.get(MenuItemModel, dal_id)
        assert item is not None
        assert (item.quantity_available, item.quantity_sold) == (7, 3)
        assert item.price == Decimal("60.00")
