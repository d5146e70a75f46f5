from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

import mskitchen.api.routes.orders as orders_route
from kitchen_fakes import (
    DAL_ID,
    MENU_ID,
    PANEER_ID,
    FakeOrderPlacementUnitOfWork,
    FakeOrderRepository,
    InMemoryStore,
    RecordingNotifier,
    add_order,
    make_customer,
    make_item,
)
from mskitchen.api.main import app
from mskitchen.application.use_cases.get_order import GetOrder
from mskitchen.application.use_cases.list_orders import ListOrders
from mskitchen.application.use_cases.pending_payments import NotifyPendingPayments, PendingPayments
from mskitchen.application.use_cases.place_order import PlaceOrder
from mskitchen.application.use_cases.update_payment_status import UpdatePaymentStatus
from mskitchen.domain.common.ids import MenuItemId


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(store: InMemoryStore, notifier: RecordingNotifier) -> Iterator[TestClient]:
    repository = FakeOrderRepository(store)
    app.dependency_overrides[orders_route.place_order_use_case] = lambda: PlaceOrder(
        unit_of_work=FakeOrderPlacementUnitOfWork(store),
        notifier=notifier,
        kitchen_whatsapp_number="+919899999999",
    )
    app.dependency_overrides[orders_route.get_order_use_case] = lambda: GetOrder(repository)
    app.dependency_overrides[orders_route.list_orders_use_case] = lambda: ListOrders(repository)
    app.dependency_overrides[orders_route.update_payment_status_use_case] = (
        lambda: UpdatePaymentStatus(repository)
    )
    app.dependency_overrides[orders_route.pending_payments_use_case] = lambda: PendingPayments(
        repository
    )
    app.dependency_overrides[orders_route.notify_pending_payments_use_case] = (
        lambda: NotifyPendingPayments(
            order_repository=repository,
            notifier=notifier,
            kitchen_whatsapp_number=None,
        )
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _payload(quantity: int = 3, item_id: str = DAL_ID) -> dict[str, object]:
    return {
        "menuId": MENU_ID,
        "contact": "+919800000002",
        "address": "7 Park Street",
        "name": "Ravi",
        "items": [{"itemId": item_id, "quantity": quantity}],
    }


def test_place_order_returns_created_order(
    client: TestClient,
    store: InMemoryStore,
    notifier: RecordingNotifier,
) -> None:
    response = client.post("/v1/orders", json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "confirmed"
    assert body["paymentStatus"] == "pending"
    assert body["total"] == {"amount": "150.00", "currency": "INR"}
    assert body["lines"][0]["unitPrice"]["amount"] == "50.00"
    assert body["lines"][0]["itemName"] == "Dal"
    assert body["notified"] is True
    assert len(notifier.sent) == 1
    assert store.items[DAL_ID].quantity_available == 7


def test_place_order_accepts_snake_case_keys(client: TestClient) -> None:
    response = client.post(
        "/v1/orders",
        json={
            "menu_id": MENU_ID,
            "whatsapp_number": "+919800000002",
            "address": "7 Park Street",
            "items": [{"item_id": DAL_ID, "quantity": 1}],
        },
    )

    assert response.status_code == 201
    assert response.json()["total"]["amount"] == "50.00"


def test_place_order_insufficient_stock_is_structured_409(
    client: TestClient,
    store: InMemoryStore,
) -> None:
    response = client.post("/v1/orders", json=_payload(quantity=11))

    assert response.status_code == 409
    body = response.json()
    assert body["error"]["code"] == "INSUFFICIENT_STOCK"
    assert body["error"]["details"] == {"itemId": DAL_ID, "requested": 11, "available": 10}
    assert body["requestId"] == response.headers["X-Request-Id"]
    assert store.orders == {}


def test_place_order_item_of_other_menu_is_404(client: TestClient) -> None:
    response = client.post("/v1/orders", json=_payload(item_id=PANEER_ID))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ITEM_NOT_FOUND"
    assert response.json()["error"]["details"]["itemId"] == PANEER_ID


def test_place_order_unknown_menu_is_404(client: TestClient) -> None:
    payload = _payload()
    payload["menuId"] = "men_missing"

    response = client.post("/v1/orders", json=payload)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MENU_NOT_FOUND"


def test_place_order_without_customer_is_validation_error(client: TestClient) -> None:
    payload = _payload()
    del payload["contact"]

    response = client.post("/v1/orders", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_place_order_with_empty_items_is_invalid_request(client: TestClient) -> None:
    payload = _payload()
    payload["items"] = []

    response = client.post("/v1/orders", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_place_order_quantity_beyond_the_stock_column_is_invalid_request(
    client: TestClient,
    store: InMemoryStore,
) -> None:
    response = client.post("/v1/orders", json=_payload(quantity=2_147_483_648))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"
    assert store.orders == {}


def test_place_order_value_beyond_the_stored_maximum_is_validation_error(
    client: TestClient,
    store: InMemoryStore,
) -> None:
    feast_id = MenuItemId("itm_feast")
    store.items[feast_id] = make_item(feast_id, "Feast", "99999999.99", 5)

    response = client.post("/v1/orders", json=_payload(quantity=2, item_id=feast_id))

    assert response.status_code == 400
    body = response.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"] == {"maximum": "99999999.99"}
    assert store.orders == {}
    assert store.customers == {}


def test_get_and_list_orders(client: TestClient) -> None:
    placed = client.post("/v1/orders", json=_payload(quantity=1)).json()

    fetched = client.get(f"/v1/orders/{placed['orderId']}")
    listed = client.get("/v1/orders", params={"paymentStatus": "pending", "menuId": MENU_ID})

    assert fetched.status_code == 200
    assert fetched.json()["orderId"] == placed["orderId"]
    assert "notified" not in fetched.json()
    assert [order["orderId"] for order in listed.json()["orders"]] == [placed["orderId"]]


def test_list_orders_rejects_unknown_status(client: TestClient) -> None:
    response = client.get("/v1/orders", params={"status": "delivered"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ORDER_FILTER"


def test_list_orders_by_creation_date_range(client: TestClient, store: InMemoryStore) -> None:
    customer = make_customer()
    for order_id, day in (("ord_1", 20), ("ord_2", 22)):
        created_at = datetime(2026, 10, day, 9, tzinfo=timezone.utc)
        add_order(store, order_id, customer, [(DAL_ID, 1)], created_at)

    response = client.get("/v1/orders", params={"startDate": "2026-10-21", "endDate": "2026-10-22"})
    reversed_range = client.get(
        "/v1/orders", params={"startDate": "2026-10-22", "endDate": "2026-10-21"}
    )

    assert [order["orderId"] for order in response.json()["orders"]] == ["ord_2"]
    assert reversed_range.status_code == 400
    assert reversed_range.json()["error"]["code"] == "INVALID_ORDER_FILTER"


def test_get_missing_order_is_404(client: TestClient) -> None:
    response = client.get("/v1/orders/ord_missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"


def test_update_payment_status(client: TestClient) -> None:
    placed = client.post("/v1/orders", json=_payload(quantity=1)).json()

    response = client.put(
        f"/v1/orders/{placed['orderId']}/payment",
        json={"paymentStatus": "paid"},
    )

    assert response.status_code == 200
    assert response.json()["paymentStatus"] == "paid"
    assert response.json()["paymentConfirmedAt"] is not None


def test_update_payment_status_rejects_unknown_value(client: TestClient) -> None:
    placed = client.post("/v1/orders", json=_payload(quantity=1)).json()

    response = client.put(
        f"/v1/orders/{placed['orderId']}/payment",
        json={"paymentStatus": "refunded"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAYMENT_STATUS"


def test_pending_payments_for_date(client: TestClient, store: InMemoryStore) -> None:
    add_order(
        store,
        "ord_1",
        make_customer(),
        [(DAL_ID, 2)],
        datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc),
    )

    response = client.get("/v1/orders/pending-payments/2026-10-20")

    assert response.status_code == 200
    body = response.json()
    assert [payment["orderId"] for payment in body["payments"]] == ["ord_1"]
    assert body["payments"][0]["orderItems"] == "Dal x2"
    assert body["totalPending"] == [{"amount": "100.00", "currency": "INR"}]


def test_pending_payments_without_orders_total_zero_in_configured_currency(
    client: TestClient,
) -> None:
    response = client.get("/v1/orders/pending-payments/2026-01-01")

    assert response.json()["totalPending"] == [{"amount": "0.00", "currency": "INR"}]


def test_notify_pending_payments_without_kitchen_number_is_503(client: TestClient) -> None:
    response = client.post("/v1/orders/pending-payments/2026-10-20/notify")

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "KITCHEN_CONTACT_NOT_CONFIGURED"
