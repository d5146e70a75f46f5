from __future__ import annotations

import secrets
from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient

from db_helpers import create_menu, item_id
from mskitchen.api.main import app
from mskitchen.application.ports.repositories import DuplicateReviewError, MissingReferenceError
from mskitchen.domain.common.ids import CustomerId, OrderId, ReviewId, new_id
from mskitchen.domain.review.entities import Review
from mskitchen.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository


def _contact() -> str:
    return f"+91{secrets.randbelow(10**10):010d}"


def _place(client: TestClient, menu: dict, contact: str, lines: list[tuple[str, int]]) -> dict:
    response = client.post(
        "/v1/orders",
        json={
            "menuId": menu["menuId"],
            "contact": contact,
            "address": "7 Park Street",
            "items": [
                {"itemId": item_id(menu, name), "quantity": quantity} for name, quantity in lines
            ],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def _review(order_id: str, customer_id: str) -> Review:
    return Review(
        review_id=ReviewId(new_id("rev")),
        order_id=OrderId(order_id),
        customer_id=CustomerId(customer_id),
        menu_item_id=None,
        rating=4,
        comments=None,
        created_at=datetime.now(timezone.utc),
    )


def test_review_insert_errors_are_told_apart(menu_date: date) -> None:
    with TestClient(app) as client:
        menu = create_menu(client, menu_date, [("Dal", "50.00", 10)])
        placed = _place(client, menu, _contact(), [("Dal", 1)])
    repository = SqlAlchemyReviewRepository()

    with pytest.raises(MissingReferenceError):
        repository.add(_review(placed["orderId"], "cus_nope"))

    repository.add(_review(placed["orderId"], placed["customerId"]))
    with pytest.raises(DuplicateReviewError):
        repository.add(_review(placed["orderId"], placed["customerId"]))


def test_review_for_unknown_customer_is_404(menu_date: date) -> None:
    with TestClient(app) as client:
        menu = create_menu(client, menu_date, [("Dal", "50.00", 10)])
        placed = _place(client, menu, _contact(), [("Dal", 1)])

        response = client.post(
            "/v1/reviews",
            json={"orderId": placed["orderId"], "customerId": "cus_nope", "rating": 4},
        )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CUSTOMER_NOT_FOUND"


def test_reports_customers_and_reviews_cover_todays_orders(menu_date: date) -> None:
    contact = _contact()
    today = datetime.now(timezone.utc).date().isoformat()
    period = {"startDate": today, "endDate": today}
    with TestClient(app) as client:
        menu = create_menu(client, menu_date, [("Dal", "50.00", 10), ("Roti", "10.00", 40)])
        first = _place(client, menu, contact, [("Dal", 2), ("Roti", 3)])
        _place(client, menu, contact, [("Dal", 1)])
        customer_id = first["customerId"]
        dal_id = item_id(menu, "Dal")
        review = client.post(
            "/v1/reviews",
            json={
                "orderId": first["orderId"],
                "customerId": customer_id,
                "menuItemId": dal_id,
                "rating": 5,
            },
        )
        assert review.status_code == 201, review.text

        values = client.get("/v1/reports/customer-order-values", params=period).json()
        counts = client.get("/v1/reports/item-order-counts", params=period).json()
        ratings = client.get("/v1/reports/item-ratings", params=period).json()
        customers = client.get("/v1/customers").json()["customers"]
        reviews = client.get("/v1/reviews", params={"menuItemId": dal_id, "minRating": 5}).json()
        orders = client.get("/v1/orders", params={"menuId": menu["menuId"], **period}).json()

    [value] = [row for row in values["customers"] if row["customerId"] == customer_id]
    assert value["totalOrders"] == 2
    assert value["totalValue"] == {"amount": "180.00", "currency": "INR"}
    by_item = {row["menuItemId"]: row for row in counts["items"]}
    assert (by_item[dal_id]["orderCount"], by_item[dal_id]["totalQuantity"]) == (2, 3)
    assert by_item[dal_id]["totalRevenue"]["amount"] == "150.00"
    assert by_item[item_id(menu, "Roti")]["totalQuantity"] == 3
    assert [row["averageRating"] for row in ratings["items"] if row["menuItemId"] == dal_id] == [
        "5.00"
    ]
    [customer] = [row for row in customers if row["customerId"] == customer_id]
    assert customer["totalOrders"] == 2
    assert customer["totalSpent"] == [{"amount": "180.00", "currency": "INR"}]
    assert [row["reviewId"] for row in reviews["reviews"]] == [review.json()["reviewId"]]
    assert reviews["reviews"][0]["orderValue"]["amount"] == "130.00"
    assert len(orders["orders"]) == 2
