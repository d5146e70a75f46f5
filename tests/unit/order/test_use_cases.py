from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from kitchen_fakes import (
    DAL_ID,
    MENU_DATE,
    MENU_ID,
    PANEER_ID,
    RICE_ID,
    ExplodingNotifier,
    FakeOrderRepository,
    InMemoryStore,
    RecordingNotifier,
    add_order,
    make_customer,
)
from mskitchen.application.ports.repositories import PendingPaymentData
from mskitchen.application.use_cases.get_order import GetOrder, OrderNotFoundError
from mskitchen.application.use_cases.list_orders import InvalidOrderFilterError, ListOrders
from mskitchen.application.use_cases.pending_payments import (
    KitchenContactNotConfiguredError,
    NotifyPendingPayments,
    PendingPayments,
)
from mskitchen.application.use_cases.update_payment_status import (
    InvalidPaymentStatusError,
    UpdatePaymentStatus,
)
from mskitchen.application.use_cases.update_payment_status import (
    OrderNotFoundError as UpdateOrderNotFoundError,
)
from mskitchen.domain.common.ids import OrderId
from mskitchen.domain.order.entities import PaymentStatus


def _at(hour: int) -> datetime:
    return datetime(2026, 10, 20, hour, 0, tzinfo=timezone.utc)


@pytest.fixture
def orders(store: InMemoryStore) -> InMemoryStore:
    asha = make_customer("cus_asha", "+919800000001", "12 MG Road", "Asha")
    ravi = make_customer("cus_ravi", "+919800000002", "7 Park Street", None)
    add_order(store, "ord_1", asha, [(DAL_ID, 2)], _at(9))
    add_order(store, "ord_2", ravi, [(DAL_ID, 1), (RICE_ID, 2)], _at(10))
    add_order(store, "ord_3", asha, [(RICE_ID, 1)], _at(11), payment_status=PaymentStatus.PAID)
    add_order(store, "ord_4", ravi, [(PANEER_ID, 1)], _at(12))
    return store


def test_get_order_returns_lines_with_item_names(orders: InMemoryStore) -> None:
    response = GetOrder(order_repository=FakeOrderRepository(orders)).execute(OrderId("ord_2"))

    assert response.orderId == "ord_2"
    assert [(line.itemName, line.quantity) for line in response.lines] == [
        ("Dal", 1),
        ("Jeera Rice", 2),
    ]
    assert response.total.amount == Decimal("130.00")


def test_get_order_missing_raises_not_found(store: InMemoryStore) -> None:
    with pytest.raises(OrderNotFoundError):
        GetOrder(order_repository=FakeOrderRepository(store)).execute(OrderId("ord_missing"))


def test_list_orders_newest_first_with_filters(orders: InMemoryStore) -> None:
    use_case = ListOrders(order_repository=FakeOrderRepository(orders))

    everything = use_case.execute()
    pending_for_menu = use_case.execute(payment_status="PENDING", menu_id=MENU_ID)

    assert [order.orderId for order in everything.orders] == ["ord_4", "ord_3", "ord_2", "ord_1"]
    assert [order.orderId for order in pending_for_menu.orders] == ["ord_2", "ord_1"]


def test_list_orders_rejects_unknown_filter_values(store: InMemoryStore) -> None:
    use_case = ListOrders(order_repository=FakeOrderRepository(store))

    with pytest.raises(InvalidOrderFilterError):
        use_case.execute(status="delivered")
    with pytest.raises(InvalidOrderFilterError):
        use_case.execute(payment_status="refunded")


def test_list_orders_filters_by_inclusive_creation_dates(orders: InMemoryStore) -> None:
    late = make_customer("cus_late", "+919800000009", "3 Hill Road", None)
    late_night = datetime(2026, 10, 22, 23, 59, tzinfo=timezone.utc)
    add_order(orders, "ord_5", late, [(DAL_ID, 1)], late_night)
    use_case = ListOrders(order_repository=FakeOrderRepository(orders))

    first_day = use_case.execute(start_date=date(2026, 10, 20), end_date=date(2026, 10, 20))
    from_21st = use_case.execute(start_date=date(2026, 10, 21))
    until_22nd = use_case.execute(end_date=date(2026, 10, 22))

    assert [order.orderId for order in first_day.orders] == ["ord_4", "ord_3", "ord_2", "ord_1"]
    assert [order.orderId for order in from_21st.orders] == ["ord_5"]
    assert len(until_22nd.orders) == 5


def test_list_orders_rejects_a_reversed_date_range(store: InMemoryStore) -> None:
    use_case = ListOrders(order_repository=FakeOrderRepository(store))

    with pytest.raises(InvalidOrderFilterError, match="start date must not be after end date"):
        use_case.execute(start_date=date(2026, 10, 21), end_date=date(2026, 10, 20))


def test_update_payment_status_stamps_and_clears_confirmation(orders: InMemoryStore) -> None:
    use_case = UpdatePaymentStatus(order_repository=FakeOrderRepository(orders))

    paid = use_case.execute(OrderId("ord_1"), "paid")
    assert paid.paymentStatus == "paid"
    assert paid.paymentConfirmedAt is not None
    assert orders.orders[OrderId("ord_1")].payment_status == PaymentStatus.PAID

    reopened = use_case.execute(OrderId("ord_1"), "pending")
    assert reopened.paymentConfirmedAt is None


def test_update_payment_status_validates_input(orders: InMemoryStore) -> None:
    use_case = UpdatePaymentStatus(order_repository=FakeOrderRepository(orders))

    with pytest.raises(InvalidPaymentStatusError):
        use_case.execute(OrderId("ord_1"), "refunded")
    with pytest.raises(UpdateOrderNotFoundError):
        use_case.execute(OrderId("ord_missing"), "paid")


def test_pending_payments_lists_unpaid_orders_for_the_menu_date(orders: InMemoryStore) -> None:
    response = PendingPayments(order_repository=FakeOrderRepository(orders)).execute(MENU_DATE)

    assert [payment.orderId for payment in response.payments] == ["ord_1", "ord_2"]
    assert response.payments[1].orderItems == "Dal x1, Jeera Rice x2"
    assert response.payments[1].customerName is None
    assert [(total.amount, total.currency) for total in response.totalPending] == [
        (Decimal("230.00"), "INR")
    ]


def test_pending_payments_for_a_date_without_orders_is_empty(orders: InMemoryStore) -> None:
    response = PendingPayments(order_repository=FakeOrderRepository(orders)).execute(
        date(2026, 1, 1)
    )

    assert response.payments == []
    assert [(total.amount, total.currency) for total in response.totalPending] == [
        (Decimal("0.00"), "INR")
    ]


class _MixedCurrencyPayments:
    def list_pending_payments(self, menu_date: date) -> list[PendingPaymentData]:
        return [
            _pending("ord_a", "100.00", "INR", menu_date),
            _pending("ord_b", "4.50", "USD", menu_date),
            _pending("ord_c", "25.00", "INR", menu_date),
        ]


def _pending(order_id: str, value: str, currency: str, menu_date: date) -> PendingPaymentData:
    return PendingPaymentData(
        order_id=OrderId(order_id),
        order_value=Decimal(value),
        currency=currency,
        menu_date=menu_date,
        whatsapp_number="+919800000001",
        address="12 MG Road",
        customer_name=None,
        items_summary="Dal x1",
    )


def test_pending_payments_totals_are_grouped_by_order_currency() -> None:
    response = PendingPayments(order_repository=_MixedCurrencyPayments()).execute(MENU_DATE)

    assert [(total.amount, total.currency) for total in response.totalPending] == [
        (Decimal("125.00"), "INR"),
        (Decimal("4.50"), "USD"),
    ]


def test_notify_pending_payments_sends_summary_then_one_message_per_order(
    orders: InMemoryStore,
) -> None:
    notifier = RecordingNotifier()
    use_case = NotifyPendingPayments(
        order_repository=FakeOrderRepository(orders),
        notifier=notifier,
        kitchen_whatsapp_number="+919899999999",
    )

    response = use_case.execute(MENU_DATE)

    assert response.pendingCount == 2
    assert response.messagesSent == 3
    assert [message.destination for message in notifier.sent] == ["+919899999999"] * 3
    assert "Total Pending: 2 orders" in notifier.sent[0].text
    assert "₹230.00" in notifier.sent[0].text
    assert "#ord_1" in notifier.sent[1].text
    assert "#ord_2" in notifier.sent[2].text


def test_notify_pending_payments_reports_delivery_failures(orders: InMemoryStore) -> None:
    use_case = NotifyPendingPayments(
        order_repository=FakeOrderRepository(orders),
        notifier=ExplodingNotifier(),
        kitchen_whatsapp_number="+919899999999",
    )

    response = use_case.execute(MENU_DATE)

    assert response.messagesSent == 0
    assert all(result.success is False for result in response.results)
    assert response.results[0].error == "twilio unreachable"


def test_notify_pending_payments_requires_kitchen_number(store: InMemoryStore) -> None:
    use_case = NotifyPendingPayments(
        order_repository=FakeOrderRepository(store),
        notifier=RecordingNotifier(),
        kitchen_whatsapp_number=None,
    )

    with pytest.raises(KitchenContactNotConfiguredError):
        use_case.execute(MENU_DATE)
