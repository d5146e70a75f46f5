from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from kitchen_fakes import DAL_ID, MENU_ID, RICE_ID, add_order, make_customer, seeded_store
from mskitchen.application.notifications.messages import (
    format_amount,
    render_menu,
    render_order_confirmation,
    render_pending_payment,
    render_pending_payments_summary,
)
from mskitchen.application.ports.repositories import PendingPaymentData
from mskitchen.domain.common.ids import OrderId


def _payment(order_id: str, value: str, currency: str = "INR") -> PendingPaymentData:
    return PendingPaymentData(
        order_id=OrderId(order_id),
        order_value=Decimal(value),
        currency=currency,
        menu_date=date(2026, 10, 20),
        whatsapp_number="+919800000001",
        address="12 MG Road",
        customer_name="Asha",
        items_summary="Dal x2",
    )


def test_format_amount_uses_symbol_and_two_decimals() -> None:
    assert format_amount(Decimal("150"), "INR") == "₹150.00"
    assert format_amount(Decimal("4.5"), "USD") == "$4.50"
    assert format_amount(Decimal("7"), "AED") == "AED 7.00"


def test_order_confirmation_lists_customer_and_items() -> None:
    store = seeded_store()
    customer = make_customer(name=None)
    order = add_order(
        store,
        "ord_42",
        customer,
        [(DAL_ID, 3), (RICE_ID, 1)],
        datetime(2026, 10, 20, 9, 5, 7, tzinfo=timezone.utc),
    )

    text = render_order_confirmation(order, customer)

    assert text.startswith("✅ *New Order Received*")
    assert "Order ID: #ord_42" in text
    assert "Customer: N/A" in text
    assert "Order Value: ₹190.00" in text
    assert "Items: Dal x3, Jeera Rice x1" in text
    assert "Time: 20/10/2026, 09:05:07" in text


def test_menu_message_lists_items_and_order_link() -> None:
    menu = seeded_store().menu_with_items(MENU_ID)
    assert menu is not None

    text = render_menu(menu, app_url="https://ms-kitchen.example/")

    assert "📅 Date: 2026-10-20" in text
    assert "🚚 Delivery: 12:00 - 14:00" in text
    assert "1. *Dal*" in text
    assert "📦 Available: 10 plates" in text
    assert "UPI: +919811111111" in text
    assert text.rstrip().endswith(f"https://ms-kitchen.example/order/{MENU_ID}")


def test_pending_summary_without_payments_is_all_clear() -> None:
    text = render_pending_payments_summary([], date(2026, 10, 20))

    assert "All payments received" in text


def test_pending_summary_totals_outstanding_amount() -> None:
    payments = [_payment("ord_1", "100.00"), _payment("ord_2", "30.50")]

    text = render_pending_payments_summary(payments, date(2026, 10, 20))

    assert "Date: 20/10/2026" in text
    assert "Total Pending: 2 orders" in text
    assert "Total Amount: ₹130.50" in text


def test_pending_summary_totals_each_currency_separately() -> None:
    payments = [
        _payment("ord_1", "100.00"),
        _payment("ord_2", "4.50", currency="USD"),
        _payment("ord_3", "20.00"),
    ]

    text = render_pending_payments_summary(payments, date(2026, 10, 20))

    assert "Total Amount: ₹120.00 + $4.50" in text


def test_pending_payment_message_is_forwardable() -> None:
    text = render_pending_payment(_payment("ord_1", "100.00"))

    assert "Order ID: #ord_1" in text
    assert "Amount: ₹100.00" in text
    assert text.endswith("Please forward this message to the customer.")
