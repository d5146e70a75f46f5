"""WhatsApp message bodies sent to the kitchen operator and customers.

Bodies use WhatsApp markup (``*bold*``) and render amounts with two decimals.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from mskitchen.application.ports.repositories import PendingPaymentData
from mskitchen.domain.common.money import totals_by_currency
from mskitchen.domain.customer.entities import Customer
from mskitchen.domain.menu.entities import Menu
from mskitchen.domain.order.entities import Order

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}


def render_timestamp(value: datetime) -> str:
    return value.strftime("%d/%m/%Y, %H:%M:%S")


def format_amount(amount: Decimal, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{symbol}{amount:.2f}"


def render_order_confirmation(order: Order, customer: Customer) -> str:
    return (
        "✅ *New Order Received*\n\n"
        f"Order ID: #{order.order_id}\n"
        f"Customer: {customer.name or 'N/A'}\n"
        f"WhatsApp: {customer.whatsapp_number}\n"
        f"Address: {customer.address}\n"
        f"Order Value: {format_amount(order.total.amount, order.total.currency)}\n"
        f"Items: {order.items_summary or 'N/A'}\n"
        f"Time: {render_timestamp(order.created_at)}"
    )


def render_menu(menu: Menu, app_url: str) -> str:
    lines = [
        "🍳 *Ms Kitchen - Daily Menu*",
        f"📅 Date: {menu.menu_date.isoformat()}",
        f"🚚 Delivery: {menu.delivery_window}",
        "",
        "*Menu Items:*",
        "",
    ]
    for index, item in enumerate(menu.items, start=1):
        lines.append(f"{index}. *{item.name}*")
        lines.append(f"   💰 {format_amount(item.price.amount, item.price.currency)}")
        lines.append(f"   📦 Available: {item.quantity_available} plates")
        lines.append("")
    lines.append("💳 *Payment:*")
    lines.append(f"UPI: {menu.upi_phone_number}")
    lines.append("")
    lines.append(f"📱 *Order Now:* {app_url.rstrip('/')}/order/{menu.menu_id}")
    return "\n".join(lines) + "\n"


def render_pending_payments_summary(payments: list[PendingPaymentData], report_date: date) -> str:
    if not payments:
        return "✅ *Payment Report*\n\nAll payments received for today! 🎉"

    totals = totals_by_currency(payment.order_money for payment in payments)
    total_amount = " + ".join(format_amount(total.amount, total.currency) for total in totals)
    return (
        "⚠️ *Pending Payments Report*\n\n"
        f"Date: {report_date.strftime('%d/%m/%Y')}\n"
        f"Total Pending: {len(payments)} orders\n"
        f"Total Amount: {total_amount}\n\n"
        "Details will be sent separately."
    )


def render_pending_payment(payment: PendingPaymentData) -> str:
    return (
        "💳 *Pending Payment*\n\n"
        f"Date: {payment.menu_date.isoformat()}\n"
        f"Order ID: #{payment.order_id}\n"
        f"Customer: {payment.whatsapp_number}\n"
        f"Address: {payment.address}\n"
        f"Items: {payment.items_summary}\n"
        f"Amount: {format_amount(payment.order_value, payment.currency)}\n\n"
        "Please forward this message to the customer."
    )
