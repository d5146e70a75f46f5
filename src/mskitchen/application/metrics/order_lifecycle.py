from __future__ import annotations

from prometheus_client import Counter

from mskitchen.domain.order.entities import Order, PaymentStatus

ORDERS_PLACED_TOTAL = Counter(
    "msk_orders_placed_total",
    "Total number of committed order placements.",
    ["menu_id"],
)

ORDER_PLACEMENT_REJECTED_TOTAL = Counter(
    "msk_order_placement_rejected_total",
    "Total number of rejected order placements by reason.",
    ["reason"],
)

MENU_ITEM_UNITS_SOLD_TOTAL = Counter(
    "msk_menu_item_units_sold_total",
    "Total number of menu item units sold through committed orders.",
    ["menu_id"],
)

NOTIFICATIONS_TOTAL = Counter(
    "msk_notifications_total",
    "Total number of outbound notifications by kind and outcome.",
    ["kind", "outcome"],
)

PAYMENT_STATUS_TRANSITION_TOTAL = Counter(
    "msk_payment_status_transition_total",
    "Total number of order payment status transitions.",
    ["from", "to"],
)


def record_order_placed(order: Order) -> None:
    ORDERS_PLACED_TOTAL.labels(menu_id=str(order.menu_id)).inc()
    MENU_ITEM_UNITS_SOLD_TOTAL.labels(menu_id=str(order.menu_id)).inc(
        sum(line.quantity for line in order.lines)
    )


def record_placement_rejected(reason: str) -> None:
    ORDER_PLACEMENT_REJECTED_TOTAL.labels(reason=reason).inc()


def record_notification(kind: str, success: bool) -> None:
    NOTIFICATIONS_TOTAL.labels(kind=kind, outcome="sent" if success else "failed").inc()


def record_payment_transition(from_status: PaymentStatus, to_status: PaymentStatus) -> None:
    PAYMENT_STATUS_TRANSITION_TOTAL.labels(
        **{"from": from_status.value, "to": to_status.value}
    ).inc()
