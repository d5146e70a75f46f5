from __future__ import annotations

from mskitchen.application.dto.responses import (
    OrderLineResponse,
    OrderResponse,
    PlacedOrderResponse,
)
from mskitchen.application.mappers.money_mapper import to_money_response
from mskitchen.domain.order.entities import Order


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id),
        menuId=str(order.menu_id),
        customerId=str(order.customer_id),
        status=order.status.value,
        paymentStatus=order.payment_status.value,
        paymentConfirmedAt=order.payment_confirmed_at,
        lines=[
            OrderLineResponse(
                lineId=str(line.line_id),
                itemId=str(line.item_id),
                itemName=line.name,
                quantity=line.quantity,
                unitPrice=to_money_response(line.unit_price),
                subtotal=to_money_response(line.subtotal),
            )
            for line in order.lines
        ],
        total=to_money_response(order.total),
        createdAt=order.created_at,
    )


def to_placed_order_response(order: Order, notified: bool) -> PlacedOrderResponse:
    return PlacedOrderResponse(**to_order_response(order).model_dump(), notified=notified)
