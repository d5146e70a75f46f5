from __future__ import annotations

from mskitchen.application.dto.responses import (
    CustomerOrderValueResponse,
    ItemOrderCountResponse,
)
from mskitchen.application.mappers.money_mapper import to_money_response
from mskitchen.application.ports.repositories import CustomerOrderValueData, ItemOrderCountData


def to_customer_order_value_response(row: CustomerOrderValueData) -> CustomerOrderValueResponse:
    return CustomerOrderValueResponse(
        customerId=str(row.customer_id),
        whatsappNumber=row.whatsapp_number,
        name=row.name,
        address=row.address,
        totalOrders=row.total_orders,
        totalValue=to_money_response(row.total_value),
    )


def to_item_order_count_response(row: ItemOrderCountData) -> ItemOrderCountResponse:
    return ItemOrderCountResponse(
        menuItemId=str(row.menu_item_id),
        name=row.name,
        orderCount=row.order_count,
        totalQuantity=row.total_quantity,
        totalRevenue=to_money_response(row.total_revenue),
    )
