from __future__ import annotations

from mskitchen.application.dto.responses import (
    MenuItemResponse,
    MenuResponse,
    MenuSummaryResponse,
)
from mskitchen.application.mappers.money_mapper import to_money_response
from mskitchen.application.ports.repositories import MenuSummaryData
from mskitchen.domain.menu.entities import Menu, MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        itemId=str(item.item_id),
        menuId=str(item.menu_id),
        name=item.name,
        price=to_money_response(item.price),
        quantityAvailable=item.quantity_available,
        quantitySold=item.quantity_sold,
    )


def to_menu_response(menu: Menu) -> MenuResponse:
    return MenuResponse(
        menuId=str(menu.menu_id),
        menuDate=menu.menu_date,
        deliveryWindowStart=menu.delivery_window_start,
        deliveryWindowEnd=menu.delivery_window_end,
        upiPhoneNumber=menu.upi_phone_number,
        items=[to_menu_item_response(item) for item in menu.items],
        createdAt=menu.created_at,
    )


def to_menu_summary_response(summary: MenuSummaryData) -> MenuSummaryResponse:
    menu = summary.menu
    return MenuSummaryResponse(
        menuId=str(menu.menu_id),
        menuDate=menu.menu_date,
        deliveryWindowStart=menu.delivery_window_start,
        deliveryWindowEnd=menu.delivery_window_end,
        upiPhoneNumber=menu.upi_phone_number,
        totalOrders=summary.total_orders,
        totalRevenue=summary.total_revenue,
    )
