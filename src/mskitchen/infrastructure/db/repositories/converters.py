from __future__ import annotations

from datetime import datetime, timezone

from mskitchen.domain.common.ids import CustomerId, MenuId, MenuItemId, OrderId, OrderLineId
from mskitchen.domain.common.money import Money
from mskitchen.domain.customer.entities import Customer
from mskitchen.domain.menu.entities import Menu, MenuItem
from mskitchen.domain.order.entities import Order, OrderLine, OrderStatus, PaymentStatus
from mskitchen.infrastructure.db.models.customer import CustomerModel
from mskitchen.infrastructure.db.models.menu import MenuItemModel, MenuModel
from mskitchen.infrastructure.db.models.order import OrderItemModel, OrderModel


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def as_utc_or_none(value: datetime | None) -> datetime | None:
    return as_utc(value) if value is not None else None


def menu_item_to_domain(model: MenuItemModel) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(model.id),
        menu_id=MenuId(model.menu_id),
        name=model.name,
        price=Money(amount=model.price, currency=model.currency),
        quantity_available=model.quantity_available,
        quantity_sold=model.quantity_sold,
    )


def menu_to_domain(model: MenuModel) -> Menu:
    return Menu(
        menu_id=MenuId(model.id),
        menu_date=model.menu_date,
        delivery_window_start=model.delivery_window_start,
        delivery_window_end=model.delivery_window_end,
        upi_phone_number=model.upi_phone_number,
        items=[menu_item_to_domain(item) for item in model.items],
        created_at=as_utc_or_none(model.created_at),
    )


def menu_to_model(menu: Menu) -> MenuModel:
    model = MenuModel(
        id=str(menu.menu_id),
        menu_date=menu.menu_date,
        delivery_window_start=menu.delivery_window_start,
        delivery_window_end=menu.delivery_window_end,
        upi_phone_number=menu.upi_phone_number,
    )
    if menu.created_at is not None:
        model.created_at = menu.created_at
        model.updated_at = menu.created_at
    model.items = [
        MenuItemModel(
            id=str(item.item_id),
            menu_id=str(menu.menu_id),
            name=item.name,
            price=item.price.amount,
            currency=item.price.currency,
            quantity_available=item.quantity_available,
            quantity_sold=item.quantity_sold,
        )
        for item in menu.items
    ]
    return model


def customer_to_domain(model: CustomerModel) -> Customer:
    return Customer(
        customer_id=CustomerId(model.id),
        whatsapp_number=model.whatsapp_number,
        address=model.address,
        name=model.name,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def customer_to_model(customer: Customer) -> CustomerModel:
    return CustomerModel(
        id=str(customer.customer_id),
        whatsapp_number=customer.whatsapp_number,
        address=customer.address,
        name=customer.name,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


def order_to_domain(model: OrderModel) -> Order:
    lines = [
        OrderLine(
            line_id=OrderLineId(item.id),
            item_id=MenuItemId(item.menu_item_id),
            name=item.menu_item.name,
            quantity=item.quantity,
            unit_price=Money(amount=item.price, currency=model.currency),
            subtotal=Money(amount=item.subtotal, currency=model.currency),
        )
        for item in model.items
    ]
    return Order(
        order_id=OrderId(model.id),
        menu_id=MenuId(model.menu_id),
        customer_id=CustomerId(model.customer_id),
        status=OrderStatus(model.status),
        payment_status=PaymentStatus(model.payment_status),
        lines=lines,
        total=Money(amount=model.order_value, currency=model.currency),
        created_at=as_utc(model.created_at),
        payment_confirmed_at=as_utc_or_none(model.payment_confirmed_at),
    )


def order_to_model(order: Order) -> OrderModel:
    model = OrderModel(
        id=str(order.order_id),
        menu_id=str(order.menu_id),
        customer_id=str(order.customer_id),
        order_value=order.total.amount,
        currency=order.total.currency,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_confirmed_at=order.payment_confirmed_at,
        created_at=order.created_at,
        updated_at=order.created_at,
    )
    model.items = [
        OrderItemModel(
            id=str(line.line_id),
            order_id=str(order.order_id),
            menu_item_id=str(line.item_id),
            position=position,
            quantity=line.quantity,
            price=line.unit_price.amount,
            subtotal=line.subtotal.amount,
            created_at=order.created_at,
        )
        for position, line in enumerate(order.lines)
    ]
    return model
