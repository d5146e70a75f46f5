from __future__ import annotations

import logging
from datetime import datetime, timezone

from mskitchen.application.dto.requests import PlaceOrderRequest
from mskitchen.application.dto.responses import PlacedOrderResponse
from mskitchen.application.mappers.order_mapper import to_placed_order_response
from mskitchen.application.metrics.order_lifecycle import (
    record_notification,
    record_order_placed,
    record_placement_rejected,
)
from mskitchen.application.notifications.messages import render_order_confirmation
from mskitchen.application.ports.notifier import Notifier
from mskitchen.application.ports.repositories import (
    DuplicateCustomerError,
    OrderPlacementUnitOfWork,
    PlacementTransaction,
    TransactionConflictError,
)
from mskitchen.domain.common.ids import CustomerId, MenuId, MenuItemId, OrderId, OrderLineId, new_id
from mskitchen.domain.customer.entities import (
    Customer,
    CustomerRef,
    ExistingCustomer,
    NewCustomerInfo,
    new_customer,
)
from mskitchen.domain.menu.entities import StockExhaustedError
from mskitchen.domain.order.entities import (
    MAX_ORDER_VALUE,
    Order,
    OrderLine,
    OrderValueTooLargeError,
    create_confirmed_order,
)

logger = logging.getLogger(__name__)


class OrderPlacementError(Exception):
    reason = "UNKNOWN"

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class InvalidOrderRequestError(OrderPlacementError):
    reason = "VALIDATION"


class MenuNotFoundError(OrderPlacementError):
    reason = "MENU_NOT_FOUND"


class CustomerNotFoundError(OrderPlacementError):
    reason = "CUSTOMER_NOT_FOUND"


class MenuItemNotFoundError(OrderPlacementError):
    reason = "ITEM_NOT_FOUND"


class InsufficientStockError(OrderPlacementError):
    reason = "INSUFFICIENT_STOCK"


class OrderConflictError(OrderPlacementError):
    reason = "CONFLICT"


def customer_ref_from_request(request_dto: PlaceOrderRequest) -> CustomerRef:
    if request_dto.customer_id:
        return ExistingCustomer(customer_id=CustomerId(request_dto.customer_id))
    contact = (request_dto.contact or "").strip()
    if contact:
        return NewCustomerInfo(
            whatsapp_number=contact,
            address=(request_dto.address or "").strip(),
            name=request_dto.name,
        )
    raise InvalidOrderRequestError("customer information is required")


class PlaceOrder:
    def __init__(
        self,
        unit_of_work: OrderPlacementUnitOfWork,
        notifier: Notifier,
        kitchen_whatsapp_number: str | None,
    ) -> None:
        self._unit_of_work = unit_of_work
        self._notifier = notifier
        self._kitchen_whatsapp_number = kitchen_whatsapp_number

    def execute(self, request_dto: PlaceOrderRequest) -> PlacedOrderResponse:
        try:
            order, customer = self._place(request_dto)
        except OrderPlacementError as exc:
            record_placement_rejected(exc.reason)
            logger.info(
                "order_rejected",
                extra={"reason": exc.reason, "menu_id": request_dto.menu_id},
            )
            raise

        record_order_placed(order)
        logger.info(
            "order_placed",
            extra={"order_id": str(order.order_id), "menu_id": str(order.menu_id)},
        )
        notified = self._notify_kitchen(order, customer)
        return to_placed_order_response(order, notified=notified)

    def _place(self, request_dto: PlaceOrderRequest) -> tuple[Order, Customer]:
        if not request_dto.items:
            raise InvalidOrderRequestError("at least one item is required")
        for request_line in request_dto.items:
            if request_line.quantity < 1:
                raise InvalidOrderRequestError(
                    f"quantity must be >= 1 for menu item {request_line.item_id}",
                    details={"itemId": request_line.item_id},
                )
        customer_ref = customer_ref_from_request(request_dto)
        menu_id = MenuId(request_dto.menu_id)
        now = datetime.now(timezone.utc)

        try:
            with self._unit_of_work.begin() as tx:
                if not tx.menu_exists(menu_id):
                    raise MenuNotFoundError(
                        f"menu {menu_id} not found",
                        details={"menuId": menu_id},
                    )

                customer = self._resolve_customer(tx, customer_ref, now)

                requested_ids = sorted({MenuItemId(line.item_id) for line in request_dto.items})
                items = tx.lock_menu_items(menu_id=menu_id, item_ids=requested_ids)

                order_lines: list[OrderLine] = []
                for request_line in request_dto.items:
                    item_id = MenuItemId(request_line.item_id)
                    menu_item = items.get(item_id)
                    if menu_item is None:
                        raise MenuItemNotFoundError(
                            f"menu item {item_id} not found in menu {menu_id}",
                            details={"itemId": item_id, "menuId": menu_id},
                        )
                    try:
                        items[item_id] = menu_item.sell(request_line.quantity)
                    except StockExhaustedError as exc:
                        raise InsufficientStockError(
                            f"insufficient quantity available for menu item {item_id}",
                            details={
                                "itemId": item_id,
                                "requested": exc.requested,
                                "available": exc.available,
                            },
                        ) from exc

                    order_lines.append(
                        OrderLine(
                            line_id=OrderLineId(new_id("oit")),
                            item_id=item_id,
                            name=menu_item.name,
                            quantity=request_line.quantity,
                            unit_price=menu_item.price,
                            subtotal=menu_item.price.times(request_line.quantity),
                        )
                    )

                try:
                    order = create_confirmed_order(
                        order_id=OrderId(new_id("ord")),
                        menu_id=menu_id,
                        customer_id=customer.customer_id,
                        lines=order_lines,
                        now=now,
                    )
                except OrderValueTooLargeError as exc:
                    raise InvalidOrderRequestError(
                        str(exc),
                        details={"maximum": str(MAX_ORDER_VALUE)},
                    ) from exc
                tx.add_order(order)
                for line in order.lines:
                    tx.record_sale(item_id=line.item_id, quantity=line.quantity)
        except DuplicateCustomerError as exc:
            raise OrderConflictError(
                str(exc),
                details={"whatsappNumber": getattr(customer_ref, "whatsapp_number", None)},
            ) from exc
        except TransactionConflictError as exc:
            raise OrderConflictError(str(exc)) from exc

        return order, customer

    def _resolve_customer(
        self,
        tx: PlacementTransaction,
        customer_ref: CustomerRef,
        now: datetime,
    ) -> Customer:
        if isinstance(customer_ref, ExistingCustomer):
            customer = tx.get_customer(customer_ref.customer_id)
            if customer is None:
                raise CustomerNotFoundError(
                    f"customer {customer_ref.customer_id} not found",
                    details={"customerId": customer_ref.customer_id},
                )
            return customer

        existing = tx.get_customer_by_whatsapp_number(customer_ref.whatsapp_number)
        if existing is not None:
            return existing

        if not customer_ref.address:
            raise InvalidOrderRequestError("address is required for a new customer")
        customer = new_customer(
            customer_id=CustomerId(new_id("cus")),
            info=customer_ref,
            now=now,
        )
        tx.add_customer(customer)
        return customer

    def _notify_kitchen(self, order: Order, customer: Customer) -> bool:
        if not self._kitchen_whatsapp_number:
            return False
        try:
            result = self._notifier.notify(
                destination=self._kitchen_whatsapp_number,
                text=render_order_confirmation(order, customer),
            )
        except Exception:
            logger.exception("order_notification_failed", extra={"order_id": str(order.order_id)})
            record_notification(kind="order_confirmation", success=False)
            return False

        record_notification(kind="order_confirmation", success=result.success)
        if not result.success:
            logger.warning(
                "order_notification_failed",
                extra={"order_id": str(order.order_id), "reason": result.error},
            )
        return result.success
