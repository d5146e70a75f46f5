from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from mskitchen.api import dependencies
from mskitchen.application.dto.requests import PlaceOrderRequest, UpdatePaymentStatusRequest
from mskitchen.application.dto.responses import (
    OrderListResponse,
    OrderResponse,
    PendingPaymentsNotifiedResponse,
    PendingPaymentsResponse,
    PlacedOrderResponse,
)
from mskitchen.application.use_cases.get_order import GetOrder
from mskitchen.application.use_cases.list_orders import ListOrders
from mskitchen.application.use_cases.pending_payments import (
    NotifyPendingPayments,
    PendingPayments,
)
from mskitchen.application.use_cases.place_order import PlaceOrder
from mskitchen.application.use_cases.update_payment_status import UpdatePaymentStatus
from mskitchen.domain.common.ids import OrderId
from mskitchen.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from mskitchen.infrastructure.db.repositories.placement_uow import (
    SqlAlchemyOrderPlacementUnitOfWork,
)

router = APIRouter()


def place_order_use_case() -> PlaceOrder:
    return PlaceOrder(
        unit_of_work=SqlAlchemyOrderPlacementUnitOfWork(),
        notifier=dependencies.notifier(),
        kitchen_whatsapp_number=dependencies.kitchen_whatsapp_number(),
    )


def get_order_use_case() -> GetOrder:
    return GetOrder(order_repository=SqlAlchemyOrderRepository())


def list_orders_use_case() -> ListOrders:
    return ListOrders(order_repository=SqlAlchemyOrderRepository())


def update_payment_status_use_case() -> UpdatePaymentStatus:
    return UpdatePaymentStatus(order_repository=SqlAlchemyOrderRepository())


def pending_payments_use_case() -> PendingPayments:
    return PendingPayments(
        order_repository=SqlAlchemyOrderRepository(),
        currency=dependencies.currency(),
    )


def notify_pending_payments_use_case() -> NotifyPendingPayments:
    return NotifyPendingPayments(
        order_repository=SqlAlchemyOrderRepository(),
        notifier=dependencies.notifier(),
        kitchen_whatsapp_number=dependencies.kitchen_whatsapp_number(),
    )


@router.post(
    "/v1/orders",
    response_model=PlacedOrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    request_dto: PlaceOrderRequest,
    use_case: PlaceOrder = Depends(place_order_use_case),
) -> PlacedOrderResponse:
    span = trace.get_current_span()
    span.set_attribute("mskitchen.menu_id", request_dto.menu_id)
    response = use_case.execute(request_dto)
    span.set_attribute("mskitchen.order_id", response.orderId)
    return response


@router.get("/v1/orders", response_model=OrderListResponse)
def list_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    payment_status: str | None = Query(default=None, alias="paymentStatus"),
    menu_id: str | None = Query(default=None, alias="menuId"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    use_case: ListOrders = Depends(list_orders_use_case),
) -> OrderListResponse:
    return use_case.execute(
        status=status_filter,
        payment_status=payment_status,
        menu_id=menu_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("/v1/orders/pending-payments/{menu_date}", response_model=PendingPaymentsResponse)
def pending_payments(
    menu_date: date,
    use_case: PendingPayments = Depends(pending_payments_use_case),
) -> PendingPaymentsResponse:
    return use_case.execute(menu_date)


@router.post(
    "/v1/orders/pending-payments/{menu_date}/notify",
    response_model=PendingPaymentsNotifiedResponse,
)
def notify_pending_payments(
    menu_date: date,
    use_case: NotifyPendingPayments = Depends(notify_pending_payments_use_case),
) -> PendingPaymentsNotifiedResponse:
    return use_case.execute(menu_date)


@router.get("/v1/orders/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    use_case: GetOrder = Depends(get_order_use_case),
) -> OrderResponse:
    return use_case.execute(order_id=OrderId(order_id))


@router.put("/v1/orders/{order_id}/payment", response_model=OrderResponse)
def update_payment_status(
    order_id: str,
    request_dto: UpdatePaymentStatusRequest,
    use_case: UpdatePaymentStatus = Depends(update_payment_status_use_case),
) -> OrderResponse:
    return use_case.execute(
        order_id=OrderId(order_id),
        payment_status=request_dto.payment_status,
    )
