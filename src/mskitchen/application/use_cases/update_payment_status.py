from __future__ import annotations

import logging
from datetime import datetime, timezone

from mskitchen.application.dto.responses import OrderResponse
from mskitchen.application.mappers.order_mapper import to_order_response
from mskitchen.application.metrics.order_lifecycle import record_payment_transition
from mskitchen.application.ports.repositories import OrderRepository
from mskitchen.domain.common.ids import OrderId
from mskitchen.domain.order.entities import PaymentStatus

logger = logging.getLogger(__name__)


class OrderNotFoundError(Exception):
    pass


class InvalidPaymentStatusError(Exception):
    pass


class UpdatePaymentStatus:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId, payment_status: str) -> OrderResponse:
        try:
            new_status = PaymentStatus(payment_status.lower())
        except ValueError as exc:
            raise InvalidPaymentStatusError(f"invalid payment status: {payment_status}") from exc

        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")

        updated = order.with_payment_status(new_status, now=datetime.now(timezone.utc))
        if updated is order:
            return to_order_response(order)

        self._order_repository.update_payment(updated)
        record_payment_transition(from_status=order.payment_status, to_status=new_status)
        logger.info(
            "order_payment_updated",
            extra={"order_id": str(order_id), "reason": new_status.value},
        )
        return to_order_response(updated)
