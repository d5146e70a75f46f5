from __future__ import annotations

import logging
from datetime import date

from mskitchen.application.dto.responses import (
    MoneyResponse,
    PendingPaymentResponse,
    PendingPaymentsNotifiedResponse,
    PendingPaymentsResponse,
    SendResultResponse,
)
from mskitchen.application.mappers.money_mapper import to_money_response
from mskitchen.application.metrics.order_lifecycle import record_notification
from mskitchen.application.notifications.messages import (
    render_pending_payment,
    render_pending_payments_summary,
)
from mskitchen.application.ports.notifier import NotificationResult, Notifier
from mskitchen.application.ports.repositories import OrderRepository, PendingPaymentData
from mskitchen.domain.common.money import Money, totals_by_currency

logger = logging.getLogger(__name__)


class KitchenContactNotConfiguredError(Exception):
    pass


def _to_pending_payment_response(payment: PendingPaymentData) -> PendingPaymentResponse:
    return PendingPaymentResponse(
        orderId=str(payment.order_id),
        orderValue=MoneyResponse(amount=payment.order_value, currency=payment.currency),
        menuDate=payment.menu_date,
        customerWhatsapp=payment.whatsapp_number,
        customerAddress=payment.address,
        customerName=payment.customer_name,
        orderItems=payment.items_summary,
    )


class PendingPayments:
    def __init__(self, order_repository: OrderRepository, currency: str = "INR") -> None:
        self._order_repository = order_repository
        self._currency = currency

    def execute(self, menu_date: date) -> PendingPaymentsResponse:
        payments = self._order_repository.list_pending_payments(menu_date)
        totals = totals_by_currency(payment.order_money for payment in payments)
        return PendingPaymentsResponse(
            menuDate=menu_date,
            payments=[_to_pending_payment_response(payment) for payment in payments],
            totalPending=[
                to_money_response(total) for total in totals or [Money.zero(self._currency)]
            ],
        )


class NotifyPendingPayments:
    """Send the pending-payments report for one menu date to the kitchen.

    A summary message goes first, followed by one forwardable message per
    pending order. Delivery failures are reported per message, never raised.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        notifier: Notifier,
        kitchen_whatsapp_number: str | None,
    ) -> None:
        self._order_repository = order_repository
        self._notifier = notifier
        self._kitchen_whatsapp_number = kitchen_whatsapp_number

    def execute(self, menu_date: date) -> PendingPaymentsNotifiedResponse:
        destination = self._kitchen_whatsapp_number
        if not destination:
            raise KitchenContactNotConfiguredError("kitchen WhatsApp number is not configured")

        payments = self._order_repository.list_pending_payments(menu_date)
        messages = [render_pending_payments_summary(payments, menu_date)]
        messages.extend(render_pending_payment(payment) for payment in payments)

        results: list[SendResultResponse] = []
        for text in messages:
            result = self._send(destination, text)
            results.append(
                SendResultResponse(
                    number=destination,
                    success=result.success,
                    messageId=result.message_id,
                    error=result.error,
                )
            )

        return PendingPaymentsNotifiedResponse(
            menuDate=menu_date,
            pendingCount=len(payments),
            messagesSent=sum(1 for result in results if result.success),
            results=results,
        )

    def _send(self, destination: str, text: str) -> NotificationResult:
        try:
            result = self._notifier.notify(destination=destination, text=text)
        except Exception as exc:
            logger.exception("pending_payment_notification_failed")
            result = NotificationResult(success=False, error=str(exc))
        record_notification(kind="pending_payments", success=result.success)
        return result
