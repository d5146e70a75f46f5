from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mskitchen.api.middleware.request_id import get_request_id
from mskitchen.application.use_cases import (
    create_menu,
    create_review,
    get_customer,
    get_menu,
    get_order,
    get_review,
    list_orders,
    pending_payments,
    place_order,
    register_customer,
    reports,
    send_menu,
    update_customer,
    update_menu_item,
    update_payment_status,
)

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": jsonable_encoder(details or {}),
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        logger.info("request_rejected", extra={"status_code": status_code, "reason": code})
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (place_order.InvalidOrderRequestError, 400, "VALIDATION_ERROR"),
        (place_order.MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (place_order.CustomerNotFoundError, 404, "CUSTOMER_NOT_FOUND"),
        (place_order.MenuItemNotFoundError, 404, "ITEM_NOT_FOUND"),
        (place_order.InsufficientStockError, 409, "INSUFFICIENT_STOCK"),
        (place_order.OrderConflictError, 409, "CONFLICT"),
        (get_order.OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (list_orders.InvalidOrderFilterError, 400, "INVALID_ORDER_FILTER"),
        (update_payment_status.OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (update_payment_status.InvalidPaymentStatusError, 400, "INVALID_PAYMENT_STATUS"),
        (
            pending_payments.KitchenContactNotConfiguredError,
            503,
            "KITCHEN_CONTACT_NOT_CONFIGURED",
        ),
        (create_menu.MenuAlreadyExistsError, 409, "MENU_ALREADY_EXISTS"),
        (get_menu.MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (update_menu_item.MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (update_menu_item.MenuItemNotFoundError, 404, "ITEM_NOT_FOUND"),
        (send_menu.MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (register_customer.CustomerAlreadyExistsError, 409, "CUSTOMER_ALREADY_EXISTS"),
        (get_customer.CustomerNotFoundError, 404, "CUSTOMER_NOT_FOUND"),
        (update_customer.CustomerNotFoundError, 404, "CUSTOMER_NOT_FOUND"),
        (update_customer.InvalidCustomerUpdateError, 400, "VALIDATION_ERROR"),
        (create_review.InvalidReviewError, 400, "VALIDATION_ERROR"),
        (create_review.OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (create_review.CustomerNotFoundError, 404, "CUSTOMER_NOT_FOUND"),
        (create_review.MenuItemNotFoundError, 404, "ITEM_NOT_FOUND"),
        (create_review.ReviewReferenceNotFoundError, 404, "REFERENCE_NOT_FOUND"),
        (create_review.ReviewAlreadyExistsError, 409, "REVIEW_ALREADY_EXISTS"),
        (get_review.ReviewNotFoundError, 404, "REVIEW_NOT_FOUND"),
        (get_review.InvalidReviewFilterError, 400, "INVALID_REVIEW_FILTER"),
        (reports.InvalidReportPeriodError, 400, "INVALID_DATE_RANGE"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
