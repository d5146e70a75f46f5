from __future__ import annotations

from datetime import datetime, timezone

from mskitchen.application.dto.requests import RegisterCustomerRequest
from mskitchen.application.dto.responses import CustomerResponse
from mskitchen.application.mappers.customer_mapper import to_customer_response
from mskitchen.application.ports.repositories import CustomerRepository, DuplicateCustomerError
from mskitchen.domain.common.ids import CustomerId, new_id
from mskitchen.domain.customer.entities import NewCustomerInfo, new_customer


class CustomerAlreadyExistsError(Exception):
    def __init__(self, message: str, customer_id: str) -> None:
        super().__init__(message)
        self.details = {"customerId": customer_id}


class RegisterCustomer:
    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    def execute(self, request_dto: RegisterCustomerRequest) -> CustomerResponse:
        whatsapp_number = request_dto.whatsapp_number.strip()
        existing = self._repository.get_by_whatsapp_number(whatsapp_number)
        if existing is not None:
            raise CustomerAlreadyExistsError(
                "customer with this WhatsApp number already exists",
                customer_id=str(existing.customer_id),
            )

        customer = new_customer(
            customer_id=CustomerId(new_id("cus")),
            info=NewCustomerInfo(
                whatsapp_number=whatsapp_number,
                address=request_dto.address,
                name=request_dto.name,
            ),
            now=datetime.now(timezone.utc),
        )
        try:
            self._repository.add(customer)
        except DuplicateCustomerError as exc:
            current = self._repository.get_by_whatsapp_number(whatsapp_number)
            raise CustomerAlreadyExistsError(
                str(exc),
                customer_id=str(current.customer_id) if current else "",
            ) from exc
        return to_customer_response(customer)
