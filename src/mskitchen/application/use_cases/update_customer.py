from __future__ import annotations

from datetime import datetime, timezone

from mskitchen.application.dto.requests import UpdateCustomerRequest
from mskitchen.application.dto.responses import CustomerResponse
from mskitchen.application.mappers.customer_mapper import to_customer_response
from mskitchen.application.ports.repositories import CustomerRepository
from mskitchen.domain.common.ids import CustomerId


class CustomerNotFoundError(Exception):
    pass


class InvalidCustomerUpdateError(Exception):
    pass


class UpdateCustomer:
    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    def execute(
        self,
        customer_id: CustomerId,
        request_dto: UpdateCustomerRequest,
    ) -> CustomerResponse:
        customer = self._repository.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"customer {customer_id} not found")

        try:
            updated = customer.with_details(
                address=request_dto.address,
                name=request_dto.name,
                now=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise InvalidCustomerUpdateError(str(exc)) from exc

        self._repository.update(updated)
        return to_customer_response(updated)
