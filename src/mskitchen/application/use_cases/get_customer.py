from __future__ import annotations

from mskitchen.application.dto.responses import CustomerListResponse, CustomerResponse
from mskitchen.application.mappers.customer_mapper import (
    to_customer_response,
    to_customer_summary_response,
)
from mskitchen.application.ports.repositories import CustomerRepository
from mskitchen.domain.common.ids import CustomerId


class CustomerNotFoundError(Exception):
    pass


class GetCustomer:
    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    def execute(self, customer_id: CustomerId) -> CustomerResponse:
        customer = self._repository.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"customer {customer_id} not found")
        return to_customer_response(customer)


class GetCustomerByWhatsappNumber:
    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    def execute(self, whatsapp_number: str) -> CustomerResponse:
        customer = self._repository.get_by_whatsapp_number(whatsapp_number.strip())
        if customer is None:
            raise CustomerNotFoundError(f"customer {whatsapp_number} not found")
        return to_customer_response(customer)


class ListCustomers:
    def __init__(self, repository: CustomerRepository) -> None:
        self._repository = repository

    def execute(self) -> CustomerListResponse:
        return CustomerListResponse(
            customers=[
                to_customer_summary_response(summary)
                for summary in self._repository.list_with_totals()
            ]
        )
