from __future__ import annotations

from mskitchen.application.dto.responses import CustomerResponse, CustomerSummaryResponse
from mskitchen.application.mappers.money_mapper import to_money_response
from mskitchen.application.ports.repositories import CustomerSummaryData
from mskitchen.domain.customer.entities import Customer


def to_customer_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(
        customerId=str(customer.customer_id),
        whatsappNumber=customer.whatsapp_number,
        address=customer.address,
        name=customer.name,
        createdAt=customer.created_at,
        updatedAt=customer.updated_at,
    )


def to_customer_summary_response(summary: CustomerSummaryData) -> CustomerSummaryResponse:
    return CustomerSummaryResponse(
        **to_customer_response(summary.customer).model_dump(),
        totalOrders=summary.total_orders,
        totalSpent=[to_money_response(total) for total in summary.totals_spent],
    )
