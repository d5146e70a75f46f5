from __future__ import annotations

from fastapi import APIRouter, Depends, status

from mskitchen.application.dto.requests import RegisterCustomerRequest, UpdateCustomerRequest
from mskitchen.application.dto.responses import CustomerListResponse, CustomerResponse
from mskitchen.application.use_cases.get_customer import (
    GetCustomer,
    GetCustomerByWhatsappNumber,
    ListCustomers,
)
from mskitchen.application.use_cases.register_customer import RegisterCustomer
from mskitchen.application.use_cases.update_customer import UpdateCustomer
from mskitchen.domain.common.ids import CustomerId
from mskitchen.infrastructure.db.repositories.customer_repo import SqlAlchemyCustomerRepository

router = APIRouter()


def register_customer_use_case() -> RegisterCustomer:
    return RegisterCustomer(repository=SqlAlchemyCustomerRepository())


def get_customer_use_case() -> GetCustomer:
    return GetCustomer(repository=SqlAlchemyCustomerRepository())


def get_customer_by_whatsapp_use_case() -> GetCustomerByWhatsappNumber:
    return GetCustomerByWhatsappNumber(repository=SqlAlchemyCustomerRepository())


def update_customer_use_case() -> UpdateCustomer:
    return UpdateCustomer(repository=SqlAlchemyCustomerRepository())


def list_customers_use_case() -> ListCustomers:
    return ListCustomers(repository=SqlAlchemyCustomerRepository())


@router.post(
    "/v1/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_customer(
    request_dto: RegisterCustomerRequest,
    use_case: RegisterCustomer = Depends(register_customer_use_case),
) -> CustomerResponse:
    return use_case.execute(request_dto)


@router.get("/v1/customers", response_model=CustomerListResponse)
def list_customers(
    use_case: ListCustomers = Depends(list_customers_use_case),
) -> CustomerListResponse:
    return use_case.execute()


@router.get("/v1/customers/by-whatsapp/{whatsapp_number}", response_model=CustomerResponse)
def get_customer_by_whatsapp(
    whatsapp_number: str,
    use_case: GetCustomerByWhatsappNumber = Depends(get_customer_by_whatsapp_use_case),
) -> CustomerResponse:
    return use_case.execute(whatsapp_number)


@router.get("/v1/customers/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    use_case: GetCustomer = Depends(get_customer_use_case),
) -> CustomerResponse:
    return use_case.execute(CustomerId(customer_id))


@router.patch("/v1/customers/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    request_dto: UpdateCustomerRequest,
    use_case: UpdateCustomer = Depends(update_customer_use_case),
) -> CustomerResponse:
    return use_case.execute(customer_id=CustomerId(customer_id), request_dto=request_dto)
