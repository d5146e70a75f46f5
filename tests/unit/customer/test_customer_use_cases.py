from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from kitchen_fakes import (
    DAL_ID,
    RICE_ID,
    FakeCustomerRepository,
    InMemoryStore,
    add_order,
    make_customer,
)
from mskitchen.application.dto.requests import RegisterCustomerRequest, UpdateCustomerRequest
from mskitchen.application.use_cases.get_customer import (
    CustomerNotFoundError,
    GetCustomer,
    GetCustomerByWhatsappNumber,
    ListCustomers,
)
from mskitchen.application.use_cases.register_customer import (
    CustomerAlreadyExistsError,
    RegisterCustomer,
)
from mskitchen.application.use_cases.update_customer import (
    InvalidCustomerUpdateError,
    UpdateCustomer,
)
from mskitchen.domain.common.ids import CustomerId


def test_register_customer_trims_contact(store: InMemoryStore) -> None:
    repository = FakeCustomerRepository(store)

    response = RegisterCustomer(repository=repository).execute(
        RegisterCustomerRequest(whatsapp_number=" +919800000005 ", address="3 Lake View")
    )

    assert response.whatsappNumber == "+919800000005"
    assert response.name is None
    assert repository.get_by_whatsapp_number("+919800000005") is not None


def test_register_customer_rejects_known_contact(store: InMemoryStore) -> None:
    existing = make_customer()
    store.customers[existing.customer_id] = existing

    with pytest.raises(CustomerAlreadyExistsError) as exc_info:
        RegisterCustomer(repository=FakeCustomerRepository(store)).execute(
            RegisterCustomerRequest(whatsapp_number=existing.whatsapp_number, address="elsewhere")
        )

    assert exc_info.value.details == {"customerId": existing.customer_id}


def test_get_customer_by_id_and_contact(store: InMemoryStore) -> None:
    existing = make_customer()
    store.customers[existing.customer_id] = existing
    repository = FakeCustomerRepository(store)

    by_id = GetCustomer(repository=repository).execute(existing.customer_id)
    by_contact = GetCustomerByWhatsappNumber(repository=repository).execute(
        existing.whatsapp_number
    )

    assert by_id == by_contact
    assert by_id.address == "12 MG Road"


def test_get_customer_missing_raises_not_found(store: InMemoryStore) -> None:
    repository = FakeCustomerRepository(store)

    with pytest.raises(CustomerNotFoundError):
        GetCustomer(repository=repository).execute(CustomerId("cus_missing"))
    with pytest.raises(CustomerNotFoundError):
        GetCustomerByWhatsappNumber(repository=repository).execute("+910000000000")


def test_update_customer_changes_only_given_fields(store: InMemoryStore) -> None:
    existing = make_customer()
    store.customers[existing.customer_id] = existing

    response = UpdateCustomer(repository=FakeCustomerRepository(store)).execute(
        customer_id=existing.customer_id,
        request_dto=UpdateCustomerRequest(name="Asha K"),
    )

    assert response.name == "Asha K"
    assert response.address == "12 MG Road"
    assert response.updatedAt > existing.updated_at


def test_update_customer_rejects_blank_address(store: InMemoryStore) -> None:
    existing = make_customer()
    store.customers[existing.customer_id] = existing

    with pytest.raises(InvalidCustomerUpdateError):
        UpdateCustomer(repository=FakeCustomerRepository(store)).execute(
            customer_id=existing.customer_id,
            request_dto=UpdateCustomerRequest(address="   "),
        )


def test_list_customers_includes_order_counts_and_spend(store: InMemoryStore) -> None:
    asha = make_customer("cus_a", "+919800000001")
    ravi = make_customer("cus_b", "+919800000002", name=None)
    store.customers[ravi.customer_id] = ravi
    created_at = datetime(2026, 10, 20, 9, 0, tzinfo=timezone.utc)
    add_order(store, "ord_1", asha, [(DAL_ID, 2)], created_at)
    add_order(store, "ord_2", asha, [(RICE_ID, 1)], created_at)

    response = ListCustomers(repository=FakeCustomerRepository(store)).execute()

    by_id = {customer.customerId: customer for customer in response.customers}
    assert set(by_id) == {"cus_a", "cus_b"}
    assert by_id["cus_a"].totalOrders == 2
    assert [(money.amount, money.currency) for money in by_id["cus_a"].totalSpent] == [
        (Decimal("140.00"), "INR")
    ]
    assert by_id["cus_b"].totalOrders == 0
    assert by_id["cus_b"].totalSpent == []
