from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Engine, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mskitchen.application.ports.repositories import (
    CustomerRepository,
    CustomerSummaryData,
    DuplicateCustomerError,
)
from mskitchen.domain.common.ids import CustomerId
from mskitchen.domain.common.money import CENT, Money
from mskitchen.domain.customer.entities import Customer
from mskitchen.infrastructure.db.models.customer import CustomerModel
from mskitchen.infrastructure.db.models.order import OrderModel
from mskitchen.infrastructure.db.repositories.converters import (
    customer_to_domain,
    customer_to_model,
)
from mskitchen.infrastructure.db.session import get_engine


class SqlAlchemyCustomerRepository(CustomerRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, customer_id: CustomerId) -> Customer | None:
        statement = select(CustomerModel).where(CustomerModel.id == str(customer_id))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return customer_to_domain(model)

    def get_by_whatsapp_number(self, whatsapp_number: str) -> Customer | None:
        statement = select(CustomerModel).where(CustomerModel.whatsapp_number == whatsapp_number)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return customer_to_domain(model)

    def add(self, customer: Customer) -> None:
        with Session(self._engine) as session:
            session.add(customer_to_model(customer))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateCustomerError(
                    f"customer with WhatsApp number {customer.whatsapp_number} already exists"
                ) from exc

    def update(self, customer: Customer) -> None:
        statement = (
            update(CustomerModel)
            .where(CustomerModel.id == str(customer.customer_id))
            .values(
                address=customer.address,
                name=customer.name,
                updated_at=customer.updated_at,
            )
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def list_with_totals(self) -> list[CustomerSummaryData]:
        statement = (
            select(
                CustomerModel,
                OrderModel.currency,
                func.count(OrderModel.id),
                func.coalesce(func.sum(OrderModel.order_value), 0),
            )
            .outerjoin(OrderModel, OrderModel.customer_id == CustomerModel.id)
            .group_by(CustomerModel.id, OrderModel.currency)
            .order_by(CustomerModel.created_at.desc(), CustomerModel.id, OrderModel.currency)
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()

            summaries: dict[str, CustomerSummaryData] = {}
            for model, currency, order_count, spent in rows:
                summary = summaries.get(model.id)
                if summary is None:
                    summary = CustomerSummaryData(
                        customer=customer_to_domain(model),
                        total_orders=0,
                        totals_spent=[],
                    )
                if currency is not None:
                    summary = CustomerSummaryData(
                        customer=summary.customer,
                        total_orders=summary.total_orders + int(order_count),
                        totals_spent=[
                            *summary.totals_spent,
                            Money(amount=Decimal(str(spent)).quantize(CENT), currency=currency),
                        ],
                    )
                summaries[model.id] = summary
            return list(summaries.values())
