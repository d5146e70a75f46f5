from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Engine, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mskitchen.application.ports.repositories import (
    DuplicateReviewError,
    ItemRatingData,
    MissingReferenceError,
    ReviewDetailData,
    ReviewFilters,
    ReviewRepository,
)
from mskitchen.domain.common.ids import CustomerId, MenuItemId, OrderId, ReviewId
from mskitchen.domain.common.money import CENT, Money
from mskitchen.domain.common.period import DatePeriod
from mskitchen.domain.review.entities import Review
from mskitchen.infrastructure.db.models.customer import CustomerModel
from mskitchen.infrastructure.db.models.menu import MenuItemModel
from mskitchen.infrastructure.db.models.order import OrderModel
from mskitchen.infrastructure.db.models.review import ReviewModel
from mskitchen.infrastructure.db.repositories.converters import as_utc
from mskitchen.infrastructure.db.session import get_engine

UNIQUE_REVIEW_CONSTRAINT = "uq_reviews_order_customer"


def _violated_constraint(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _review_to_domain(model: ReviewModel) -> Review:
    return Review(
        review_id=ReviewId(model.id),
        order_id=OrderId(model.order_id),
        customer_id=CustomerId(model.customer_id),
        menu_item_id=MenuItemId(model.menu_item_id) if model.menu_item_id else None,
        rating=model.rating,
        comments=model.comments,
        created_at=as_utc(model.created_at),
    )


class SqlAlchemyReviewRepository(ReviewRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, review_id: ReviewId) -> Review | None:
        statement = select(ReviewModel).where(ReviewModel.id == str(review_id))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return _review_to_domain(model)

    def exists_for(self, order_id: OrderId, customer_id: CustomerId) -> bool:
        statement = (
            select(ReviewModel.id)
            .where(
                ReviewModel.order_id == str(order_id),
                ReviewModel.customer_id == str(customer_id),
            )
            .limit(1)
        )
        with Session(self._engine) as session:
            return session.execute(statement).scalar_one_or_none() is not None

    def add(self, review: Review) -> None:
        model = ReviewModel(
            id=str(review.review_id),
            order_id=str(review.order_id),
            customer_id=str(review.customer_id),
            menu_item_id=str(review.menu_item_id) if review.menu_item_id else None,
            rating=review.rating,
            comments=review.comments,
            created_at=review.created_at,
        )
        with Session(self._engine) as session:
            session.add(model)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if _violated_constraint(exc) == UNIQUE_REVIEW_CONSTRAINT:
                    raise DuplicateReviewError(
                        f"review already exists for order {review.order_id}"
                    ) from exc
                raise MissingReferenceError(
                    f"review for order {review.order_id} references a missing row"
                ) from exc

    def list_reviews(self, filters: ReviewFilters) -> list[ReviewDetailData]:
        statement = (
            select(
                ReviewModel,
                CustomerModel.whatsapp_number,
                CustomerModel.name,
                MenuItemModel.name,
                OrderModel.order_value,
                OrderModel.currency,
            )
            .join(CustomerModel, CustomerModel.id == ReviewModel.customer_id)
            .join(OrderModel, OrderModel.id == ReviewModel.order_id)
            .outerjoin(MenuItemModel, MenuItemModel.id == ReviewModel.menu_item_id)
        )
        if filters.period.starts_at is not None:
            statement = statement.where(ReviewModel.created_at >= filters.period.starts_at)
        if filters.period.ends_before is not None:
            statement = statement.where(ReviewModel.created_at < filters.period.ends_before)
        if filters.menu_item_id is not None:
            statement = statement.where(ReviewModel.menu_item_id == str(filters.menu_item_id))
        if filters.min_rating is not None:
            statement = statement.where(ReviewModel.rating >= filters.min_rating)
        statement = statement.order_by(ReviewModel.created_at.desc(), ReviewModel.id)

        with Session(self._engine) as session:
            rows = session.execute(statement).all()
            return [
                ReviewDetailData(
                    review=_review_to_domain(model),
                    customer_whatsapp=whatsapp_number,
                    customer_name=customer_name,
                    menu_item_name=item_name,
                    order_value=Money(amount=order_value, currency=currency),
                )
                for model, whatsapp_number, customer_name, item_name, order_value, currency in rows
            ]

    def item_ratings(self, period: DatePeriod) -> list[ItemRatingData]:
        review_count = func.count(ReviewModel.id)
        average_rating = func.avg(ReviewModel.rating)
        statement = (
            select(MenuItemModel.id, MenuItemModel.name, review_count, average_rating)
            .join(ReviewModel, ReviewModel.menu_item_id == MenuItemModel.id)
            .join(OrderModel, OrderModel.id == ReviewModel.order_id)
        )
        if period.starts_at is not None:
            statement = statement.where(OrderModel.created_at >= period.starts_at)
        if period.ends_before is not None:
            statement = statement.where(OrderModel.created_at < period.ends_before)
        statement = (
            statement.group_by(MenuItemModel.id, MenuItemModel.name)
            .having(review_count > 0)
            .order_by(average_rating.desc(), review_count.desc(), MenuItemModel.id)
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()
        return [
            ItemRatingData(
                menu_item_id=MenuItemId(item_id),
                menu_item_name=name,
                review_count=int(count),
                average_rating=Decimal(str(average)).quantize(CENT),
            )
            for item_id, name, count, average in rows
        ]
