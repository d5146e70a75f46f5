from __future__ import annotations

from datetime import datetime, timezone

from mskitchen.application.dto.requests import CreateReviewRequest
from mskitchen.application.dto.responses import ReviewResponse
from mskitchen.application.mappers.review_mapper import to_review_response
from mskitchen.application.ports.repositories import (
    CustomerRepository,
    DuplicateReviewError,
    MenuRepository,
    MissingReferenceError,
    OrderRepository,
    ReviewRepository,
)
from mskitchen.domain.common.ids import CustomerId, MenuItemId, OrderId, ReviewId, new_id
from mskitchen.domain.review.entities import MAX_RATING, MIN_RATING, Review


class InvalidReviewError(Exception):
    pass


class OrderNotFoundError(Exception):
    pass


class CustomerNotFoundError(Exception):
    pass


class MenuItemNotFoundError(Exception):
    pass


class ReviewReferenceNotFoundError(Exception):
    pass


class ReviewAlreadyExistsError(Exception):
    pass


class CreateReview:
    def __init__(
        self,
        review_repository: ReviewRepository,
        order_repository: OrderRepository,
        customer_repository: CustomerRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._review_repository = review_repository
        self._order_repository = order_repository
        self._customer_repository = customer_repository
        self._menu_repository = menu_repository

    def execute(self, request_dto: CreateReviewRequest) -> ReviewResponse:
        if not MIN_RATING <= request_dto.rating <= MAX_RATING:
            raise InvalidReviewError(f"rating must be between {MIN_RATING} and {MAX_RATING}")

        order_id = OrderId(request_dto.order_id)
        customer_id = CustomerId(request_dto.customer_id)
        menu_item_id = MenuItemId(request_dto.menu_item_id) if request_dto.menu_item_id else None
        if self._order_repository.get(order_id) is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        if self._customer_repository.get(customer_id) is None:
            raise CustomerNotFoundError(f"customer {customer_id} not found")
        if menu_item_id is not None and self._menu_repository.get_item(menu_item_id) is None:
            raise MenuItemNotFoundError(f"menu item {menu_item_id} not found")
        if self._review_repository.exists_for(order_id=order_id, customer_id=customer_id):
            raise ReviewAlreadyExistsError(f"review already exists for order {order_id}")

        review = Review(
            review_id=ReviewId(new_id("rev")),
            order_id=order_id,
            customer_id=customer_id,
            menu_item_id=menu_item_id,
            rating=request_dto.rating,
            comments=request_dto.comments or None,
            created_at=datetime.now(timezone.utc),
        )
        try:
            self._review_repository.add(review)
        except DuplicateReviewError as exc:
            raise ReviewAlreadyExistsError(str(exc)) from exc
        except MissingReferenceError as exc:
            raise ReviewReferenceNotFoundError(str(exc)) from exc
        return to_review_response(review)
