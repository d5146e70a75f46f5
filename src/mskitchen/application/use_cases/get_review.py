from __future__ import annotations

from datetime import date

from mskitchen.application.dto.responses import (
    ItemRatingsResponse,
    ReviewListResponse,
    ReviewResponse,
)
from mskitchen.application.mappers.review_mapper import (
    to_item_rating_response,
    to_review_detail_response,
    to_review_response,
)
from mskitchen.application.ports.repositories import ReviewFilters, ReviewRepository
from mskitchen.domain.common.ids import MenuItemId, ReviewId
from mskitchen.domain.common.period import DatePeriod
from mskitchen.domain.review.entities import MAX_RATING, MIN_RATING


class ReviewNotFoundError(Exception):
    pass


class InvalidReviewFilterError(Exception):
    pass


class GetReview:
    def __init__(self, repository: ReviewRepository) -> None:
        self._repository = repository

    def execute(self, review_id: ReviewId) -> ReviewResponse:
        review = self._repository.get(review_id)
        if review is None:
            raise ReviewNotFoundError(f"review {review_id} not found")
        return to_review_response(review)


class ListReviews:
    def __init__(self, repository: ReviewRepository) -> None:
        self._repository = repository

    def execute(
        self,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        menu_item_id: str | None = None,
        min_rating: int | None = None,
    ) -> ReviewListResponse:
        if min_rating is not None and not MIN_RATING <= min_rating <= MAX_RATING:
            raise InvalidReviewFilterError(
                f"minimum rating must be between {MIN_RATING} and {MAX_RATING}"
            )
        try:
            period = DatePeriod(start=start_date, end=end_date)
        except ValueError as exc:
            raise InvalidReviewFilterError(str(exc)) from exc

        details = self._repository.list_reviews(
            ReviewFilters(
                period=period,
                menu_item_id=MenuItemId(menu_item_id) if menu_item_id else None,
                min_rating=min_rating,
            )
        )
        return ReviewListResponse(reviews=[to_review_detail_response(row) for row in details])


class ItemRatings:
    def __init__(self, repository: ReviewRepository) -> None:
        self._repository = repository

    def execute(self, period: DatePeriod | None = None) -> ItemRatingsResponse:
        rows = self._repository.item_ratings(period or DatePeriod())
        return ItemRatingsResponse(items=[to_item_rating_response(row) for row in rows])
