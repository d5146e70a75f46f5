from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from mskitchen.application.dto.requests import CreateReviewRequest
from mskitchen.application.dto.responses import (
    ItemRatingsResponse,
    ReviewListResponse,
    ReviewResponse,
)
from mskitchen.application.use_cases.create_review import CreateReview
from mskitchen.application.use_cases.get_review import GetReview, ItemRatings, ListReviews
from mskitchen.domain.common.ids import ReviewId
from mskitchen.infrastructure.db.repositories.customer_repo import SqlAlchemyCustomerRepository
from mskitchen.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from mskitchen.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from mskitchen.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository

router = APIRouter()


def create_review_use_case() -> CreateReview:
    return CreateReview(
        review_repository=SqlAlchemyReviewRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        customer_repository=SqlAlchemyCustomerRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )


def get_review_use_case() -> GetReview:
    return GetReview(repository=SqlAlchemyReviewRepository())


def list_reviews_use_case() -> ListReviews:
    return ListReviews(repository=SqlAlchemyReviewRepository())


def item_ratings_use_case() -> ItemRatings:
    return ItemRatings(repository=SqlAlchemyReviewRepository())


@router.post("/v1/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    request_dto: CreateReviewRequest,
    use_case: CreateReview = Depends(create_review_use_case),
) -> ReviewResponse:
    return use_case.execute(request_dto)


@router.get("/v1/reviews", response_model=ReviewListResponse)
def list_reviews(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    menu_item_id: str | None = Query(default=None, alias="menuItemId"),
    min_rating: int | None = Query(default=None, alias="minRating"),
    use_case: ListReviews = Depends(list_reviews_use_case),
) -> ReviewListResponse:
    return use_case.execute(
        start_date=start_date,
        end_date=end_date,
        menu_item_id=menu_item_id,
        min_rating=min_rating,
    )


@router.get("/v1/reviews/analytics/item-ratings", response_model=ItemRatingsResponse)
def item_ratings(use_case: ItemRatings = Depends(item_ratings_use_case)) -> ItemRatingsResponse:
    return use_case.execute()


@router.get("/v1/reviews/{review_id}", response_model=ReviewResponse)
def get_review(
    review_id: str,
    use_case: GetReview = Depends(get_review_use_case),
) -> ReviewResponse:
    return use_case.execute(ReviewId(review_id))
