from __future__ import annotations

from mskitchen.application.dto.responses import (
    ItemRatingResponse,
    ReviewDetailResponse,
    ReviewResponse,
)
from mskitchen.application.mappers.money_mapper import to_money_response
from mskitchen.application.ports.repositories import ItemRatingData, ReviewDetailData
from mskitchen.domain.review.entities import Review


def to_review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        reviewId=str(review.review_id),
        orderId=str(review.order_id),
        customerId=str(review.customer_id),
        menuItemId=str(review.menu_item_id) if review.menu_item_id else None,
        rating=review.rating,
        comments=review.comments,
        createdAt=review.created_at,
    )


def to_review_detail_response(detail: ReviewDetailData) -> ReviewDetailResponse:
    return ReviewDetailResponse(
        **to_review_response(detail.review).model_dump(),
        customerWhatsapp=detail.customer_whatsapp,
        customerName=detail.customer_name,
        menuItemName=detail.menu_item_name,
        orderValue=to_money_response(detail.order_value),
    )


def to_item_rating_response(rating: ItemRatingData) -> ItemRatingResponse:
    return ItemRatingResponse(
        menuItemId=str(rating.menu_item_id),
        menuItemName=rating.menu_item_name,
        reviewCount=rating.review_count,
        averageRating=rating.average_rating,
    )
