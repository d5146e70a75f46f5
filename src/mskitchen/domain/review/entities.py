from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from mskitchen.domain.common.ids import CustomerId, MenuItemId, OrderId, ReviewId

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    review_id: ReviewId
    order_id: OrderId
    customer_id: CustomerId
    menu_item_id: MenuItemId | None
    rating: int
    comments: str | None
    created_at: datetime

    def __post_init__(self) -> None:
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
