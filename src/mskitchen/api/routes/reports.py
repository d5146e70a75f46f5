from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from mskitchen.application.dto.responses import (
    CustomerOrderValuesResponse,
    ItemOrderCountsResponse,
    ItemRatingsResponse,
)
from mskitchen.application.use_cases.reports import (
    CustomerOrderValues,
    ItemOrderCounts,
    ItemRatingsReport,
)
from mskitchen.infrastructure.db.repositories.report_repo import SqlAlchemyReportRepository
from mskitchen.infrastructure.db.repositories.review_repo import SqlAlchemyReviewRepository

router = APIRouter()


def customer_order_values_use_case() -> CustomerOrderValues:
    return CustomerOrderValues(repository=SqlAlchemyReportRepository())


def item_order_counts_use_case() -> ItemOrderCounts:
    return ItemOrderCounts(repository=SqlAlchemyReportRepository())


def item_ratings_report_use_case() -> ItemRatingsReport:
    return ItemRatingsReport(repository=SqlAlchemyReviewRepository())


@router.get("/v1/reports/customer-order-values", response_model=CustomerOrderValuesResponse)
def customer_order_values(
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    use_case: CustomerOrderValues = Depends(customer_order_values_use_case),
) -> CustomerOrderValuesResponse:
    return use_case.execute(start_date, end_date)


@router.get("/v1/reports/item-order-counts", response_model=ItemOrderCountsResponse)
def item_order_counts(
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    use_case: ItemOrderCounts = Depends(item_order_counts_use_case),
) -> ItemOrderCountsResponse:
    return use_case.execute(start_date, end_date)


@router.get("/v1/reports/item-ratings", response_model=ItemRatingsResponse)
def item_ratings(
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    use_case: ItemRatingsReport = Depends(item_ratings_report_use_case),
) -> ItemRatingsResponse:
    return use_case.execute(start_date, end_date)
