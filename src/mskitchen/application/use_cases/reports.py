"""Date-range analytics over placed orders.

Ranges are inclusive calendar days in UTC and filter on order creation time.
"""

from __future__ import annotations

from datetime import date

from mskitchen.application.dto.responses import (
    CustomerOrderValuesResponse,
    ItemOrderCountsResponse,
    ItemRatingsResponse,
)
from mskitchen.application.mappers.report_mapper import (
    to_customer_order_value_response,
    to_item_order_count_response,
)
from mskitchen.application.ports.repositories import ReportRepository, ReviewRepository
from mskitchen.application.use_cases.get_review import ItemRatings
from mskitchen.domain.common.period import DatePeriod


class InvalidReportPeriodError(Exception):
    pass


def report_period(start_date: date, end_date: date) -> DatePeriod:
    try:
        return DatePeriod(start=start_date, end=end_date)
    except ValueError as exc:
        raise InvalidReportPeriodError(str(exc)) from exc


class CustomerOrderValues:
    def __init__(self, repository: ReportRepository) -> None:
        self._repository = repository

    def execute(self, start_date: date, end_date: date) -> CustomerOrderValuesResponse:
        rows = self._repository.customer_order_values(report_period(start_date, end_date))
        return CustomerOrderValuesResponse(
            startDate=start_date,
            endDate=end_date,
            customers=[to_customer_order_value_response(row) for row in rows],
        )


class ItemOrderCounts:
    def __init__(self, repository: ReportRepository) -> None:
        self._repository = repository

    def execute(self, start_date: date, end_date: date) -> ItemOrderCountsResponse:
        rows = self._repository.item_order_counts(report_period(start_date, end_date))
        return ItemOrderCountsResponse(
            startDate=start_date,
            endDate=end_date,
            items=[to_item_order_count_response(row) for row in rows],
        )


class ItemRatingsReport:
    def __init__(self, repository: ReviewRepository) -> None:
        self._item_ratings = ItemRatings(repository)

    def execute(self, start_date: date, end_date: date) -> ItemRatingsResponse:
        return self._item_ratings.execute(report_period(start_date, end_date))
