from __future__ import annotations

from mskitchen.application.dto.responses import MoneyResponse
from mskitchen.domain.common.money import Money


def to_money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(amount=money.amount, currency=money.currency)
