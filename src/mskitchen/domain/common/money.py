from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise TypeError("amount must be a Decimal")
        if not self.amount.is_finite():
            raise ValueError("amount must be finite")
        if self.amount < 0:
            raise ValueError("amount must be >= 0")
        if self.amount != self.amount.quantize(CENT):
            raise ValueError("amount must have at most 2 decimal places")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")
        object.__setattr__(self, "amount", self.amount.quantize(CENT))

    @classmethod
    def zero(cls, currency: str) -> Money:
        return cls(amount=Decimal("0.00"), currency=currency)

    def times(self, quantity: int) -> Money:
        if quantity < 0:
            raise ValueError("quantity must be >= 0")
        return Money(amount=self.amount * quantity, currency=self.currency)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        if other.currency != self.currency:
            raise ValueError("cannot add money in different currencies")
        return Money(amount=self.amount + other.amount, currency=self.currency)


def totals_by_currency(amounts: Iterable[Money]) -> list[Money]:
    totals: dict[str, Money] = {}
    for money in amounts:
        current = totals.get(money.currency)
        totals[money.currency] = money if current is None else current + money
    return [totals[currency] for currency in sorted(totals)]
