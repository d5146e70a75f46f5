from __future__ import annotations

from typing import NewType
from uuid import uuid4

CustomerId = NewType("CustomerId", str)
MenuId = NewType("MenuId", str)
MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
OrderLineId = NewType("OrderLineId", str)
ReviewId = NewType("ReviewId", str)


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"
