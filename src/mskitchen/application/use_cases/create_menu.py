from __future__ import annotations

import logging
from datetime import datetime, timezone

from mskitchen.application.dto.requests import CreateMenuRequest
from mskitchen.application.dto.responses import MenuResponse
from mskitchen.application.mappers.menu_mapper import to_menu_response
from mskitchen.application.ports.repositories import DuplicateMenuDateError, MenuRepository
from mskitchen.domain.common.ids import MenuId, MenuItemId, new_id
from mskitchen.domain.common.money import Money
from mskitchen.domain.menu.entities import Menu, MenuItem

logger = logging.getLogger(__name__)


class MenuAlreadyExistsError(Exception):
    pass


class CreateMenu:
    def __init__(self, repository: MenuRepository, currency: str = "INR") -> None:
        self._repository = repository
        self._currency = currency

    def execute(self, request_dto: CreateMenuRequest) -> MenuResponse:
        if self._repository.get_by_date(request_dto.menu_date) is not None:
            raise MenuAlreadyExistsError(f"menu already exists for date {request_dto.menu_date}")

        menu_id = MenuId(new_id("men"))
        menu = Menu(
            menu_id=menu_id,
            menu_date=request_dto.menu_date,
            delivery_window_start=request_dto.delivery_window_start,
            delivery_window_end=request_dto.delivery_window_end,
            upi_phone_number=request_dto.upi_phone_number,
            items=[
                MenuItem(
                    item_id=MenuItemId(new_id("itm")),
                    menu_id=menu_id,
                    name=item.name,
                    price=Money(amount=item.price, currency=self._currency),
                    quantity_available=item.quantity_available,
                )
                for item in request_dto.items
            ],
            created_at=datetime.now(timezone.utc),
        )
        try:
            self._repository.add(menu)
        except DuplicateMenuDateError as exc:
            raise MenuAlreadyExistsError(str(exc)) from exc

        logger.info("menu_created", extra={"menu_id": str(menu_id)})
        return to_menu_response(menu)
