from __future__ import annotations

from datetime import date

from mskitchen.application.dto.responses import MenuListResponse, MenuResponse
from mskitchen.application.mappers.menu_mapper import to_menu_response, to_menu_summary_response
from mskitchen.application.ports.repositories import MenuRepository
from mskitchen.domain.common.ids import MenuId


class MenuNotFoundError(Exception):
    pass


class GetMenu:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, menu_id: MenuId) -> MenuResponse:
        menu = self._repository.get(menu_id)
        if menu is None:
            raise MenuNotFoundError(f"menu {menu_id} not found")
        return to_menu_response(menu)


class GetMenuByDate:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self, menu_date: date) -> MenuResponse:
        menu = self._repository.get_by_date(menu_date)
        if menu is None:
            raise MenuNotFoundError(f"menu not found for date {menu_date.isoformat()}")
        return to_menu_response(menu)


class ListMenus:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self) -> MenuListResponse:
        return MenuListResponse(
            menus=[to_menu_summary_response(row) for row in self._repository.list_with_totals()]
        )
