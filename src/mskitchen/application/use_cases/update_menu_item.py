from __future__ import annotations

from mskitchen.application.dto.requests import UpdateMenuItemRequest
from mskitchen.application.dto.responses import MenuItemResponse
from mskitchen.application.mappers.menu_mapper import to_menu_item_response
from mskitchen.application.ports.repositories import MenuRepository
from mskitchen.domain.common.ids import MenuId, MenuItemId


class MenuNotFoundError(Exception):
    pass


class MenuItemNotFoundError(Exception):
    pass


class UpdateMenuItem:
    """Edit the price or stock of one item.

    Only the supplied fields are written, against the row as it stands when
    locked, so concurrent sales are never undone. Existing order lines keep
    their captured price.
    """

    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(
        self,
        menu_id: MenuId,
        item_id: MenuItemId,
        request_dto: UpdateMenuItemRequest,
    ) -> MenuItemResponse:
        if self._repository.get(menu_id) is None:
            raise MenuNotFoundError(f"menu {menu_id} not found")

        item = self._repository.update_item(
            menu_id=menu_id,
            item_id=item_id,
            price=request_dto.price,
            quantity_available=request_dto.quantity_available,
        )
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found in menu {menu_id}")
        return to_menu_item_response(item)
