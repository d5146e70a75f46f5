from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, status

from mskitchen.api import dependencies
from mskitchen.application.dto.requests import (
    CreateMenuRequest,
    SendMenuRequest,
    UpdateMenuItemRequest,
)
from mskitchen.application.dto.responses import (
    MenuItemResponse,
    MenuListResponse,
    MenuResponse,
    SendMenuResponse,
)
from mskitchen.application.use_cases.create_menu import CreateMenu
from mskitchen.application.use_cases.get_menu import GetMenu, GetMenuByDate, ListMenus
from mskitchen.application.use_cases.send_menu import SendMenu
from mskitchen.application.use_cases.update_menu_item import UpdateMenuItem
from mskitchen.domain.common.ids import MenuId, MenuItemId
from mskitchen.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository

router = APIRouter()


def create_menu_use_case() -> CreateMenu:
    return CreateMenu(repository=SqlAlchemyMenuRepository(), currency=dependencies.currency())


def get_menu_use_case() -> GetMenu:
    return GetMenu(repository=SqlAlchemyMenuRepository())


def get_menu_by_date_use_case() -> GetMenuByDate:
    return GetMenuByDate(repository=SqlAlchemyMenuRepository())


def list_menus_use_case() -> ListMenus:
    return ListMenus(repository=SqlAlchemyMenuRepository())


def update_menu_item_use_case() -> UpdateMenuItem:
    return UpdateMenuItem(repository=SqlAlchemyMenuRepository())


def send_menu_use_case() -> SendMenu:
    return SendMenu(
        repository=SqlAlchemyMenuRepository(),
        notifier=dependencies.notifier(),
        app_url=dependencies.app_url(),
    )


@router.get("/v1/menus", response_model=MenuListResponse)
def list_menus(use_case: ListMenus = Depends(list_menus_use_case)) -> MenuListResponse:
    return use_case.execute()


@router.post("/v1/menus", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
def create_menu(
    request_dto: CreateMenuRequest,
    use_case: CreateMenu = Depends(create_menu_use_case),
) -> MenuResponse:
    return use_case.execute(request_dto)


@router.get("/v1/menus/date/{menu_date}", response_model=MenuResponse)
def get_menu_by_date(
    menu_date: date,
    use_case: GetMenuByDate = Depends(get_menu_by_date_use_case),
) -> MenuResponse:
    return use_case.execute(menu_date)


@router.get("/v1/menus/{menu_id}", response_model=MenuResponse)
def get_menu(
    menu_id: str,
    use_case: GetMenu = Depends(get_menu_use_case),
) -> MenuResponse:
    return use_case.execute(MenuId(menu_id))


@router.patch("/v1/menus/{menu_id}/items/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    menu_id: str,
    item_id: str,
    request_dto: UpdateMenuItemRequest,
    use_case: UpdateMenuItem = Depends(update_menu_item_use_case),
) -> MenuItemResponse:
    return use_case.execute(
        menu_id=MenuId(menu_id),
        item_id=MenuItemId(item_id),
        request_dto=request_dto,
    )


@router.post("/v1/menus/{menu_id}/send-whatsapp", response_model=SendMenuResponse)
def send_menu(
    menu_id: str,
    request_dto: SendMenuRequest,
    use_case: SendMenu = Depends(send_menu_use_case),
) -> SendMenuResponse:
    return use_case.execute(
        menu_id=MenuId(menu_id),
        customer_numbers=request_dto.customer_numbers,
    )
