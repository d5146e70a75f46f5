from __future__ import annotations

import logging

from mskitchen.application.dto.responses import SendMenuResponse, SendResultResponse
from mskitchen.application.metrics.order_lifecycle import record_notification
from mskitchen.application.notifications.messages import render_menu
from mskitchen.application.ports.notifier import NotificationResult, Notifier
from mskitchen.application.ports.repositories import MenuRepository
from mskitchen.domain.common.ids import MenuId

logger = logging.getLogger(__name__)


class MenuNotFoundError(Exception):
    pass


class SendMenu:
    def __init__(self, repository: MenuRepository, notifier: Notifier, app_url: str) -> None:
        self._repository = repository
        self._notifier = notifier
        self._app_url = app_url

    def execute(self, menu_id: MenuId, customer_numbers: list[str]) -> SendMenuResponse:
        menu = self._repository.get(menu_id)
        if menu is None:
            raise MenuNotFoundError(f"menu {menu_id} not found")

        text = render_menu(menu, app_url=self._app_url)
        results: list[SendResultResponse] = []
        for number in customer_numbers:
            try:
                result = self._notifier.notify(destination=number, text=text)
            except Exception as exc:
                logger.exception("menu_notification_failed", extra={"destination": number})
                result = NotificationResult(success=False, error=str(exc))
            record_notification(kind="menu", success=result.success)
            results.append(
                SendResultResponse(
                    number=number,
                    success=result.success,
                    messageId=result.message_id,
                    error=result.error,
                )
            )

        return SendMenuResponse(menuId=str(menu_id), messagesSent=len(results), results=results)
