from __future__ import annotations

import logging
import os

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from mskitchen.application.ports.notifier import NotificationResult, Notifier

logger = logging.getLogger(__name__)

DEFAULT_WHATSAPP_FROM = "whatsapp:+14155238886"
WHATSAPP_PREFIX = "whatsapp:"


def whatsapp_address(number: str) -> str:
    number = number.strip()
    if number.startswith(WHATSAPP_PREFIX):
        return number
    return f"{WHATSAPP_PREFIX}{number}"


class TwilioWhatsAppNotifier(Notifier):
    def __init__(self, client: Client, from_number: str = DEFAULT_WHATSAPP_FROM) -> None:
        self._client = client
        self._from_number = whatsapp_address(from_number)

    def notify(self, destination: str, text: str) -> NotificationResult:
        try:
            message = self._client.messages.create(
                body=text,
                from_=self._from_number,
                to=whatsapp_address(destination),
            )
        except TwilioException as exc:
            logger.warning(
                "whatsapp_send_failed",
                extra={"destination": destination, "reason": str(exc)},
            )
            return NotificationResult(success=False, error=str(exc))

        logger.info("whatsapp_sent", extra={"destination": destination})
        return NotificationResult(success=True, message_id=message.sid)


class UnconfiguredNotifier(Notifier):
    """Stands in when Twilio credentials are absent; every send reports failure."""

    def notify(self, destination: str, text: str) -> NotificationResult:
        logger.info(
            "whatsapp_not_configured",
            extra={"destination": destination, "reason": "missing twilio credentials"},
        )
        return NotificationResult(success=False, error="whatsapp not configured")


def build_notifier() -> Notifier:
    account_sid = os.getenv("TWILIO_ACCOUNT_SID")
    auth_token = os.getenv("TWILIO_AUTH_TOKEN")
    if not account_sid or not auth_token:
        return UnconfiguredNotifier()
    return TwilioWhatsAppNotifier(
        client=Client(account_sid, auth_token),
        from_number=os.getenv("TWILIO_WHATSAPP_FROM", DEFAULT_WHATSAPP_FROM),
    )
