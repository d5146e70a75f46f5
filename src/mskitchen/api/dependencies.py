from __future__ import annotations

import os

from mskitchen.application.ports.notifier import Notifier
from mskitchen.infrastructure.notifications.twilio_whatsapp import build_notifier

DEFAULT_APP_URL = "https://ms-kitchen.fly.dev"
DEFAULT_CURRENCY = "INR"


def currency() -> str:
    return os.getenv("CURRENCY", DEFAULT_CURRENCY).upper()


def kitchen_whatsapp_number() -> str | None:
    return os.getenv("KITCHEN_WHATSAPP_NUMBER") or None


def app_url() -> str:
    return os.getenv("APP_URL", DEFAULT_APP_URL).rstrip("/")


def notifier() -> Notifier:
    return build_notifier()
