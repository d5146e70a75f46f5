from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class NotificationResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


class Notifier(Protocol):
    def notify(self, destination: str, text: str) -> NotificationResult: ...
