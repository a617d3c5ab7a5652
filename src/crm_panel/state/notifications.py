"""Out-of-band user notifications (the toast side channel)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

logger = logging.getLogger(__name__)

Level = Literal["success", "error", "info"]


@dataclass(frozen=True, slots=True)
class Notification:
    level: Level
    message: str
    field: Optional[str] = None


class Notifier:
    """Collects notifications until the HTTP layer drains them."""

    def __init__(self) -> None:
        self._pending: list[Notification] = []

    def push(self, level: Level, message: str, field: Optional[str] = None) -> Notification:
        notification = Notification(level=level, message=message, field=field)
        self._pending.append(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.push("success", message)

    def error(self, message: str, field: Optional[str] = None) -> Notification:
        return self.push("error", message, field)

    def info(self, message: str) -> Notification:
        return self.push("info", message)

    @property
    def pending(self) -> tuple[Notification, ...]:
        return tuple(self._pending)

    def drain(self) -> list[Notification]:
        drained, self._pending = self._pending, []
        return drained
