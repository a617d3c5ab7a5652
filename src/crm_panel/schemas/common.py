"""Shared API schemas."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel

from ..state.notifications import Notification


class NotificationModel(BaseModel):
    level: Literal["success", "error", "info"]
    message: str
    field: Optional[str] = None


def notification_models(notifications: list[Notification]) -> list[NotificationModel]:
    return [
        NotificationModel(level=item.level, message=item.message, field=item.field)
        for item in notifications
    ]
