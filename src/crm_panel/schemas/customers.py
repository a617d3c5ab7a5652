"""Customer form and record schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .common import NotificationModel


class CustomerFormModel(BaseModel):
    """Raw form input; shape checks and sanitizing happen in the form service."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    age: Union[int, str, None] = ""
    interests: Optional[str] = None
    feelings: Optional[str] = None
    values: Optional[str] = None
    other_info: Optional[str] = None
    active: bool = True
    reviewed: bool = False


class CustomerModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    name: str
    email: str
    phone: str
    address: str = ""
    age: int = 0
    interests: Optional[str] = None
    feelings: Optional[str] = None
    values: Optional[str] = None
    other_info: Optional[str] = None
    active: bool = True
    reviewed: bool = False
    created_at: Optional[datetime] = None


class FormResultResponse(BaseModel):
    ok: bool
    customer: Optional[CustomerModel] = None
    fieldErrors: dict[str, str] = {}
    notifications: list[NotificationModel] = []
