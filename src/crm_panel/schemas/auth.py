"""Session and staff management schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import NotificationModel


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class ProfileModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
    role: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None


class SessionResponse(BaseModel):
    accessToken: str
    userId: str
    email: Optional[str] = None
    profile: Optional[ProfileModel] = None


class StatusResponse(BaseModel):
    ok: bool
    notifications: list[NotificationModel] = []


class CreateUserRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str
    fullName: str = Field(..., min_length=1)


class RoleUpdateRequest(BaseModel):
    role: str = Field(..., min_length=1)


class StaffListResponse(BaseModel):
    users: list[ProfileModel]
    notifications: list[NotificationModel] = []


class PreferencesModel(BaseModel):
    darkMode: bool = False
