"""Dashboard schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from ..models.domain import FilterBucket
from .common import NotificationModel


class StatCardModel(BaseModel):
    title: str
    value: int
    filter: FilterBucket
    active: bool


class DashboardStatsResponse(BaseModel):
    cards: List[StatCardModel]
    activeFilter: FilterBucket
    notifications: List[NotificationModel] = []


class QuickFilterRequest(BaseModel):
    filter: FilterBucket
