"""Print report schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ..models.domain import FilterBucket


class PrintRowModel(BaseModel):
    id: Optional[str] = None
    name: str
    email: str
    phone: str
    address: str
    age: int
    interests: Optional[str] = None
    feelings: Optional[str] = None
    values: Optional[str] = None
    other_info: Optional[str] = None
    status: str
    reviewed: bool
    date: str


class PrintReportResponse(BaseModel):
    filter: FilterBucket
    searchText: str
    generatedAt: str
    generatedLabel: str
    totalRecords: int
    rows: List[PrintRowModel]
