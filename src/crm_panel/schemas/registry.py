"""Registry table schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..models.domain import FilterBucket, SortColumn
from .common import NotificationModel


class SearchRequest(BaseModel):
    text: str = ""


class SortRequest(BaseModel):
    column: SortColumn


class FilterRequest(BaseModel):
    filter: FilterBucket


class PageRequest(BaseModel):
    page: int = Field(..., ge=1)


class ColumnModel(BaseModel):
    key: str
    label: str
    sortable: bool
    sort: Optional[Literal["asc", "desc"]] = None


class RowModel(BaseModel):
    id: Optional[str] = None
    name: str
    email: str
    phone: str
    status: str
    reviewed: bool
    date: str


class PageLinkModel(BaseModel):
    kind: Literal["page", "ellipsis"]
    number: Optional[int] = None
    current: bool = False


class PaginationModel(BaseModel):
    page: int
    pageSize: int
    totalCount: int
    totalPages: int
    hasPrevious: bool
    hasNext: bool
    links: List[PageLinkModel]


class RegistryViewResponse(BaseModel):
    columns: List[ColumnModel]
    rows: List[RowModel]
    empty: bool
    emptyMessage: Optional[str] = None
    loading: bool
    searchText: str
    effectiveSearchText: str
    filter: FilterBucket
    sortColumn: SortColumn
    sortDirection: Literal["asc", "desc"]
    pagination: PaginationModel
    notifications: List[NotificationModel] = []
