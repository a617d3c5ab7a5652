"""Domain models for customer records, registry queries and staff identities."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class FilterBucket(str, Enum):
    """Mutually exclusive server-side predicates narrowing the customer set."""

    ALL = "all"
    RECENT_30_DAYS = "recent30days"
    PENDING_REVIEW = "pendingReview"


class SortColumn(str, Enum):
    NAME = "name"
    EMAIL = "email"
    STATUS = "status"
    CREATED_AT = "createdAt"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(slots=True)
class Customer:
    """A customer record as stored by the Gateway."""

    id: Optional[str]
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


@dataclass(frozen=True, slots=True)
class QueryDescriptor:
    """Everything the paginated RPC needs to produce one page."""

    page: int = 1
    page_size: int = 10
    filter_bucket: FilterBucket = FilterBucket.ALL
    sort_column: SortColumn = SortColumn.CREATED_AT
    sort_direction: SortDirection = SortDirection.DESC
    search_text: str = ""


@dataclass(frozen=True, slots=True)
class PageResult:
    items: tuple[Customer, ...] = ()
    total_count: int = 0


@dataclass(frozen=True, slots=True)
class DashboardAggregate:
    total_count: int = 0
    recent_count: int = 0
    pending_count: int = 0


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Authenticated Gateway session handed back on sign-in."""

    access_token: str
    user_id: str
    email: Optional[str] = None


@dataclass(slots=True)
class UserProfile:
    id: str
    name: Optional[str]
    role: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class Identity:
    """The signed-in staff member: session plus profile."""

    session: AuthSession
    profile: Optional[UserProfile] = None

    @property
    def role(self) -> Optional[str]:
        return self.profile.role if self.profile else None
