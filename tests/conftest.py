from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from crm_panel.errors import AuthenticationFailed, GatewayError
from crm_panel.models.domain import (
    AuthSession,
    Customer,
    DashboardAggregate,
    FilterBucket,
    PageResult,
    QueryDescriptor,
    SortColumn,
    SortDirection,
    UserProfile,
)

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)

_SORT_KEYS = {
    SortColumn.NAME: lambda c: c.name.lower(),
    SortColumn.EMAIL: lambda c: c.email.lower(),
    SortColumn.STATUS: lambda c: c.active,
    SortColumn.CREATED_AT: lambda c: c.created_at,
}


class FakeGateway:
    """In-memory stand-in for SupabaseGateway with the same method surface."""

    configured = True

    def __init__(self) -> None:
        self.customers: dict[str, Customer] = {}
        self.users: dict[str, tuple[str, UserProfile]] = {}
        self.tokens: dict[str, str] = {}
        self.page_calls: list[QueryDescriptor] = []
        self.write_error: Optional[GatewayError] = None
        self.fail_reads = False
        self.signed_out: list[str] = []
        self._ids = itertools.count(1)

    # Seeding helpers -------------------------------------------------------

    def add_customer(self, name: str, *, days_ago: int = 0, reviewed: bool = True, active: bool = True, **extra) -> Customer:
        customer_id = str(next(self._ids))
        customer = Customer(
            id=customer_id,
            name=name,
            email=extra.pop("email", f"{name.lower().replace(' ', '.')}@example.com"),
            phone=extra.pop("phone", "(11) 99999-0000"),
            address=extra.pop("address", "Rua A, 1"),
            age=extra.pop("age", 30),
            active=active,
            reviewed=reviewed,
            created_at=NOW - timedelta(days=days_ago),
            **extra,
        )
        self.customers[customer_id] = customer
        return customer

    def add_user(self, email: str, password: str, role: str = "user", name: str = "Staff") -> UserProfile:
        user_id = f"user-{len(self.users) + 1}"
        profile = UserProfile(id=user_id, name=name, role=role, email=email, created_at=NOW)
        self.users[email] = (password, profile)
        return profile

    # Customers ---------------------------------------------------------------

    def _matching(self, descriptor: QueryDescriptor) -> list[Customer]:
        rows = list(self.customers.values())
        if descriptor.filter_bucket is FilterBucket.RECENT_30_DAYS:
            rows = [c for c in rows if c.created_at >= NOW - timedelta(days=30)]
        elif descriptor.filter_bucket is FilterBucket.PENDING_REVIEW:
            rows = [c for c in rows if not c.reviewed]
        if descriptor.search_text:
            term = descriptor.search_text.lower()
            rows = [c for c in rows if term in c.name.lower() or term in c.email.lower() or term in c.phone]
        rows.sort(
            key=_SORT_KEYS[descriptor.sort_column],
            reverse=descriptor.sort_direction is SortDirection.DESC,
        )
        return rows

    def fetch_page(self, descriptor: QueryDescriptor) -> PageResult:
        self.page_calls.append(descriptor)
        if self.fail_reads:
            raise GatewayError("connection reset")
        rows = self._matching(descriptor)
        start = (descriptor.page - 1) * descriptor.page_size
        return PageResult(items=tuple(rows[start:start + descriptor.page_size]), total_count=len(rows))

    def fetch_dashboard_aggregate(self) -> DashboardAggregate:
        if self.fail_reads:
            raise GatewayError("connection reset")
        rows = list(self.customers.values())
        return DashboardAggregate(
            total_count=len(rows),
            recent_count=sum(1 for c in rows if c.created_at >= NOW - timedelta(days=30)),
            pending_count=sum(1 for c in rows if not c.reviewed),
        )

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.customers.get(customer_id)

    def insert_customer(self, data: dict[str, Any]) -> Customer:
        if self.write_error is not None:
            raise self.write_error
        customer = Customer(id=str(next(self._ids)), created_at=NOW, **data)
        self.customers[customer.id] = customer
        return customer

    def update_customer(self, customer_id: str, data: dict[str, Any]) -> Optional[Customer]:
        if self.write_error is not None:
            raise self.write_error
        current = self.customers.get(customer_id)
        if current is None:
            return None
        updated = replace(current, **data)
        self.customers[customer_id] = updated
        return updated

    def delete_customer(self, customer_id: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.customers.pop(customer_id, None)

    # Auth & profiles -----------------------------------------------------------

    def sign_in(self, email: str, password: str) -> AuthSession:
        entry = self.users.get(email)
        if entry is None or entry[0] != password:
            raise AuthenticationFailed("Invalid email or password")
        profile = entry[1]
        token = f"token-{profile.id}-{len(self.tokens) + 1}"
        self.tokens[token] = email
        return AuthSession(access_token=token, user_id=profile.id, email=email)

    def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)
        self.tokens.pop(access_token, None)

    def get_session_user(self, access_token: str) -> Optional[AuthSession]:
        email = self.tokens.get(access_token)
        if email is None:
            return None
        return AuthSession(access_token=access_token, user_id=self.users[email][1].id, email=email)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        for _, profile in self.users.values():
            if profile.id == user_id:
                return profile
        return None

    def list_profiles(self) -> list[UserProfile]:
        if self.fail_reads:
            raise GatewayError("connection reset")
        return [profile for _, profile in self.users.values()]

    def sign_up(self, email: str, password: str, full_name: str) -> str:
        if email in self.users:
            raise GatewayError("User already registered")
        return self.add_user(email, password, name=full_name).id

    def update_user_role(self, user_id: str, role: str) -> None:
        for email, (password, profile) in list(self.users.items()):
            if profile.id == user_id:
                self.users[email] = (password, replace(profile, role=role))
                return
        raise GatewayError("User not found")


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def seeded_gateway(gateway: FakeGateway) -> FakeGateway:
    gateway.add_customer("Ana Souza", days_ago=2, reviewed=False)
    gateway.add_customer("Bruno Lima", days_ago=45)
    gateway.add_customer("Carla Dias", days_ago=10)
    gateway.add_customer("Diego Alves", days_ago=90, reviewed=False, active=False)
    return gateway
