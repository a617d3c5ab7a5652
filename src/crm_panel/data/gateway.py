"""Supabase-backed gateway for customer, dashboard and staff data."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Callable, Optional

from ..config import settings
from ..db.supabase import create_auth_client, get_supabase_client
from ..errors import AuthenticationFailed, GatewayError, GatewayUnavailable
from ..models.domain import (
    AuthSession,
    Customer,
    DashboardAggregate,
    FilterBucket,
    PageResult,
    QueryDescriptor,
    SortColumn,
    UserProfile,
)

logger = logging.getLogger(__name__)

# Python attribute -> column of the customers table.
CUSTOMER_COLUMNS: dict[str, str] = {
    "name": "nome",
    "email": "email",
    "phone": "telefone",
    "address": "endereco",
    "age": "idade",
    "interests": "interesses",
    "feelings": "sentimentos",
    "values": "valores",
    "other_info": "outras_informacoes",
    "active": "status",
    "reviewed": "revisado",
}

FILTER_TYPES: dict[FilterBucket, str] = {
    FilterBucket.ALL: "todos",
    FilterBucket.RECENT_30_DAYS: "ultimoMes",
    FilterBucket.PENDING_REVIEW: "pendentes",
}

SORT_COLUMNS: dict[SortColumn, str] = {
    SortColumn.NAME: "nome",
    SortColumn.EMAIL: "email",
    SortColumn.STATUS: "status",
    SortColumn.CREATED_AT: "created_at",
}

_CONSTRAINT_PATTERN = re.compile(r'constraint "([^"]+)"')


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable timestamp from gateway: %r", value)
        return None


def _single_row(data: Any) -> dict[str, Any]:
    """RPC payload as a dict; set-returning functions come back as a single-row list."""
    if isinstance(data, list):
        data = data[0] if data else {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GatewayError(f"Unexpected RPC payload: {type(data).__name__}")
    return data


def row_to_customer(row: dict[str, Any]) -> Customer:
    """Build a Customer from a table row or RPC item (missing columns tolerated)."""
    raw_id = row.get("id")
    return Customer(
        id=str(raw_id) if raw_id is not None else None,
        name=row.get("nome") or "",
        email=row.get("email") or "",
        phone=row.get("telefone") or "",
        address=row.get("endereco") or "",
        age=int(row.get("idade") or 0),
        interests=row.get("interesses"),
        feelings=row.get("sentimentos"),
        values=row.get("valores"),
        other_info=row.get("outras_informacoes"),
        active=bool(row.get("status", True)),
        reviewed=bool(row.get("revisado", False)),
        created_at=_parse_timestamp(row.get("created_at")),
    )


def customer_to_row(data: dict[str, Any]) -> dict[str, Any]:
    """Translate attribute-keyed form data into table columns."""
    return {CUSTOMER_COLUMNS[key]: value for key, value in data.items() if key in CUSTOMER_COLUMNS}


def translate_error(exc: Exception) -> GatewayError:
    """Turn a supabase/postgrest exception into a structured GatewayError."""
    if isinstance(exc, GatewayError):
        return exc
    message = str(getattr(exc, "message", None) or exc)
    details = getattr(exc, "details", None)
    code = getattr(exc, "code", None)
    constraint = None
    for text in (message, details or ""):
        match = _CONSTRAINT_PATTERN.search(str(text))
        if match:
            constraint = match.group(1)
            break
    return GatewayError(
        message,
        code=str(code) if code is not None else None,
        constraint=constraint,
        details=str(details) if details else None,
    )


class SupabaseGateway:
    """Thin synchronous wrapper around the Supabase client.

    Every method either returns domain objects or raises :class:`GatewayError`;
    callers never see raw supabase/postgrest exceptions.
    """

    def __init__(
        self,
        client: Any | None = None,
        auth_client_factory: Callable[[], Any | None] | None = None,
    ) -> None:
        self._client = client
        self._auth_client_factory = auth_client_factory or create_auth_client

    @property
    def configured(self) -> bool:
        return self._resolve_client() is not None

    def _resolve_client(self) -> Any | None:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def _require_client(self) -> Any:
        client = self._resolve_client()
        if client is None:
            raise GatewayUnavailable()
        return client

    def _new_auth_client(self) -> Any:
        # Password flows run on a throwaway client so the shared one keeps the service key.
        client = self._auth_client_factory()
        if client is None:
            raise GatewayUnavailable()
        return client

    # Customers ---------------------------------------------------------------

    def fetch_page(self, descriptor: QueryDescriptor) -> PageResult:
        client = self._require_client()
        params = {
            "page_number": descriptor.page,
            "page_size": descriptor.page_size,
            "filter_type": FILTER_TYPES[descriptor.filter_bucket],
            "sort_by": SORT_COLUMNS[descriptor.sort_column],
            "sort_direction": descriptor.sort_direction.value,
            "search_term": descriptor.search_text or None,
        }
        try:
            response = client.rpc(settings.paginated_rpc, params).execute()
        except Exception as exc:
            raise translate_error(exc) from exc
        payload = _single_row(response.data)
        items = tuple(row_to_customer(row) for row in (payload.get("items") or []))
        return PageResult(items=items, total_count=int(payload.get("totalCount") or 0))

    def fetch_dashboard_aggregate(self) -> DashboardAggregate:
        client = self._require_client()
        try:
            response = client.rpc(settings.dashboard_rpc, {}).execute()
        except Exception as exc:
            raise translate_error(exc) from exc
        payload = _single_row(response.data)
        return DashboardAggregate(
            total_count=int(payload.get("total_count") or 0),
            recent_count=int(payload.get("recent_count") or 0),
            pending_count=int(payload.get("pending_count") or 0),
        )

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        client = self._require_client()
        try:
            response = (
                client.table(settings.customers_table)
                .select("*")
                .eq("id", customer_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise translate_error(exc) from exc
        rows = response.data or []
        return row_to_customer(rows[0]) if rows else None

    def insert_customer(self, data: dict[str, Any]) -> Optional[Customer]:
        client = self._require_client()
        try:
            response = client.table(settings.customers_table).insert([customer_to_row(data)]).execute()
        except Exception as exc:
            raise translate_error(exc) from exc
        rows = response.data or []
        logger.info("Inserted customer row (%d returned)", len(rows))
        return row_to_customer(rows[0]) if rows else None

    def update_customer(self, customer_id: str, data: dict[str, Any]) -> Optional[Customer]:
        client = self._require_client()
        try:
            response = (
                client.table(settings.customers_table)
                .update(customer_to_row(data))
                .eq("id", customer_id)
                .execute()
            )
        except Exception as exc:
            raise translate_error(exc) from exc
        rows = response.data or []
        logger.info("Updated customer %s", customer_id)
        return row_to_customer(rows[0]) if rows else None

    def delete_customer(self, customer_id: str) -> None:
        client = self._require_client()
        try:
            client.table(settings.customers_table).delete().eq("id", customer_id).execute()
        except Exception as exc:
            raise translate_error(exc) from exc
        logger.info("Deleted customer %s", customer_id)

    # Auth & profiles -----------------------------------------------------------

    def sign_in(self, email: str, password: str) -> AuthSession:
        client = self._new_auth_client()
        try:
            response = client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            logger.info("Sign-in rejected for %s: %s", email, exc)
            raise AuthenticationFailed("Invalid email or password") from exc
        session = getattr(response, "session", None)
        user = getattr(response, "user", None)
        if session is None or user is None:
            raise AuthenticationFailed("Invalid email or password")
        return AuthSession(access_token=session.access_token, user_id=str(user.id), email=user.email)

    def sign_out(self, access_token: str) -> None:
        client = self._require_client()
        try:
            client.auth.admin.sign_out(access_token)
        except Exception as exc:
            raise translate_error(exc) from exc

    def get_session_user(self, access_token: str) -> Optional[AuthSession]:
        """Validate an access token; ``None`` when the Gateway rejects it."""
        client = self._require_client()
        try:
            response = client.auth.get_user(access_token)
        except Exception as exc:
            logger.debug("Access token rejected: %s", exc)
            return None
        user = getattr(response, "user", None) if response else None
        if user is None:
            return None
        return AuthSession(access_token=access_token, user_id=str(user.id), email=user.email)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        client = self._require_client()
        try:
            response = (
                client.table(settings.profiles_table)
                .select("*")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise translate_error(exc) from exc
        rows = response.data or []
        return _row_to_profile(rows[0]) if rows else None

    def list_profiles(self) -> list[UserProfile]:
        client = self._require_client()
        try:
            response = (
                client.table(settings.profiles_table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as exc:
            raise translate_error(exc) from exc
        return [_row_to_profile(row) for row in (response.data or [])]

    def sign_up(self, email: str, password: str, full_name: str) -> str:
        client = self._new_auth_client()
        try:
            response = client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"nome_completo": full_name}},
                }
            )
        except Exception as exc:
            raise translate_error(exc) from exc
        user = getattr(response, "user", None)
        if user is None:
            raise GatewayError("Sign-up returned no user")
        return str(user.id)

    def update_user_role(self, user_id: str, role: str) -> None:
        client = self._require_client()
        try:
            client.rpc(settings.role_rpc, {"user_id_param": user_id, "new_role_param": role}).execute()
        except Exception as exc:
            raise translate_error(exc) from exc


def _row_to_profile(row: dict[str, Any]) -> UserProfile:
    return UserProfile(
        id=str(row.get("id")),
        name=row.get("nome"),
        role=row.get("role") or "",
        email=row.get("email"),
        created_at=_parse_timestamp(row.get("created_at")),
    )
