from types import SimpleNamespace

import pytest

from crm_panel.data.gateway import (
    SupabaseGateway,
    customer_to_row,
    row_to_customer,
    translate_error,
)
from crm_panel.errors import AuthenticationFailed, GatewayError, GatewayUnavailable
from crm_panel.models.domain import FilterBucket, QueryDescriptor, SortColumn, SortDirection


class FakeQuery:
    """Records a postgrest-style call chain and returns canned data on execute()."""

    def __init__(self, client: "FakeClient", target: str) -> None:
        self.client = client
        self.calls: list[tuple] = [("target", target)]

    def __getattr__(self, name):
        def chain(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return chain

    def execute(self):
        self.client.executed.append(self.calls)
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.data)


class FakeClient:
    def __init__(self, data=None, error: Exception | None = None) -> None:
        self.data = data
        self.error = error
        self.executed: list[list[tuple]] = []
        self.auth = SimpleNamespace()

    def rpc(self, name, params):
        query = FakeQuery(self, name)
        query.calls.append(("params", params))
        return query

    def table(self, name):
        return FakeQuery(self, name)


class FakeAPIError(Exception):
    def __init__(self, message: str, code: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


ROW = {
    "id": 7,
    "nome": "Ana Souza",
    "email": "ana@example.com",
    "telefone": "(11) 90000-0000",
    "endereco": "Rua A",
    "idade": 31,
    "interesses": "Leitura",
    "status": True,
    "revisado": False,
    "created_at": "2025-03-01T10:00:00Z",
}


def test_row_round_trip_uses_portuguese_columns() -> None:
    customer = row_to_customer(ROW)

    assert customer.id == "7"
    assert customer.name == "Ana Souza"
    assert customer.interests == "Leitura"
    assert customer.created_at.year == 2025
    assert customer_to_row({"name": "Ana", "other_info": "x", "reviewed": True, "ignored": 1}) == {
        "nome": "Ana",
        "outras_informacoes": "x",
        "revisado": True,
    }


def test_fetch_page_maps_descriptor_to_rpc_params() -> None:
    client = FakeClient(data={"items": [ROW], "totalCount": 95})
    gateway = SupabaseGateway(client)
    descriptor = QueryDescriptor(
        page=3,
        page_size=10,
        filter_bucket=FilterBucket.PENDING_REVIEW,
        sort_column=SortColumn.CREATED_AT,
        sort_direction=SortDirection.DESC,
        search_text="ana",
    )

    result = gateway.fetch_page(descriptor)

    assert result.total_count == 95
    assert result.items[0].email == "ana@example.com"
    target, params = client.executed[0][0], client.executed[0][1]
    assert target == ("target", "get_paginated_clientes")
    assert params == (
        "params",
        {
            "page_number": 3,
            "page_size": 10,
            "filter_type": "pendentes",
            "sort_by": "created_at",
            "sort_direction": "desc",
            "search_term": "ana",
        },
    )


def test_dashboard_aggregate_accepts_single_row_list() -> None:
    client = FakeClient(data=[{"total_count": 10, "recent_count": 3, "pending_count": 2}])

    aggregate = SupabaseGateway(client).fetch_dashboard_aggregate()

    assert (aggregate.total_count, aggregate.recent_count, aggregate.pending_count) == (10, 3, 2)


def test_write_errors_carry_code_and_constraint() -> None:
    error = FakeAPIError(
        'duplicate key value violates unique constraint "customers_email_key"',
        code="23505",
        details="Key (email)=(ana@example.com) already exists.",
    )
    gateway = SupabaseGateway(FakeClient(error=error))

    with pytest.raises(GatewayError) as excinfo:
        gateway.insert_customer({"name": "Ana"})

    assert excinfo.value.code == "23505"
    assert excinfo.value.constraint == "customers_email_key"


def test_translate_error_without_constraint() -> None:
    translated = translate_error(RuntimeError("timeout"))

    assert translated.message == "timeout"
    assert translated.constraint is None
    assert translated.code is None


def test_unconfigured_gateway_raises_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    from crm_panel.data import gateway as gateway_module

    monkeypatch.setattr(gateway_module, "get_supabase_client", lambda: None)
    gateway = SupabaseGateway()

    assert not gateway.configured
    with pytest.raises(GatewayUnavailable):
        gateway.fetch_page(QueryDescriptor())


def test_sign_in_failure_is_authentication_failed() -> None:
    auth_client = FakeClient()

    def reject(credentials):
        raise RuntimeError("Invalid login credentials")

    auth_client.auth.sign_in_with_password = reject

    with pytest.raises(AuthenticationFailed):
        SupabaseGateway(FakeClient(), auth_client_factory=lambda: auth_client).sign_in("a@example.com", "x")


def _untouchable_auth(*args, **kwargs):
    raise AssertionError("password flow ran on the shared client")


def test_password_flows_never_touch_the_shared_client() -> None:
    shared = FakeClient(data={"items": [], "totalCount": 0})
    shared.auth.sign_in_with_password = _untouchable_auth
    shared.auth.sign_up = _untouchable_auth
    created: list[FakeClient] = []

    def auth_client_factory() -> FakeClient:
        client = FakeClient()
        client.auth.sign_in_with_password = lambda credentials: SimpleNamespace(
            session=SimpleNamespace(access_token=f"STAFF-JWT-{len(created)}"),
            user=SimpleNamespace(id="u-1", email=credentials["email"]),
        )
        client.auth.sign_up = lambda payload: SimpleNamespace(user=SimpleNamespace(id="u-2"))
        created.append(client)
        return client

    gateway = SupabaseGateway(shared, auth_client_factory=auth_client_factory)

    first = gateway.sign_in("a@example.com", "pw")
    second = gateway.sign_in("b@example.com", "pw")
    assert gateway.sign_up("c@example.com", "segredo", "C") == "u-2"

    assert first.access_token != second.access_token
    assert len(created) == 3
    assert len({id(client) for client in created}) == 3
    gateway.fetch_page(QueryDescriptor())
    assert shared.executed


def test_auth_client_is_fresh_on_every_call(monkeypatch: pytest.MonkeyPatch) -> None:
    from crm_panel.config import settings
    from crm_panel.db.supabase import create_auth_client

    monkeypatch.setattr(settings, "supabase_url", "https://example.supabase.co")
    monkeypatch.setattr(settings, "supabase_key", "header.payload.signature")

    first = create_auth_client()
    second = create_auth_client()

    assert first is not None
    assert first is not second


def test_fetch_page_accepts_single_row_list() -> None:
    client = FakeClient(data=[{"items": [ROW], "totalCount": 1}])

    result = SupabaseGateway(client).fetch_page(QueryDescriptor())

    assert result.total_count == 1
    assert result.items[0].name == "Ana Souza"


def test_unexpected_payload_is_a_gateway_error() -> None:
    with pytest.raises(GatewayError):
        SupabaseGateway(FakeClient(data="oops")).fetch_page(QueryDescriptor())


def test_update_user_role_calls_rpc() -> None:
    client = FakeClient(data=None)

    SupabaseGateway(client).update_user_role("u-1", "admin")

    assert client.executed[0][:2] == [
        ("target", "update_user_role"),
        ("params", {"user_id_param": "u-1", "new_role_param": "admin"}),
    ]
