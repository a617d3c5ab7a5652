import asyncio

import pytest

from crm_panel.api.workspace import WorkspaceRegistry
from crm_panel.errors import AuthenticationRequired


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def staff_gateway(gateway):
    gateway.add_user("user@example.com", "senha123")
    gateway.add_user("other@example.com", "senha456")
    return gateway


@pytest.mark.asyncio
async def test_concurrent_restores_build_one_workspace(staff_gateway) -> None:
    token = staff_gateway.sign_in("user@example.com", "senha123").access_token
    registry = WorkspaceRegistry(staff_gateway, idle_seconds=60)

    first, second = await asyncio.gather(registry.resolve(token), registry.resolve(token))

    assert first is second
    assert len(registry) == 1
    await registry.close_all()


@pytest.mark.asyncio
async def test_idle_workspaces_are_closed_and_dropped(staff_gateway) -> None:
    clock = FakeClock()
    registry = WorkspaceRegistry(staff_gateway, idle_seconds=60, clock=clock)
    idle = await registry.login("user@example.com", "senha123")
    token = idle.access_token

    clock.now += 30
    active = await registry.login("other@example.com", "senha456")
    clock.now += 45
    assert await registry.resolve(active.access_token) is active

    assert idle.closed
    assert not active.closed
    assert len(registry) == 1

    # Still valid with the Gateway: a fresh workspace is restored for it.
    restored = await registry.resolve(token)
    assert restored is not idle
    assert len(registry) == 2
    await registry.close_all()


@pytest.mark.asyncio
async def test_expired_token_is_not_kept(staff_gateway) -> None:
    clock = FakeClock()
    registry = WorkspaceRegistry(staff_gateway, idle_seconds=60, clock=clock)
    workspace = await registry.login("user@example.com", "senha123")
    token = workspace.access_token
    staff_gateway.tokens.pop(token)

    clock.now += 61
    with pytest.raises(AuthenticationRequired):
        await registry.resolve(token)

    assert workspace.closed
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_logout_closes_workspace(staff_gateway) -> None:
    registry = WorkspaceRegistry(staff_gateway, idle_seconds=60)
    workspace = await registry.login("user@example.com", "senha123")

    await registry.logout(workspace.access_token)

    assert workspace.closed
    assert len(registry) == 0
