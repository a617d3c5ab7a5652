import pytest

from crm_panel.errors import AuthenticationFailed, AuthenticationRequired, PermissionDenied
from crm_panel.services.session import SessionContext


@pytest.fixture
def staff_gateway(gateway):
    gateway.add_user("admin@example.com", "segredo", role="admin", name="Admin")
    gateway.add_user("user@example.com", "senha123", role="user", name="User")
    return gateway


@pytest.mark.asyncio
async def test_sign_in_loads_profile_and_notifies(staff_gateway) -> None:
    session = SessionContext(staff_gateway)
    seen = []
    session.subscribe(seen.append)

    identity = await session.sign_in("admin@example.com", "segredo")

    assert identity.role == "admin"
    assert session.is_authenticated
    assert seen == [identity]
    assert session.require_role("admin") is identity


@pytest.mark.asyncio
async def test_wrong_password_is_rejected(staff_gateway) -> None:
    session = SessionContext(staff_gateway)

    with pytest.raises(AuthenticationFailed):
        await session.sign_in("admin@example.com", "errada")
    assert not session.is_authenticated


@pytest.mark.asyncio
async def test_role_guard(staff_gateway) -> None:
    session = SessionContext(staff_gateway)
    with pytest.raises(AuthenticationRequired):
        session.require_authenticated()

    await session.sign_in("user@example.com", "senha123")
    with pytest.raises(PermissionDenied):
        session.require_role("admin")


@pytest.mark.asyncio
async def test_restore_and_sign_out(staff_gateway) -> None:
    first = SessionContext(staff_gateway)
    identity = await first.sign_in("user@example.com", "senha123")

    restored = SessionContext(staff_gateway)
    assert (await restored.restore(identity.session.access_token)).session.user_id == identity.session.user_id

    seen = []
    restored.subscribe(seen.append)
    await restored.sign_out()

    assert seen == [None]
    assert staff_gateway.signed_out == [identity.session.access_token]
    assert await SessionContext(staff_gateway).restore(identity.session.access_token) is None
