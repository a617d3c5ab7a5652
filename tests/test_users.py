import pytest

from crm_panel.services.users import change_role, create_staff_user, list_staff
from crm_panel.state import Notifier


@pytest.mark.asyncio
async def test_create_staff_user_rejects_short_password(gateway) -> None:
    notifier = Notifier()

    ok = await create_staff_user(gateway, notifier, email="novo@example.com", password="123", full_name="Novo")

    assert not ok
    assert gateway.users == {}
    assert notifier.drain()[0].level == "error"


@pytest.mark.asyncio
async def test_create_and_promote_staff_user(gateway) -> None:
    notifier = Notifier()

    assert await create_staff_user(gateway, notifier, email="novo@example.com", password="segredo", full_name="Novo")
    profile = (await list_staff(gateway, notifier))[0]
    assert await change_role(gateway, notifier, profile.id, "admin")

    assert (await list_staff(gateway, notifier))[0].role == "admin"
    assert [n.message for n in notifier.drain()] == [
        "Usuário criado com sucesso",
        "Papel do usuário atualizado com sucesso",
    ]


@pytest.mark.asyncio
async def test_list_staff_failure_returns_empty(gateway) -> None:
    notifier = Notifier()
    gateway.fail_reads = True

    assert await list_staff(gateway, notifier) == []
    assert [n.message for n in notifier.drain()] == ["Erro ao carregar usuários"]
