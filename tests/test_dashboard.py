import pytest

from crm_panel.models.domain import DashboardAggregate, FilterBucket
from crm_panel.services.dashboard import DashboardDisplay
from crm_panel.state import FilterCell, Notifier, SessionStore


def _display(gateway, notifier=None) -> DashboardDisplay:
    async def fetch() -> DashboardAggregate:
        return gateway.fetch_dashboard_aggregate()

    return DashboardDisplay(fetch, FilterCell(SessionStore()), notifier or Notifier())


@pytest.mark.asyncio
async def test_cards_show_counts_and_active_bucket(seeded_gateway) -> None:
    display = _display(seeded_gateway)

    await display.load()
    cards = display.cards()

    assert [(card["title"], card["value"]) for card in cards] == [
        ("Total de cadastros", 4),
        ("Cadastros nos últimos 30 dias", 2),
        ("Cadastros com pendência de revisão", 2),
    ]
    assert [card["active"] for card in cards] == [True, False, False]


@pytest.mark.asyncio
async def test_select_moves_highlight(seeded_gateway) -> None:
    display = _display(seeded_gateway)

    display.select(FilterBucket.RECENT_30_DAYS)

    assert display.active_bucket is FilterBucket.RECENT_30_DAYS
    assert [card["filter"] for card in display.cards() if card["active"]] == ["recent30days"]


@pytest.mark.asyncio
async def test_load_failure_zeroes_counts_and_notifies(seeded_gateway) -> None:
    notifier = Notifier()
    display = _display(seeded_gateway, notifier)
    seeded_gateway.fail_reads = True

    aggregate = await display.load()

    assert aggregate == DashboardAggregate()
    assert [n.message for n in notifier.drain()] == ["Erro ao carregar estatísticas"]
