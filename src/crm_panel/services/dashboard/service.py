"""Dashboard summary cards acting as quick filters for the registry."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from ...models.domain import DashboardAggregate, FilterBucket
from ...state.notifications import Notifier
from ...state.store import FilterCell

logger = logging.getLogger(__name__)

FetchAggregate = Callable[[], Awaitable[DashboardAggregate]]

CARD_TITLES: list[tuple[FilterBucket, str]] = [
    (FilterBucket.ALL, "Total de cadastros"),
    (FilterBucket.RECENT_30_DAYS, "Cadastros nos últimos 30 dias"),
    (FilterBucket.PENDING_REVIEW, "Cadastros com pendência de revisão"),
]


class DashboardDisplay:
    """Three aggregate counts; selecting one sets the shared filter bucket."""

    def __init__(self, fetch_aggregate: FetchAggregate, filter_cell: FilterCell, notifier: Notifier) -> None:
        self._fetch_aggregate = fetch_aggregate
        self._filter_cell = filter_cell
        self._notifier = notifier
        self._aggregate = DashboardAggregate()

    @property
    def aggregate(self) -> DashboardAggregate:
        return self._aggregate

    @property
    def active_bucket(self) -> FilterBucket:
        return self._filter_cell.value

    async def load(self) -> DashboardAggregate:
        try:
            self._aggregate = await self._fetch_aggregate()
        except Exception as exc:
            logger.warning("Failed to load dashboard aggregate: %s", exc)
            self._aggregate = DashboardAggregate()
            self._notifier.error("Erro ao carregar estatísticas")
        return self._aggregate

    def select(self, bucket: FilterBucket) -> None:
        logger.debug("Quick filter selected: %s", bucket.value)
        self._filter_cell.set(bucket)

    def cards(self) -> list[dict]:
        values = {
            FilterBucket.ALL: self._aggregate.total_count,
            FilterBucket.RECENT_30_DAYS: self._aggregate.recent_count,
            FilterBucket.PENDING_REVIEW: self._aggregate.pending_count,
        }
        active = self.active_bucket
        return [
            {"title": title, "value": values[bucket], "filter": bucket.value, "active": bucket == active}
            for bucket, title in CARD_TITLES
        ]
