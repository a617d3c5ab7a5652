"""Filter/sort/search/page coordination for the customer registry table."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Optional

from ...config import settings
from ...models.domain import (
    FilterBucket,
    PageResult,
    QueryDescriptor,
    SortColumn,
    SortDirection,
)
from ...state.notifications import Notifier
from ...state.store import FilterCell
from .debounce import Debouncer
from .pagination import count_pages

logger = logging.getLogger(__name__)

FetchPage = Callable[[QueryDescriptor], Awaitable[PageResult]]

FETCH_ERROR_MESSAGE = "Erro ao carregar clientes"


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    descriptor: QueryDescriptor
    raw_search_text: str
    result: PageResult
    loading: bool

    @property
    def total_pages(self) -> int:
        return count_pages(self.result.total_count, self.descriptor.page_size)


class RegistryCoordinator:
    """Owns the query descriptor and keeps exactly one current page request.

    Setters mutate the descriptor synchronously; any effective change schedules
    a fetch on the running loop. Responses are tagged with a sequence number
    and only the most recently issued request may write the result.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        *,
        page_size: int | None = None,
        debounce_seconds: float | None = None,
        notifier: Notifier | None = None,
        filter_cell: FilterCell | None = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._notifier = notifier
        self._descriptor = QueryDescriptor(
            page_size=page_size or settings.page_size,
            filter_bucket=filter_cell.value if filter_cell else FilterBucket.ALL,
        )
        self._raw_search_text = ""
        self._result = PageResult()
        self._issued_seq = 0
        self._settled_seq = 0
        self._tasks: set[asyncio.Task] = set()
        delay = settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer: Debouncer[str] = Debouncer(delay, self._promote_search_text)
        self._unsubscribe: Optional[Callable[[], None]] = (
            filter_cell.subscribe(self.set_filter_bucket) if filter_cell else None
        )

    # State -----------------------------------------------------------------

    @property
    def descriptor(self) -> QueryDescriptor:
        return self._descriptor

    @property
    def raw_search_text(self) -> str:
        return self._raw_search_text

    @property
    def result(self) -> PageResult:
        return self._result

    @property
    def loading(self) -> bool:
        return self._settled_seq != self._issued_seq

    @property
    def total_pages(self) -> int:
        return count_pages(self._result.total_count, self._descriptor.page_size)

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(
            descriptor=self._descriptor,
            raw_search_text=self._raw_search_text,
            result=self._result,
            loading=self.loading,
        )

    # Intents ---------------------------------------------------------------

    def start(self) -> None:
        """Issue the initial fetch for the current descriptor."""
        self._issue_fetch()

    def set_search_text(self, raw: str) -> None:
        self._raw_search_text = raw
        self._update(page=1)
        self._debouncer.push(raw)

    def set_sort(self, column: SortColumn) -> None:
        current = self._descriptor
        if column == current.sort_column:
            direction = current.sort_direction.flipped()
        else:
            direction = SortDirection.ASC
        self._update(sort_column=column, sort_direction=direction, page=1)

    def set_filter_bucket(self, bucket: FilterBucket) -> None:
        self._update(filter_bucket=bucket, page=1)

    def set_page(self, page: int) -> None:
        upper = max(1, self.total_pages)
        if page < 1 or page > upper:
            raise ValueError(f"Page {page} outside 1..{upper}")
        self._update(page=page)

    def refresh(self) -> None:
        """Re-run the current query, e.g. after a create/update/delete."""
        self._issue_fetch()

    # Lifecycle ---------------------------------------------------------------

    async def settle(self) -> None:
        """Wait until no debounce timer is pending and every fetch has resolved."""
        while True:
            if self._debouncer.pending:
                await self._debouncer.wait()
                continue
            in_flight = [task for task in self._tasks if not task.done()]
            if not in_flight:
                return
            await asyncio.gather(*in_flight, return_exceptions=True)

    async def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._debouncer.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # Internals ---------------------------------------------------------------

    def _promote_search_text(self, text: str) -> None:
        logger.debug("Search text promoted: %r", text)
        self._update(search_text=text, page=1)

    def _update(self, **changes) -> None:
        updated = replace(self._descriptor, **changes)
        if updated == self._descriptor:
            return
        self._descriptor = updated
        self._issue_fetch()

    def _issue_fetch(self) -> None:
        self._issued_seq += 1
        seq = self._issued_seq
        task = asyncio.get_running_loop().create_task(self._run_fetch(seq, self._descriptor))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_fetch(self, seq: int, descriptor: QueryDescriptor) -> None:
        try:
            result = await self._fetch_page(descriptor)
        except Exception as exc:
            if seq != self._issued_seq:
                logger.debug("Dropping failure of superseded fetch #%d: %s", seq, exc)
                return
            logger.warning("Registry fetch #%d failed: %s", seq, exc)
            self._result = PageResult()
            self._settled_seq = seq
            if self._notifier is not None:
                self._notifier.error(FETCH_ERROR_MESSAGE)
            return

        if seq != self._issued_seq:
            logger.debug("Dropping stale response of fetch #%d (latest #%d)", seq, self._issued_seq)
            return
        self._result = result
        self._settled_seq = seq
