"""Page-count and pagination-bar helpers for the registry table."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional

WINDOW_SIZE = 5


@dataclass(frozen=True, slots=True)
class PageLink:
    kind: Literal["page", "ellipsis"]
    number: Optional[int] = None
    current: bool = False


def count_pages(total_count: int, page_size: int) -> int:
    if total_count <= 0 or page_size <= 0:
        return 0
    return math.ceil(total_count / page_size)


def page_window(current_page: int, total_pages: int, window: int = WINDOW_SIZE) -> list[PageLink]:
    """Links for the pagination bar.

    At most ``window`` consecutive pages centred on ``current_page`` and clamped
    to ``[1, total_pages]``. Page 1 and the last page stay reachable through
    edge links, with an ellipsis wherever pages are skipped.
    """
    if total_pages <= 0:
        return []

    current = min(max(current_page, 1), total_pages)
    start = max(1, current - window // 2)
    end = min(total_pages, start + window - 1)
    start = max(1, end - window + 1)

    links: list[PageLink] = []
    if start > 1:
        links.append(PageLink("page", 1))
        if start > 2:
            links.append(PageLink("ellipsis"))

    links.extend(PageLink("page", number, number == current) for number in range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            links.append(PageLink("ellipsis"))
        links.append(PageLink("page", total_pages))
    return links
