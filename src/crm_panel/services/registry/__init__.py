"""Customer registry table: coordination, pagination and presentation."""

from .coordinator import RegistryCoordinator, RegistrySnapshot
from .pagination import PageLink, count_pages, page_window
from .view import build_registry_view

__all__ = [
    "PageLink",
    "RegistryCoordinator",
    "RegistrySnapshot",
    "build_registry_view",
    "count_pages",
    "page_window",
]
