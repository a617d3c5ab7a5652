"""Presentation state for the registry table, derived from a coordinator snapshot."""

from __future__ import annotations

from dataclasses import asdict

from ...models.domain import Customer, SortColumn
from .coordinator import RegistrySnapshot
from .pagination import page_window

EMPTY_STATE_MESSAGE = "Nenhum cliente encontrado"

COLUMNS: list[tuple[str, str, SortColumn | None]] = [
    ("name", "NOME", SortColumn.NAME),
    ("email", "E-MAIL", SortColumn.EMAIL),
    ("phone", "TELEFONE", None),
    ("status", "STATUS", SortColumn.STATUS),
    ("createdAt", "DATA", SortColumn.CREATED_AT),
]


def status_label(active: bool) -> str:
    return "Ativo" if active else "Inativo"


def format_date(customer: Customer) -> str:
    return customer.created_at.strftime("%d/%m/%Y") if customer.created_at else ""


def _row(customer: Customer) -> dict:
    return {
        "id": customer.id,
        "name": customer.name,
        "email": customer.email,
        "phone": customer.phone,
        "status": status_label(customer.active),
        "reviewed": customer.reviewed,
        "date": format_date(customer),
    }


def build_registry_view(snapshot: RegistrySnapshot) -> dict:
    descriptor = snapshot.descriptor
    total_pages = snapshot.total_pages

    columns = []
    for key, label, sort_column in COLUMNS:
        indicator = None
        if sort_column is not None and sort_column == descriptor.sort_column:
            indicator = descriptor.sort_direction.value
        columns.append(
            {"key": key, "label": label, "sortable": sort_column is not None, "sort": indicator}
        )

    rows = [_row(customer) for customer in snapshot.result.items]
    return {
        "columns": columns,
        "rows": rows,
        "empty": snapshot.result.total_count == 0,
        "emptyMessage": EMPTY_STATE_MESSAGE if snapshot.result.total_count == 0 else None,
        "loading": snapshot.loading,
        "searchText": snapshot.raw_search_text,
        "effectiveSearchText": descriptor.search_text,
        "filter": descriptor.filter_bucket.value,
        "sortColumn": descriptor.sort_column.value,
        "sortDirection": descriptor.sort_direction.value,
        "pagination": {
            "page": descriptor.page,
            "pageSize": descriptor.page_size,
            "totalCount": snapshot.result.total_count,
            "totalPages": total_pages,
            "hasPrevious": descriptor.page > 1,
            "hasNext": descriptor.page < total_pages,
            "links": [asdict(link) for link in page_window(descriptor.page, total_pages)],
        },
    }
