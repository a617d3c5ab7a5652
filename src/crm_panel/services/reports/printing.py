"""Printable customer report for the active quick filter and search term."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from openpyxl import Workbook
from openpyxl.styles import Font

from ...config import settings
from ...data.gateway import SupabaseGateway
from ...errors import GatewayError
from ...models.domain import (
    Customer,
    FilterBucket,
    QueryDescriptor,
    SortColumn,
    SortDirection,
)
from ..registry.view import format_date, status_label

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Erro ao carregar dados para impressão."

REPORT_COLUMNS: list[tuple[str, str]] = [
    ("name", "Nome"),
    ("email", "E-mail"),
    ("phone", "Telefone"),
    ("address", "Endereço"),
    ("age", "Idade"),
    ("interests", "Interesses"),
    ("feelings", "Sentimentos"),
    ("values", "Valores"),
    ("other_info", "Outras Informações"),
    ("status", "Status"),
    ("reviewed", "Revisado"),
    ("date", "Data"),
]


class ReportUnavailable(Exception):
    """The report rows could not be fetched."""


def _print_row(customer: Customer) -> dict:
    return {
        "id": customer.id,
        "name": customer.name,
        "email": customer.email,
        "phone": customer.phone,
        "address": customer.address,
        "age": customer.age,
        "interests": customer.interests,
        "feelings": customer.feelings,
        "values": customer.values,
        "other_info": customer.other_info,
        "status": status_label(customer.active),
        "reviewed": customer.reviewed,
        "date": format_date(customer),
    }


async def build_print_report(
    gateway: SupabaseGateway,
    bucket: FilterBucket,
    search_text: str = "",
    *,
    now: Optional[datetime] = None,
) -> dict:
    """Every customer matching ``bucket`` and ``search_text``, sorted by name."""
    descriptor = QueryDescriptor(
        page=1,
        page_size=settings.report_max_rows,
        filter_bucket=bucket,
        sort_column=SortColumn.NAME,
        sort_direction=SortDirection.ASC,
        search_text=search_text,
    )
    try:
        page = await run_in_threadpool(gateway.fetch_page, descriptor)
    except GatewayError as exc:
        logger.warning("Failed to fetch print report rows: %s", exc.message)
        raise ReportUnavailable(LOAD_ERROR_MESSAGE) from exc

    generated_at = now or datetime.now(timezone.utc)
    rows = [_print_row(customer) for customer in page.items]
    return {
        "filter": bucket.value,
        "searchText": search_text,
        "generatedAt": generated_at.isoformat(),
        "generatedLabel": generated_at.strftime("Gerado em: %d/%m/%Y às %H:%M:%S"),
        "totalRecords": len(rows),
        "rows": rows,
    }


def export_report_workbook(report: dict) -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Cadastros"
    worksheet.append([label for _, label in REPORT_COLUMNS])
    for cell in worksheet[1]:
        cell.font = Font(bold=True)

    for row in report["rows"]:
        values = []
        for key, _ in REPORT_COLUMNS:
            value = row.get(key)
            if key == "reviewed":
                value = "Sim" if value else "Não"
            values.append(value)
        worksheet.append(values)

    worksheet.append([])
    worksheet.append([report["generatedLabel"]])
    worksheet.append([f"Total de registros: {report['totalRecords']}"])

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
