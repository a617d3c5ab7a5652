"""Print report endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from ...schemas.reports import PrintReportResponse
from ...services.reports import ReportUnavailable, build_print_report, export_report_workbook
from ..workspace import Workspace, get_workspace

router = APIRouter(prefix="/reports", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _build(workspace: Workspace, search: Optional[str]) -> dict:
    search_text = workspace.coordinator.descriptor.search_text if search is None else search
    try:
        return await build_print_report(workspace.gateway, workspace.filter_cell.value, search_text)
    except ReportUnavailable as exc:
        workspace.notifier.error(str(exc))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


@router.get("/print", response_model=PrintReportResponse, status_code=status.HTTP_200_OK)
async def get_print_report(
    search: Optional[str] = Query(default=None, description="Search term; defaults to the registry's"),
    workspace: Workspace = Depends(get_workspace),
) -> PrintReportResponse:
    return PrintReportResponse.model_validate(await _build(workspace, search))


@router.get("/print.xlsx", status_code=status.HTTP_200_OK)
async def download_print_report(
    search: Optional[str] = Query(default=None, description="Search term; defaults to the registry's"),
    workspace: Workspace = Depends(get_workspace),
) -> Response:
    report = await _build(workspace, search)
    return Response(
        content=export_report_workbook(report),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="relatorio_cadastros.xlsx"'},
    )
