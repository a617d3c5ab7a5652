"""Dashboard summary endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.common import notification_models
from ...schemas.dashboard import DashboardStatsResponse, QuickFilterRequest, StatCardModel
from ..workspace import Workspace, get_workspace

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _stats_response(workspace: Workspace) -> DashboardStatsResponse:
    return DashboardStatsResponse(
        cards=[StatCardModel(**card) for card in workspace.dashboard.cards()],
        activeFilter=workspace.dashboard.active_bucket,
        notifications=notification_models(workspace.notifier.drain()),
    )


@router.get("/stats", response_model=DashboardStatsResponse, status_code=status.HTTP_200_OK)
async def get_dashboard_stats(workspace: Workspace = Depends(get_workspace)) -> DashboardStatsResponse:
    await workspace.dashboard.load()
    return _stats_response(workspace)


@router.post("/quick-filter", response_model=DashboardStatsResponse, status_code=status.HTTP_200_OK)
async def select_quick_filter(
    payload: QuickFilterRequest,
    workspace: Workspace = Depends(get_workspace),
) -> DashboardStatsResponse:
    workspace.dashboard.select(payload.filter)
    return _stats_response(workspace)
