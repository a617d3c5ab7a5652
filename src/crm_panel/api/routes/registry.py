"""Registry table endpoints: each intent mutates the session's coordinator."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...schemas.common import notification_models
from ...schemas.registry import (
    FilterRequest,
    PageRequest,
    RegistryViewResponse,
    SearchRequest,
    SortRequest,
)
from ...services.registry import build_registry_view
from ..workspace import Workspace, get_workspace

router = APIRouter(prefix="/registry", tags=["registry"])


async def _view(workspace: Workspace, wait: bool) -> RegistryViewResponse:
    if wait:
        await workspace.coordinator.settle()
    view = build_registry_view(workspace.coordinator.snapshot())
    view["notifications"] = notification_models(workspace.notifier.drain())
    return RegistryViewResponse.model_validate(view)


@router.get("", response_model=RegistryViewResponse, status_code=status.HTTP_200_OK)
async def get_registry_view(
    wait: bool = Query(default=True, description="Wait for pending debounce and fetches before answering"),
    workspace: Workspace = Depends(get_workspace),
) -> RegistryViewResponse:
    return await _view(workspace, wait)


@router.put("/search", response_model=RegistryViewResponse)
async def set_search_text(payload: SearchRequest, workspace: Workspace = Depends(get_workspace)) -> RegistryViewResponse:
    workspace.coordinator.set_search_text(payload.text)
    return await _view(workspace, wait=False)


@router.put("/sort", response_model=RegistryViewResponse)
async def set_sort(payload: SortRequest, workspace: Workspace = Depends(get_workspace)) -> RegistryViewResponse:
    workspace.coordinator.set_sort(payload.column)
    return await _view(workspace, wait=False)


@router.put("/filter", response_model=RegistryViewResponse)
async def set_filter(payload: FilterRequest, workspace: Workspace = Depends(get_workspace)) -> RegistryViewResponse:
    # Through the shared cell so the dashboard highlight and stored bucket follow.
    workspace.filter_cell.set(payload.filter)
    return await _view(workspace, wait=False)


@router.put("/page", response_model=RegistryViewResponse)
async def set_page(payload: PageRequest, workspace: Workspace = Depends(get_workspace)) -> RegistryViewResponse:
    try:
        workspace.coordinator.set_page(payload.page)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return await _view(workspace, wait=False)


@router.post("/refresh", response_model=RegistryViewResponse)
async def refresh(workspace: Workspace = Depends(get_workspace)) -> RegistryViewResponse:
    workspace.coordinator.refresh()
    return await _view(workspace, wait=False)
