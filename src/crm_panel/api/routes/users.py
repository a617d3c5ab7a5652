"""Staff management endpoints, restricted to the admin role."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from ...config import settings
from ...schemas.auth import (
    CreateUserRequest,
    ProfileModel,
    RoleUpdateRequest,
    StaffListResponse,
    StatusResponse,
)
from ...schemas.common import notification_models
from ...services.users import change_role, create_staff_user, list_staff
from ..workspace import Workspace, get_workspace

router = APIRouter(prefix="/users", tags=["users"])


def get_admin_workspace(workspace: Workspace = Depends(get_workspace)) -> Workspace:
    workspace.session.require_role(settings.admin_role)
    return workspace


def _status(workspace: Workspace, ok: bool, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    body = StatusResponse(ok=ok, notifications=notification_models(workspace.notifier.drain()))
    return JSONResponse(
        status_code=success_status if ok else status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


@router.get("", response_model=StaffListResponse, status_code=status.HTTP_200_OK)
async def get_staff(workspace: Workspace = Depends(get_admin_workspace)) -> StaffListResponse:
    profiles = await list_staff(workspace.gateway, workspace.notifier)
    return StaffListResponse(
        users=[ProfileModel.model_validate(profile) for profile in profiles],
        notifications=notification_models(workspace.notifier.drain()),
    )


@router.post("", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
async def post_staff(
    payload: CreateUserRequest,
    workspace: Workspace = Depends(get_admin_workspace),
) -> JSONResponse:
    ok = await create_staff_user(
        workspace.gateway,
        workspace.notifier,
        email=payload.email,
        password=payload.password,
        full_name=payload.fullName,
    )
    return _status(workspace, ok, status.HTTP_201_CREATED)


@router.put("/{user_id}/role", response_model=StatusResponse)
async def put_role(
    payload: RoleUpdateRequest,
    user_id: str = Path(..., description="Staff user identifier"),
    workspace: Workspace = Depends(get_admin_workspace),
) -> JSONResponse:
    ok = await change_role(workspace.gateway, workspace.notifier, user_id, payload.role)
    return _status(workspace, ok)
