"""Sign-in / sign-out endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...errors import AuthenticationFailed
from ...schemas.auth import LoginRequest, ProfileModel, SessionResponse, StatusResponse
from ...schemas.common import NotificationModel
from ..workspace import Workspace, WorkspaceRegistry, get_registry, get_workspace

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(workspace: Workspace) -> SessionResponse:
    identity = workspace.session.require_authenticated()
    profile = ProfileModel.model_validate(identity.profile) if identity.profile else None
    return SessionResponse(
        accessToken=identity.session.access_token,
        userId=identity.session.user_id,
        email=identity.session.email,
        profile=profile,
    )


@router.post("/login", response_model=SessionResponse, status_code=status.HTTP_200_OK)
async def login(payload: LoginRequest, registry: WorkspaceRegistry = Depends(get_registry)) -> SessionResponse:
    try:
        workspace = await registry.login(payload.email, payload.password)
    except AuthenticationFailed as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return _session_response(workspace)


@router.post("/logout", response_model=StatusResponse, status_code=status.HTTP_200_OK)
async def logout(
    workspace: Workspace = Depends(get_workspace),
    registry: WorkspaceRegistry = Depends(get_registry),
) -> StatusResponse:
    await registry.logout(workspace.access_token)
    return StatusResponse(
        ok=True,
        notifications=[NotificationModel(level="success", message="Logout realizado com sucesso")],
    )


@router.get("/me", response_model=SessionResponse, status_code=status.HTTP_200_OK)
async def me(workspace: Workspace = Depends(get_workspace)) -> SessionResponse:
    return _session_response(workspace)
