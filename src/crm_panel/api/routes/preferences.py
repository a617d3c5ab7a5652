"""Per-session display preferences."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.auth import PreferencesModel
from ...state import DARK_MODE_KEY
from ..workspace import Workspace, get_workspace

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesModel, status_code=status.HTTP_200_OK)
async def get_preferences(workspace: Workspace = Depends(get_workspace)) -> PreferencesModel:
    return PreferencesModel(darkMode=bool(workspace.store.get(DARK_MODE_KEY, False)))


@router.put("", response_model=PreferencesModel, status_code=status.HTTP_200_OK)
async def put_preferences(
    payload: PreferencesModel,
    workspace: Workspace = Depends(get_workspace),
) -> PreferencesModel:
    workspace.store.set(DARK_MODE_KEY, payload.darkMode)
    return payload
