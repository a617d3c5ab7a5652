"""Customer form endpoints (create / edit / delete)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.responses import JSONResponse

from ...errors import GatewayError, GatewayUnavailable
from ...schemas.common import notification_models
from ...schemas.customers import CustomerFormModel, CustomerModel, FormResultResponse
from ...services.forms import FormOutcome
from ..workspace import Workspace, get_workspace

router = APIRouter(prefix="/customers", tags=["customers"])


def _form_response(workspace: Workspace, outcome: FormOutcome, success_status: int) -> JSONResponse:
    body = FormResultResponse(
        ok=outcome.ok,
        customer=CustomerModel.model_validate(outcome.customer) if outcome.customer else None,
        fieldErrors=outcome.field_errors,
        notifications=notification_models(workspace.notifier.drain()),
    )
    if outcome.ok:
        status_code = success_status
    elif outcome.field_errors:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.get("/{customer_id}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
async def get_customer(
    customer_id: str = Path(..., description="Customer identifier"),
    workspace: Workspace = Depends(get_workspace),
) -> CustomerModel:
    try:
        customer = await workspace.forms.load(customer_id)
    except GatewayUnavailable:
        raise
    except GatewayError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Erro ao carregar cliente") from exc
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente não encontrado")
    return CustomerModel.model_validate(customer)


@router.post("", response_model=FormResultResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerFormModel,
    workspace: Workspace = Depends(get_workspace),
) -> JSONResponse:
    outcome = await workspace.forms.submit(payload.model_dump())
    return _form_response(workspace, outcome, status.HTTP_201_CREATED)


@router.put("/{customer_id}", response_model=FormResultResponse)
async def update_customer(
    payload: CustomerFormModel,
    customer_id: str = Path(..., description="Customer identifier"),
    workspace: Workspace = Depends(get_workspace),
) -> JSONResponse:
    outcome = await workspace.forms.submit(payload.model_dump(), customer_id=customer_id)
    return _form_response(workspace, outcome, status.HTTP_200_OK)


@router.delete("/{customer_id}", response_model=FormResultResponse)
async def delete_customer(
    customer_id: str = Path(..., description="Customer identifier"),
    workspace: Workspace = Depends(get_workspace),
) -> JSONResponse:
    deleted = await workspace.forms.delete(customer_id)
    return _form_response(workspace, FormOutcome(ok=deleted), status.HTTP_200_OK)
