"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool

from ...data.gateway import SupabaseGateway
from ...errors import GatewayError

router = APIRouter(tags=["health"])


def get_gateway(request: Request) -> SupabaseGateway:
    return request.app.state.workspaces.gateway


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
async def check_database(gateway: SupabaseGateway = Depends(get_gateway)) -> dict:
    """Check the Supabase connection by reading the dashboard counts."""
    if not gateway.configured:
        return {
            "configured": False,
            "connected": False,
            "message": "Supabase not configured. Set CRM_SUPABASE_URL and CRM_SUPABASE_KEY environment variables.",
        }

    try:
        aggregate = await run_in_threadpool(gateway.fetch_dashboard_aggregate)
    except GatewayError as exc:
        return {
            "configured": True,
            "connected": False,
            "error": exc.message,
            "message": f"Database connection error: {exc.message}",
        }
    return {
        "configured": True,
        "connected": True,
        "customers_count": aggregate.total_count,
        "message": f"Database connected. Found {aggregate.total_count} customers.",
    }
