"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.routes import auth, customers, dashboard, health, preferences, registry, reports, users
from .api.workspace import WorkspaceRegistry
from .config import settings
from .data.gateway import SupabaseGateway
from .errors import AuthenticationRequired, GatewayUnavailable, PermissionDenied

logger = logging.getLogger(__name__)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthenticationRequired)
    async def _authentication_required(request: Request, exc: AuthenticationRequired) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Login required", "redirect": exc.redirect_to},
            headers={"Location": exc.redirect_to},
        )

    @app.exception_handler(PermissionDenied)
    async def _permission_denied(request: Request, exc: PermissionDenied) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": str(exc), "requiredRole": exc.required_role},
        )

    @app.exception_handler(GatewayUnavailable)
    async def _gateway_unavailable(request: Request, exc: GatewayUnavailable) -> JSONResponse:
        logger.error("Request to %s failed: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": exc.message},
        )


def create_app(gateway: Optional[SupabaseGateway] = None) -> FastAPI:
    workspaces = WorkspaceRegistry(gateway or SupabaseGateway())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await workspaces.close_all()

    app = FastAPI(title=settings.app_name, root_path="", lifespan=lifespan)
    app.state.workspaces = workspaces

    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Location"],
        )
    _install_error_handlers(app)

    # Root endpoint for diagnostics
    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(dashboard.router, prefix=settings.api_prefix)
    app.include_router(registry.router, prefix=settings.api_prefix)
    app.include_router(customers.router, prefix=settings.api_prefix)
    app.include_router(reports.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(preferences.router, prefix=settings.api_prefix)
    return app


app = create_app()
