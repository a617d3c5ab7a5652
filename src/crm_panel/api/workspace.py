"""Per-session workspaces and the FastAPI dependencies that resolve them."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from fastapi import Depends, Header, Request
from fastapi.concurrency import run_in_threadpool

from ..config import settings
from ..data.gateway import SupabaseGateway
from ..errors import AuthenticationRequired
from ..models.domain import DashboardAggregate, PageResult, QueryDescriptor
from ..services.dashboard import DashboardDisplay
from ..services.forms import CustomerFormService
from ..services.registry import RegistryCoordinator
from ..services.session import SessionContext
from ..state import FilterCell, Notifier, SessionStore

logger = logging.getLogger(__name__)


class Workspace:
    """Everything one signed-in staff member's views share.

    The filter cell is owned here so the dashboard cards and the registry
    coordinator both subscribe to it explicitly.
    """

    def __init__(self, gateway: SupabaseGateway, session: SessionContext) -> None:
        self.gateway = gateway
        self.session = session
        self.store = SessionStore()
        self.notifier = Notifier()
        self.filter_cell = FilterCell(self.store)
        self.coordinator = RegistryCoordinator(
            self._fetch_page,
            notifier=self.notifier,
            filter_cell=self.filter_cell,
        )
        self.dashboard = DashboardDisplay(self._fetch_aggregate, self.filter_cell, self.notifier)
        self.forms = CustomerFormService(gateway, self.notifier, on_saved=self.coordinator.refresh)
        self._started = False
        self._closed = False
        self.last_used = 0.0

    @property
    def access_token(self) -> str:
        return self.session.require_authenticated().session.access_token

    async def _fetch_page(self, descriptor: QueryDescriptor) -> PageResult:
        return await run_in_threadpool(self.gateway.fetch_page, descriptor)

    async def _fetch_aggregate(self) -> DashboardAggregate:
        return await run_in_threadpool(self.gateway.fetch_dashboard_aggregate)

    def ensure_started(self) -> None:
        if not self._started:
            self._started = True
            self.coordinator.start()

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        self._closed = True
        await self.coordinator.close()


class WorkspaceRegistry:
    """Live workspaces keyed by Gateway access token.

    A workspace idle for longer than ``idle_seconds`` is closed and dropped;
    its token is validated with the Gateway again on the next request.
    """

    def __init__(
        self,
        gateway: SupabaseGateway,
        *,
        idle_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.gateway = gateway
        self.idle_seconds = settings.session_idle_seconds if idle_seconds is None else idle_seconds
        self._clock = clock
        self._workspaces: dict[str, Workspace] = {}
        self._restoring: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._workspaces)

    async def login(self, email: str, password: str) -> Workspace:
        await self._evict_idle()
        session = SessionContext(self.gateway)
        identity = await session.sign_in(email, password)
        workspace = Workspace(self.gateway, session)
        self._track(identity.session.access_token, workspace)
        return workspace

    async def resolve(self, access_token: Optional[str]) -> Workspace:
        await self._evict_idle()
        if not access_token:
            raise AuthenticationRequired()
        workspace = self._live(access_token)
        if workspace is not None:
            return workspace

        # One restore per token; concurrent requests wait and reuse its workspace.
        lock = self._restoring.setdefault(access_token, asyncio.Lock())
        try:
            async with lock:
                workspace = self._live(access_token)
                if workspace is not None:
                    return workspace
                await self._discard(access_token)

                # Token issued before a restart, by another replica, or evicted while idle.
                session = SessionContext(self.gateway)
                if await session.restore(access_token) is None:
                    raise AuthenticationRequired()
                workspace = Workspace(self.gateway, session)
                self._track(access_token, workspace)
                logger.info("Restored workspace for user %s", session.current.session.user_id)
                return workspace
        finally:
            if not lock.locked():
                self._restoring.pop(access_token, None)

    async def logout(self, access_token: str) -> None:
        workspace = self._workspaces.pop(access_token, None)
        if workspace is None:
            return
        await workspace.session.sign_out()
        await workspace.close()

    async def close_all(self) -> None:
        for workspace in list(self._workspaces.values()):
            await workspace.close()
        self._workspaces.clear()

    def _live(self, access_token: str) -> Optional[Workspace]:
        workspace = self._workspaces.get(access_token)
        if workspace is None or not workspace.session.is_authenticated:
            return None
        workspace.last_used = self._clock()
        return workspace

    def _track(self, access_token: str, workspace: Workspace) -> None:
        workspace.last_used = self._clock()
        self._workspaces[access_token] = workspace

    async def _discard(self, access_token: str) -> None:
        workspace = self._workspaces.pop(access_token, None)
        if workspace is not None:
            await workspace.close()

    async def _evict_idle(self) -> None:
        cutoff = self._clock() - self.idle_seconds
        stale = [token for token, workspace in self._workspaces.items() if workspace.last_used < cutoff]
        for token in stale:
            logger.info("Closing workspace idle for more than %.0fs", self.idle_seconds)
            await self._discard(token)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_registry(request: Request) -> WorkspaceRegistry:
    return request.app.state.workspaces


async def get_workspace(
    authorization: Optional[str] = Header(default=None),
    registry: WorkspaceRegistry = Depends(get_registry),
) -> Workspace:
    workspace = await registry.resolve(_bearer_token(authorization))
    workspace.ensure_started()
    return workspace
