"""Current staff identity, role lookup and session-change subscription."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi.concurrency import run_in_threadpool

from ...data.gateway import SupabaseGateway
from ...errors import AuthenticationRequired, GatewayError, PermissionDenied
from ...models.domain import AuthSession, Identity

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Identity]], None]


class SessionContext:
    def __init__(self, gateway: SupabaseGateway) -> None:
        self._gateway = gateway
        self._identity: Optional[Identity] = None
        self._listeners: list[SessionListener] = []

    @property
    def current(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register for session changes; the listener gets the identity or ``None``."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, email: str, password: str) -> Identity:
        session = await run_in_threadpool(self._gateway.sign_in, email, password)
        logger.info("Staff user %s signed in", session.user_id)
        return await self._establish(session)

    async def restore(self, access_token: str) -> Optional[Identity]:
        """Rebuild the identity from an existing access token."""
        session = await run_in_threadpool(self._gateway.get_session_user, access_token)
        if session is None:
            self._set(None)
            return None
        return await self._establish(session)

    async def sign_out(self) -> None:
        identity = self._identity
        if identity is None:
            return
        try:
            await run_in_threadpool(self._gateway.sign_out, identity.session.access_token)
        except GatewayError as exc:
            logger.warning("Gateway sign-out failed for %s: %s", identity.session.user_id, exc.message)
        logger.info("Staff user %s signed out", identity.session.user_id)
        self._set(None)

    def require_authenticated(self) -> Identity:
        if self._identity is None:
            raise AuthenticationRequired()
        return self._identity

    def require_role(self, role: str) -> Identity:
        identity = self.require_authenticated()
        if identity.role != role:
            raise PermissionDenied(role)
        return identity

    async def _establish(self, session: AuthSession) -> Identity:
        try:
            profile = await run_in_threadpool(self._gateway.get_profile, session.user_id)
        except GatewayError as exc:
            logger.warning("Profile lookup failed for %s: %s", session.user_id, exc.message)
            profile = None
        identity = Identity(session=session, profile=profile)
        self._set(identity)
        return identity

    def _set(self, identity: Optional[Identity]) -> None:
        self._identity = identity
        for listener in list(self._listeners):
            listener(identity)
