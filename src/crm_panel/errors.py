"""Exceptions shared by the gateway, services and HTTP layer."""

from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """A failed call to the hosted backend.

    ``code`` is the backend error code (e.g. the Postgres SQLSTATE ``23505``)
    and ``constraint`` the violated constraint name when the backend reports
    one. Both may be ``None`` for transport failures.
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        constraint: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.constraint = constraint
        self.details = details


class GatewayUnavailable(GatewayError):
    """Supabase is not configured for this deployment."""

    def __init__(self, message: str = "Supabase not configured") -> None:
        super().__init__(message, code="unavailable")


class AuthenticationFailed(Exception):
    pass


class AuthenticationRequired(Exception):
    """No session: the caller must go back to the login entry point."""

    redirect_to = "/"


class PermissionDenied(Exception):
    def __init__(self, required_role: str) -> None:
        super().__init__(f"Role '{required_role}' required")
        self.required_role = required_role
