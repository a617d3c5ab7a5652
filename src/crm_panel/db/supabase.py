"""Supabase clients for the admin panel backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client, ClientOptions
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
        Never sign users in on this client: a sign-in swaps its Authorization header
        for the user's JWT, and every table and RPC call would run as that user.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def create_auth_client() -> Client | None:
    """Fresh, uncached client for password sign-in and sign-up.

    The session it picks up is neither persisted nor refreshed and dies with the client.
    """
    if not settings.supabase_url or not settings.supabase_key:
        return None

    try:
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )
    except Exception as e:
        logging.error(f"Failed to create Supabase auth client: {e}")
        return None
