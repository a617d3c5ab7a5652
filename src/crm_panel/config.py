"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CRM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Customer Registry Admin API"
    api_prefix: str = "/api"
    page_size: int = Field(default=10, ge=1, description="Rows per registry page.")
    search_debounce_seconds: float = Field(
        default=0.4,
        ge=0.0,
        description="Quiet period before a typed search term reaches the query.",
    )
    report_max_rows: int = Field(
        default=10_000,
        ge=1,
        description="Upper bound of rows fetched for the print report.",
    )
    session_idle_seconds: float = Field(
        default=1800.0,
        gt=0,
        description="Idle time after which a session workspace is closed; the token is re-validated on next use.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase key used by the backend (service role or anon).",
    )
    customers_table: str = "Customers"
    profiles_table: str = "profiles"
    paginated_rpc: str = "get_paginated_clientes"
    dashboard_rpc: str = "get_dashboard_stats"
    role_rpc: str = "update_user_role"
    admin_role: str = "admin"

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
