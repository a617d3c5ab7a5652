"""Route group exports."""

from . import auth, customers, dashboard, health, preferences, registry, reports, users

__all__ = ["auth", "customers", "dashboard", "health", "preferences", "registry", "reports", "users"]
