"""Dashboard summary helpers."""

from .service import CARD_TITLES, DashboardDisplay

__all__ = ["CARD_TITLES", "DashboardDisplay"]
