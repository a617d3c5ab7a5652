"""Per-session state primitives."""

from .notifications import Notification, Notifier
from .store import ACTIVE_FILTER_KEY, DARK_MODE_KEY, FilterCell, ObservableCell, SessionStore

__all__ = [
    "ACTIVE_FILTER_KEY",
    "DARK_MODE_KEY",
    "FilterCell",
    "Notification",
    "Notifier",
    "ObservableCell",
    "SessionStore",
]
