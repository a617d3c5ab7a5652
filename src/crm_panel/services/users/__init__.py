"""Staff management helpers."""

from .service import MIN_PASSWORD_LENGTH, change_role, create_staff_user, list_staff

__all__ = ["MIN_PASSWORD_LENGTH", "change_role", "create_staff_user", "list_staff"]
