"""Customer form helpers."""

from .errors import CONSTRAINT_FIELDS, FieldError, map_write_error
from .sanitizer import coerce_age, missing_fields, sanitize_form, strip_markup
from .service import CustomerFormService, FormOutcome

__all__ = [
    "CONSTRAINT_FIELDS",
    "CustomerFormService",
    "FieldError",
    "FormOutcome",
    "coerce_age",
    "map_write_error",
    "missing_fields",
    "sanitize_form",
    "strip_markup",
]
