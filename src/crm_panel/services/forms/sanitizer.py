"""Shape checks and markup stripping for the customer form."""

from __future__ import annotations

import html
import re
from typing import Any, Mapping

import bleach

REQUIRED_FIELDS = ("name", "email", "phone", "address", "age")
TEXT_FIELDS = ("name", "email", "phone", "address")
NOTE_FIELDS = ("interests", "feelings", "values", "other_info")

REQUIRED_MESSAGE = "Campo obrigatório"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Entity-encoded markup ("&lt;b&gt;") turns into tags once decoded; strip again until stable.
_MAX_STRIP_PASSES = 4


def _strip_once(text: str) -> str:
    return bleach.clean(text, tags=[], attributes={}, strip=True, strip_comments=True)


def strip_markup(value: Any) -> str:
    """Remove every tag (keeping inner text) and surrounding whitespace.

    Plain characters come back as typed: bleach escapes "&" and "<", so its
    output is decoded again before storing.
    """
    if value is None:
        return ""
    text = str(value)
    for _ in range(_MAX_STRIP_PASSES):
        decoded = html.unescape(_strip_once(text))
        if decoded == text:
            return text.strip()
        text = decoded
    # Still changing: keep the escaped form rather than risk live markup.
    return _strip_once(text).strip()


def coerce_age(value: Any) -> int:
    """Leading integer of the input ("25 anos" -> 25); 0 when there is none."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else 0


def missing_fields(form: Mapping[str, Any], data: Mapping[str, Any] | None = None) -> list[str]:
    """Required fields left blank.

    With ``data`` (the sanitized payload) text fields are judged after markup
    removal, so "<b></b>" counts as blank. Age is always read from the raw form.
    """
    values = dict(form)
    if data is not None:
        values.update({name: data[name] for name in TEXT_FIELDS})
    missing = []
    for name in REQUIRED_FIELDS:
        value = values.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def sanitize_form(form: Mapping[str, Any]) -> dict[str, Any]:
    """Payload ready for insert/update: markup-free text, integer age, ``None`` for blank notes."""
    data: dict[str, Any] = {name: strip_markup(form.get(name)) for name in TEXT_FIELDS}
    for name in NOTE_FIELDS:
        data[name] = strip_markup(form.get(name)) or None
    data["age"] = coerce_age(form.get("age"))
    data["active"] = bool(form.get("active", True))
    data["reviewed"] = bool(form.get("reviewed", False))
    return data
