"""Session-scoped key/value store and observable cells."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from ..models.domain import FilterBucket

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTIVE_FILTER_KEY = "registry.filter"
DARK_MODE_KEY = "preferences.dark_mode"


class SessionStore:
    """Key/value storage that lives as long as one staff session."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._values


class ObservableCell(Generic[T]):
    """A value with explicit subscribers.

    Listeners run synchronously, in subscription order, only when the value
    actually changes.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._listeners: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            listener(value)


class FilterCell(ObservableCell[FilterBucket]):
    """Shared quick-filter bucket, persisted into the session store."""

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        super().__init__(self._restore(store))

    @staticmethod
    def _restore(store: SessionStore) -> FilterBucket:
        raw = store.get(ACTIVE_FILTER_KEY)
        if raw is None:
            return FilterBucket.ALL
        try:
            return FilterBucket(raw)
        except ValueError:
            logger.warning("Ignoring unknown persisted filter bucket %r", raw)
            return FilterBucket.ALL

    def set(self, value: FilterBucket) -> None:
        self._store.set(ACTIVE_FILTER_KEY, value.value)
        super().set(value)
