"""Trailing debounce on top of the running asyncio loop."""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Deliver only the last pushed value, once input has been quiet for ``delay`` seconds.

    Each push cancels the pending timer and starts a new one.
    """

    def __init__(self, delay: float, callback: Callable[[T], None]) -> None:
        self.delay = delay
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._idle.clear()
        self._handle = loop.call_later(self.delay, self._fire, value)

    def _fire(self, value: T) -> None:
        self._handle = None
        self._idle.set()
        self._callback(value)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._idle.set()

    async def wait(self) -> None:
        """Return once no timer is pending."""
        await self._idle.wait()
