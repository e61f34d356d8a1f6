"""
Debounced trigger for search-as-you-type input.

A value is passed on only after ``delay`` seconds without a newer one.
Values equal to the previously pushed value are dropped before any timer is
touched, so repeating the current text does not restart the quiet period.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class Debouncer(Generic[T]):
    def __init__(self, delay: float, callback: Callable[[T], None]) -> None:
        """
        Args:
            delay: Quiet period in seconds before ``callback`` fires
            callback: Called with the surviving value on the event loop
        """
        self.delay = delay
        self._callback = callback
        self._last: object = _UNSET
        self._task: asyncio.Task | None = None

    def push(self, value: T) -> None:
        """Schedule ``value``, superseding any trigger still waiting."""
        if value == self._last:
            return
        loop = asyncio.get_running_loop()
        self._last = value

        # Cancel previous trigger
        self.cancel()

        self._task = loop.create_task(self._delayed(value))

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def join(self) -> None:
        """Wait for the current trigger to fire or be cancelled."""
        while self._task is not None and not self._task.done():
            task = self._task
            await asyncio.wait({task})
            # A push during the wait replaces the task; keep waiting for that one
            if task is self._task and not task.cancelled():
                task.result()

    async def _delayed(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        self._callback(value)
