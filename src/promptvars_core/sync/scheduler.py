"""Timer scheduling seam for the debouncer.

Delays are in milliseconds. ``AsyncioScheduler`` runs on an asyncio event
loop; tests substitute a virtual clock with the same ``call_later`` shape.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Handle of a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


class Scheduler(Protocol):
    """Something that can run a callback after a delay."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` to run once after ``delay_ms`` milliseconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """Initialize scheduler.

        Args:
            loop: Event loop to use (defaults to the running loop at call time)
        """
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)
