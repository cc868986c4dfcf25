"""Scheduler backed by the asyncio event loop."""

from __future__ import annotations

import asyncio
from typing import Callable

from adsdash.adapters.scheduler.base import AbstractScheduler, CancelHandle


class AsyncioScheduler(AbstractScheduler):
    """Schedule callbacks with ``loop.call_later``.

    When no loop is given, the running loop at ``schedule()`` time is used,
    so this must be called from inside a coroutine or callback.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, callback: Callable[[], None], delay_seconds: float) -> CancelHandle:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)
