"""
rxlite AsyncIO Scheduler
========================

Real-time scheduler backed by an asyncio event loop. Numeric durations are
seconds. Delivery stays single-threaded: every callback runs on the loop.
"""

import asyncio
import logging
from typing import Optional

from ..disposable import Disposable
from .base import Action, Duration, normalize_duration

logger = logging.getLogger(__name__)


class AsyncIOScheduler:
    """
    Schedules actions with ``loop.call_soon`` / ``loop.call_later``.

    Without an explicit loop, the running loop is looked up on every call,
    so a single instance can serve successive ``asyncio.run`` invocations.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    @property
    def now(self) -> float:
        return self.loop.time()

    def schedule(self, action: Action, delay: Duration = 0) -> Disposable:
        seconds = normalize_duration(delay)
        loop = self.loop
        if seconds == 0:
            handle = loop.call_soon(action)
        else:
            handle = loop.call_later(seconds, action)
        logger.debug("Scheduled action in %ss", seconds)
        return Disposable(handle.cancel)

    def __repr__(self) -> str:
        return f"AsyncIOScheduler(loop={self._loop!r})"
