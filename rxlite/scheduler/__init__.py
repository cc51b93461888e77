"""
rxlite Schedulers
=================

- Scheduler: the protocol time-based operators depend on
- VirtualTimeScheduler: deterministic clock for tests
- AsyncIOScheduler: real time on an asyncio event loop
"""

from .asyncio_scheduler import AsyncIOScheduler
from .base import Duration, Scheduler, normalize_duration
from .virtual import ScheduledItem, VirtualTimeScheduler

__all__ = [
    "Scheduler",
    "Duration",
    "normalize_duration",
    "VirtualTimeScheduler",
    "ScheduledItem",
    "AsyncIOScheduler",
]
