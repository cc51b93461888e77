"""
rxlite Virtual Time Scheduler
=============================

Deterministic scheduler whose clock only moves when told to. Time units are
whatever the caller uses; the test suite uses integer milliseconds.

Usage:
    scheduler = VirtualTimeScheduler()
    scheduler.schedule(lambda: print("tick"), 1000)
    scheduler.advance_to(999)   # nothing happens
    scheduler.advance_to(1000)  # prints "tick"
"""

import heapq
import itertools
import logging
from typing import List, Tuple, Union

from ..disposable import Disposable
from ..exceptions import InvalidArgumentError
from .base import Action, Duration, normalize_duration

logger = logging.getLogger(__name__)

Number = Union[int, float]


class ScheduledItem:
    """One pending action on the virtual clock."""

    __slots__ = ("due", "action", "cancelled")

    def __init__(self, due: Number, action: Action):
        self.due = due
        self.action = action
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class VirtualTimeScheduler:
    """
    Scheduler driven by explicit clock advancement.

    Actions due at the same time run in the order they were scheduled.
    Actions scheduled while advancing run in the same pass if they fall due
    before the target time.
    """

    def __init__(self, initial_time: Number = 0):
        self._clock = initial_time
        self._queue: List[Tuple[Number, int, ScheduledItem]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> Number:
        return self._clock

    @property
    def pending(self) -> int:
        """Number of scheduled actions that have not run or been cancelled."""
        return sum(1 for _, _, item in self._queue if not item.cancelled)

    def schedule(self, action: Action, delay: Duration = 0) -> Disposable:
        return self.schedule_absolute(self._clock + normalize_duration(delay), action)

    def schedule_absolute(self, due: Number, action: Action) -> Disposable:
        """Run ``action`` when the clock reaches ``due``."""
        if due < self._clock:
            due = self._clock
        item = ScheduledItem(due, action)
        heapq.heappush(self._queue, (due, next(self._sequence), item))
        logger.debug("Scheduled action at t=%s", due)
        return Disposable(item.cancel)

    def advance_to(self, time: Number) -> None:
        """Move the clock to ``time``, running every action due on the way."""
        if time < self._clock:
            raise InvalidArgumentError(
                f"Cannot move virtual time backwards from {self._clock} to {time}"
            )
        while self._queue and self._queue[0][0] <= time:
            due, _, item = heapq.heappop(self._queue)
            if item.cancelled:
                continue
            self._clock = due
            item.action()
        self._clock = time

    def advance_by(self, delta: Duration) -> None:
        self.advance_to(self._clock + normalize_duration(delta))

    def run(self) -> None:
        """
        Run until no actions remain.

        Never returns while a periodic source such as ``interval`` is still
        subscribed; use ``advance_to`` for those.
        """
        while self._queue:
            due, _, item = heapq.heappop(self._queue)
            if item.cancelled:
                continue
            self._clock = max(self._clock, due)
            item.action()

    def __repr__(self) -> str:
        return f"VirtualTimeScheduler(now={self._clock}, pending={self.pending})"
