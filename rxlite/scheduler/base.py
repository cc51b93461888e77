"""
rxlite Scheduler Protocol
=========================

A Scheduler is the one shared service of the library: it runs a callback
after a delay and lets the caller cancel it. Time-based operators
(``throttle``, ``timer``, ``interval``) depend only on this protocol, so
tests can swap in a virtual clock.
"""

from datetime import timedelta
from typing import Any, Callable, Protocol, Union, runtime_checkable

from ..disposable import Disposable
from ..exceptions import InvalidArgumentError

Duration = Union[int, float, timedelta]
Action = Callable[[], Any]


@runtime_checkable
class Scheduler(Protocol):
    """Source of delayed, cancellable callbacks."""

    @property
    def now(self) -> float:
        """Current time on this scheduler's clock."""
        ...

    def schedule(self, action: Action, delay: Duration = 0) -> Disposable:
        """Run ``action`` after ``delay``. Disposing the result cancels it."""
        ...


def normalize_duration(duration: Duration) -> Union[int, float]:
    """
    Convert a duration to a plain number.

    ``timedelta`` becomes seconds; numbers pass through unchanged so a
    virtual clock can keep integer units.
    """
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        raise InvalidArgumentError(
            f"Duration must be a number or timedelta, got {type(duration).__name__}"
        )
    if duration < 0:
        raise InvalidArgumentError(f"Duration must not be negative, got {duration}")
    return duration
