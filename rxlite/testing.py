"""
rxlite Testing - Recorded Notifications on a Virtual Clock
==========================================================

Helpers for writing deterministic tests of asynchronous sequences:

- Recorder: an observer that keeps every notification with its time
- on_next / on_error / on_completed: build expected or scripted records
- hot: a shared source that pushes scripted records at absolute times
- cold: a source that replays scripted records relative to each subscription

Usage:
    scheduler = VirtualTimeScheduler()
    source = hot(scheduler, on_next(100, "a"), on_completed(300))
    recorder = Recorder(scheduler)
    source.throttle(50, scheduler).subscribe(recorder)
    scheduler.run()
    assert recorder.messages == [on_next(150, "a"), on_completed(300)]
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from .disposable import CompositeDisposable
from .observable import Observable, create
from .scheduler import VirtualTimeScheduler
from .subject import Subject

NEXT = "N"
ERROR = "E"
COMPLETED = "C"


@dataclass(frozen=True)
class Notification:
    """One observer call, reified."""

    kind: str
    value: Any = None

    def accept(self, observer) -> None:
        if self.kind == NEXT:
            observer.on_next(self.value)
        elif self.kind == ERROR:
            observer.on_error(self.value)
        else:
            observer.on_completed()


@dataclass(frozen=True)
class Recorded:
    """A notification stamped with the virtual time it happened at."""

    time: Any
    notification: Notification


def on_next(time, value) -> Recorded:
    return Recorded(time, Notification(NEXT, value))


def on_error(time, error: Exception) -> Recorded:
    return Recorded(time, Notification(ERROR, error))


def on_completed(time) -> Recorded:
    return Recorded(time, Notification(COMPLETED))


class Recorder:
    """Observer that records notifications, timestamped by ``scheduler``."""

    def __init__(self, scheduler: Optional[VirtualTimeScheduler] = None):
        self._scheduler = scheduler
        self.messages: List[Recorded] = []

    def _now(self):
        return self._scheduler.now if self._scheduler is not None else 0

    def on_next(self, value: Any) -> None:
        self.messages.append(on_next(self._now(), value))

    def on_error(self, error: Exception) -> None:
        self.messages.append(on_error(self._now(), error))

    def on_completed(self) -> None:
        self.messages.append(on_completed(self._now()))

    @property
    def values(self) -> List[Any]:
        return [
            record.notification.value
            for record in self.messages
            if record.notification.kind == NEXT
        ]

    @property
    def errors(self) -> List[Exception]:
        return [
            record.notification.value
            for record in self.messages
            if record.notification.kind == ERROR
        ]

    @property
    def is_completed(self) -> bool:
        return any(record.notification.kind == COMPLETED for record in self.messages)

    @property
    def terminal_count(self) -> int:
        return sum(1 for record in self.messages if record.notification.kind != NEXT)


def hot(scheduler: VirtualTimeScheduler, *messages: Recorded) -> Subject:
    """
    Shared source pushing ``messages`` at their absolute times.

    Subscribers only see what is pushed after they subscribe.
    """
    subject: Subject = Subject()
    for record in messages:
        scheduler.schedule_absolute(
            record.time, lambda record=record: record.notification.accept(subject)
        )
    return subject


def cold(scheduler: VirtualTimeScheduler, *messages: Recorded) -> Observable:
    """Source replaying ``messages`` at times relative to each subscription."""

    def producer(observer):
        scheduled = CompositeDisposable()
        for record in messages:
            scheduled.add(
                scheduler.schedule(
                    lambda record=record: record.notification.accept(observer),
                    record.time,
                )
            )
        return scheduled

    return create(producer)
