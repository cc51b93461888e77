"""
rxlite Time-Based Operators - throttle
======================================

Trailing-edge throttling: a value is forwarded only once the source has
been quiet for the whole window. Each new value restarts the window and
replaces the held value.

Completion flushes the held value immediately, then completes. An error
discards the held value.
"""

from typing import Optional

from ..config import get_default_scheduler
from ..disposable import CompositeDisposable, SerialDisposable
from ..exceptions import InvalidArgumentError
from ..observable import NOTHING, Observable, create
from ..observer import Observer
from ..scheduler import Duration, Scheduler, normalize_duration


def throttle(
    source: Observable, duration: Duration, scheduler: Optional[Scheduler] = None
) -> Observable:
    """
    Forward the latest value after ``duration`` without newer values.

    Timers run on ``scheduler``, or on the default scheduler at subscribe
    time when omitted.
    """
    window = normalize_duration(duration)
    if scheduler is not None and not hasattr(scheduler, "schedule"):
        raise InvalidArgumentError(
            f"scheduler must provide schedule(), got {type(scheduler).__name__}"
        )

    def producer(observer):
        clock = scheduler if scheduler is not None else get_default_scheduler()
        timer = SerialDisposable()
        held = NOTHING
        generation = 0

        def on_next(value):
            nonlocal held, generation
            held = value
            generation += 1
            ticket = generation

            def release():
                nonlocal held
                if ticket != generation or held is NOTHING:
                    return
                value, held = held, NOTHING
                observer.on_next(value)

            timer.disposable = clock.schedule(release, window)

        def on_error(error):
            nonlocal held
            held = NOTHING
            timer.dispose()
            observer.on_error(error)

        def on_completed():
            nonlocal held
            timer.dispose()
            if held is not NOTHING:
                value, held = held, NOTHING
                observer.on_next(value)
            observer.on_completed()

        subscription = source.subscribe(
            Observer(on_next, on_error, on_completed, parent=observer)
        )
        return CompositeDisposable(subscription, timer)

    return create(producer)
