"""
rxlite Sources - Producer Adapters
==================================

Every source here is a thin ``create`` wrapper around something that pushes
values:

- of / from_iterable / empty / never / throw: synchronous and trivial sources
- from_event: an event source with add/remove listener functions
- from_callback: a single-shot callback API (the HTTP request style)
- from_future: a single-shot asyncio Future
- timer / interval: scheduler-driven sources
"""

import asyncio
import logging
from typing import Any, Callable, Iterable, Optional

from .config import get_default_scheduler
from .disposable import SerialDisposable
from .exceptions import InvalidArgumentError, require_callable
from .observable import Observable, create
from .scheduler import Duration, Scheduler, normalize_duration

logger = logging.getLogger(__name__)


# ============================================================================
# SYNCHRONOUS SOURCES
# ============================================================================


def from_iterable(iterable: Iterable[Any]) -> Observable:
    """
    Push every item of ``iterable`` synchronously, then complete.

    Iteration stops as soon as the subscriber stops listening, so unbounded
    iterators are safe behind ``take``. A one-shot iterator (a generator)
    only yields values to its first subscriber.
    """
    if not hasattr(iterable, "__iter__"):
        raise InvalidArgumentError(f"Expected an iterable, got {type(iterable).__name__}")

    def producer(observer):
        try:
            for item in iterable:
                if observer.is_stopped:
                    return None
                observer.on_next(item)
        except Exception as error:
            observer.on_error(error)
            return None
        observer.on_completed()
        return None

    return create(producer)


def of(*values: Any) -> Observable:
    """Push ``values`` in order, then complete."""
    return from_iterable(values)


def empty() -> Observable:
    """Complete immediately without values."""

    def producer(observer):
        observer.on_completed()

    return create(producer)


def never() -> Observable:
    """Never push anything."""
    return create(lambda observer: None)


def throw(error: Exception) -> Observable:
    """Fail immediately with ``error``."""

    def producer(observer):
        observer.on_error(error)

    return create(producer)


# ============================================================================
# EVENT AND CALLBACK ADAPTERS
# ============================================================================


def from_event(
    add_handler: Callable[[Callable[..., None]], Any],
    remove_handler: Callable[[Callable[..., None]], Any],
) -> Observable:
    """
    Adapt an event source.

    Every event becomes ``on_next``: a single event argument is pushed as is,
    several are pushed as a tuple. The sequence never completes on its own;
    disposal unregisters the handler.

        clicks = from_event(button.add_listener, button.remove_listener)
    """
    require_callable(add_handler, "add_handler")
    require_callable(remove_handler, "remove_handler")

    def producer(observer):
        def handler(*args):
            observer.on_next(args[0] if len(args) == 1 else args)

        add_handler(handler)
        logger.debug("Registered event handler %r", handler)

        def teardown():
            remove_handler(handler)
            logger.debug("Removed event handler %r", handler)

        return teardown

    return create(producer)


def from_callback(func: Callable[..., Any]) -> Callable[..., Observable]:
    """
    Adapt a single-shot callback API.

    ``func(*args, on_success, on_failure)`` must eventually call exactly one
    of the two callbacks. The returned factory takes ``*args`` and gives an
    Observable that calls ``func`` on each subscription and emits the result
    once, or fails. Callbacks arriving after disposal are ignored.

        get_json = from_callback(http.get_json)
        get_json("/movies").subscribe(print)
    """
    require_callable(func, "func")

    def factory(*args: Any, **kwargs: Any) -> Observable:
        def producer(observer):
            def on_success(result=None):
                observer.on_next(result)
                observer.on_completed()

            def on_failure(error):
                if not isinstance(error, Exception):
                    error = RuntimeError(error)
                observer.on_error(error)

            func(*args, on_success, on_failure, **kwargs)

        return create(producer)

    return factory


def from_future(future: "asyncio.Future") -> Observable:
    """
    Adapt an asyncio Future: emit its result and complete, or fail.

    A cancelled future fails with ``asyncio.CancelledError``.
    """
    if not asyncio.isfuture(future):
        raise InvalidArgumentError(
            f"Expected an asyncio Future, got {type(future).__name__}"
        )

    def producer(observer):
        def on_done(done: "asyncio.Future") -> None:
            if done.cancelled():
                observer.on_error(asyncio.CancelledError())
                return
            error = done.exception()
            if error is not None:
                observer.on_error(error)
                return
            observer.on_next(done.result())
            observer.on_completed()

        future.add_done_callback(on_done)
        return lambda: future.remove_done_callback(on_done)

    return create(producer)


# ============================================================================
# SCHEDULED SOURCES
# ============================================================================


def timer(due: Duration, scheduler: Optional[Scheduler] = None) -> Observable:
    """Emit ``0`` after ``due``, then complete."""
    delay = normalize_duration(due)

    def producer(observer):
        clock = scheduler if scheduler is not None else get_default_scheduler()

        def fire():
            observer.on_next(0)
            observer.on_completed()

        return clock.schedule(fire, delay)

    return create(producer)


def interval(period: Duration, scheduler: Optional[Scheduler] = None) -> Observable:
    """Emit ``0, 1, 2, ...`` every ``period``. Never completes."""
    step = normalize_duration(period)
    if step <= 0:
        raise InvalidArgumentError(f"interval period must be positive, got {period}")

    def producer(observer):
        clock = scheduler if scheduler is not None else get_default_scheduler()
        pending = SerialDisposable()
        ticks = 0

        def tick():
            nonlocal ticks
            value = ticks
            ticks += 1
            pending.disposable = clock.schedule(tick, step)
            observer.on_next(value)

        pending.disposable = clock.schedule(tick, step)
        return pending

    return create(producer)
