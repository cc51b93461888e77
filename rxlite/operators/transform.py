"""
rxlite Per-Value Operators - map, filter, scan
==============================================

Each operator subscribes to its source and rewrites ``on_next``; terminal
notifications pass through untouched. An exception raised by the user
function becomes ``on_error`` downstream, which also disposes the source.
"""

from typing import Any, Callable, TypeVar

from ..exceptions import require_callable
from ..observable import Observable, create
from ..observer import Observer

T = TypeVar("T")
U = TypeVar("U")


def map(source: Observable, mapper: Callable[[T], U]) -> Observable:
    """Forward ``mapper(value)`` for every value."""
    require_callable(mapper, "mapper")

    def producer(observer):
        def on_next(value):
            try:
                result = mapper(value)
            except Exception as error:
                observer.on_error(error)
                return
            observer.on_next(result)

        return source.subscribe(
            Observer(on_next, observer.on_error, observer.on_completed, parent=observer)
        )

    return create(producer)


def filter(source: Observable, predicate: Callable[[T], bool]) -> Observable:
    """Forward only the values for which ``predicate`` holds."""
    require_callable(predicate, "predicate")

    def producer(observer):
        def on_next(value):
            try:
                keep = predicate(value)
            except Exception as error:
                observer.on_error(error)
                return
            if keep:
                observer.on_next(value)

        return source.subscribe(
            Observer(on_next, observer.on_error, observer.on_completed, parent=observer)
        )

    return create(producer)


def scan(source: Observable, accumulator: Callable[[Any, T], Any], seed: Any) -> Observable:
    """
    Running accumulation.

    Emits ``accumulator(acc, value)`` after every value, starting from
    ``seed``. Nothing is emitted for the seed itself.
    """
    require_callable(accumulator, "accumulator")

    def producer(observer):
        acc = seed

        def on_next(value):
            nonlocal acc
            try:
                acc = accumulator(acc, value)
            except Exception as error:
                observer.on_error(error)
                return
            observer.on_next(acc)

        return source.subscribe(
            Observer(on_next, observer.on_error, observer.on_completed, parent=observer)
        )

    return create(producer)
