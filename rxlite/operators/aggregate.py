"""
rxlite Aggregation - reduce
===========================
"""

from typing import Any, Callable

from ..exceptions import InvalidArgumentError, require_callable
from ..observable import NOTHING, Observable, create
from ..observer import Observer


def reduce(source: Observable, combiner: Callable[[Any, Any], Any], *seed: Any) -> Observable:
    """
    Fold the whole sequence into one value, emitted on completion.

    Without a seed the first value starts the accumulation, and an empty
    source completes without emitting. A source that never completes never
    emits.
    """
    require_callable(combiner, "combiner")
    if len(seed) > 1:
        raise InvalidArgumentError(f"reduce takes at most one seed, got {len(seed)}")
    initial = seed[0] if seed else NOTHING

    def producer(observer):
        acc = initial

        def on_next(value):
            nonlocal acc
            if acc is NOTHING:
                acc = value
                return
            try:
                acc = combiner(acc, value)
            except Exception as error:
                observer.on_error(error)

        def on_completed():
            if acc is not NOTHING:
                observer.on_next(acc)
            observer.on_completed()

        return source.subscribe(
            Observer(on_next, observer.on_error, on_completed, parent=observer)
        )

    return create(producer)
