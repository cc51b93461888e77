"""
rxlite Filtering Operators - take, take_until, distinct_until_changed
=====================================================================

``take`` and ``take_until`` are how a consumer stops listening to an
unbounded source (UI events, intervals) without holding on to the
Disposable: completing downstream tears the upstream registration down.
"""

import operator
from typing import Any, Callable, Optional

from ..disposable import CompositeDisposable, SingleAssignmentDisposable
from ..exceptions import InvalidArgumentError, require_callable
from ..observable import NOTHING, Observable, create
from ..observer import Observer


def take(source: Observable, count: int) -> Observable:
    """
    Forward the first ``count`` values, then complete and dispose the source.

    ``count <= 0`` completes without subscribing to the source.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidArgumentError(f"take count must be an int, got {type(count).__name__}")

    def producer(observer):
        if count <= 0:
            observer.on_completed()
            return None
        remaining = count

        def on_next(value):
            nonlocal remaining
            if remaining <= 0:
                return
            remaining -= 1
            observer.on_next(value)
            if remaining == 0:
                observer.on_completed()

        return source.subscribe(
            Observer(on_next, observer.on_error, observer.on_completed, parent=observer)
        )

    return create(producer)


def take_until(source: Observable, notifier: Observable) -> Observable:
    """
    Forward values until ``notifier`` emits, completes or fails.

    Any notifier signal completes the result. The notifier is subscribed
    first, so a notifier that fires synchronously wins over the source.
    """
    if not isinstance(notifier, Observable):
        raise InvalidArgumentError(
            f"take_until notifier must be an Observable, got {type(notifier).__name__}"
        )

    def producer(observer):
        group = CompositeDisposable()

        def on_notify(_signal=None):
            observer.on_completed()

        notifier_subscription = SingleAssignmentDisposable()
        group.add(notifier_subscription)
        notifier_subscription.disposable = notifier.subscribe(
            Observer(on_notify, on_notify, on_notify, parent=observer)
        )
        if observer.is_stopped:
            return group

        source_subscription = SingleAssignmentDisposable()
        group.add(source_subscription)
        source_subscription.disposable = source.subscribe(
            Observer(
                observer.on_next,
                observer.on_error,
                observer.on_completed,
                parent=observer,
            )
        )
        return group

    return create(producer)


def distinct_until_changed(
    source: Observable,
    key: Optional[Callable[[Any], Any]] = None,
    comparer: Optional[Callable[[Any, Any], bool]] = None,
) -> Observable:
    """
    Drop values equal to the previously forwarded one.

    ``key`` selects what is compared (default: the value itself) and
    ``comparer`` decides equality (default: ``==``). Pass
    ``comparer=operator.is_`` to compare by identity instead.
    """
    if key is not None:
        require_callable(key, "key")
    if comparer is not None:
        require_callable(comparer, "comparer")
    key_of = key if key is not None else (lambda value: value)
    same = comparer if comparer is not None else operator.eq

    def producer(observer):
        last_key = NOTHING

        def on_next(value):
            nonlocal last_key
            try:
                current = key_of(value)
                if last_key is not NOTHING and same(last_key, current):
                    return
            except Exception as error:
                observer.on_error(error)
                return
            last_key = current
            observer.on_next(value)

        return source.subscribe(
            Observer(on_next, observer.on_error, observer.on_completed, parent=observer)
        )

    return create(producer)
