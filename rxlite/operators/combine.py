"""
rxlite Fan-In Operators
=======================

Operators that combine several live subscriptions into one downstream
sequence:

- merge_all / flat_map: interleave every inner sequence by arrival time
- concat_all / concat_map: run inner sequences one after another
- switch_latest / switch_map: follow only the most recent inner sequence
- zip: pair values across sources, one from each

All of them share the same failure rule: the first error from any branch
goes downstream and every other branch is disposed.
"""

from collections import deque
from typing import Any, Callable, Deque, List

from ..disposable import CompositeDisposable, SerialDisposable, SingleAssignmentDisposable
from ..exceptions import InvalidArgumentError, require_callable
from ..observable import Observable, create
from ..observer import Observer
from .transform import map


def _require_observable(candidate: Any, observer) -> bool:
    if isinstance(candidate, Observable):
        return True
    observer.on_error(
        InvalidArgumentError(f"Expected an Observable, got {type(candidate).__name__}")
    )
    return False


# ============================================================================
# MERGE
# ============================================================================


def merge_all(source: Observable) -> Observable:
    """
    Flatten an Observable of Observables by subscribing to every inner
    sequence as soon as it arrives.

    Completes once the outer sequence and every inner sequence received so
    far have completed.
    """

    def producer(observer):
        group = CompositeDisposable()
        open_sources = 1

        def on_next(inner):
            nonlocal open_sources
            if not _require_observable(inner, observer):
                return
            open_sources += 1
            handle = SingleAssignmentDisposable()
            group.add(handle)

            def on_inner_completed():
                nonlocal open_sources
                group.remove(handle)
                open_sources -= 1
                if open_sources == 0:
                    observer.on_completed()

            handle.disposable = inner.subscribe(
                Observer(
                    observer.on_next,
                    observer.on_error,
                    on_inner_completed,
                    parent=observer,
                )
            )

        def on_completed():
            nonlocal open_sources
            open_sources -= 1
            if open_sources == 0:
                observer.on_completed()

        outer = SingleAssignmentDisposable()
        group.add(outer)
        outer.disposable = source.subscribe(
            Observer(on_next, observer.on_error, on_completed, parent=observer)
        )
        return group

    return create(producer)


def flat_map(source: Observable, mapper: Callable[[Any], Observable]) -> Observable:
    """``map(mapper)`` followed by ``merge_all()``."""
    return merge_all(map(source, mapper))


def merge(*sources: Observable) -> Observable:
    """Interleave ``sources`` into one sequence."""
    from ..sources import from_iterable

    return merge_all(from_iterable(sources))


# ============================================================================
# CONCAT
# ============================================================================


def concat_all(source: Observable) -> Observable:
    """
    Flatten an Observable of Observables one inner sequence at a time.

    Inner sequences that arrive while another is running wait in order.
    """

    def producer(observer):
        group = CompositeDisposable()
        current = SerialDisposable()
        group.add(current)
        waiting: Deque[Observable] = deque()
        is_active = False
        is_draining = False
        outer_done = False

        def on_inner_completed():
            nonlocal is_active
            is_active = False
            drain()

        def drain():
            nonlocal is_active, is_draining
            if is_draining:
                return
            is_draining = True
            try:
                while waiting and not is_active and not observer.is_stopped:
                    is_active = True
                    inner = waiting.popleft()
                    handle = SingleAssignmentDisposable()
                    current.disposable = handle
                    handle.disposable = inner.subscribe(
                        Observer(
                            observer.on_next,
                            observer.on_error,
                            on_inner_completed,
                            parent=observer,
                        )
                    )
            finally:
                is_draining = False
            if outer_done and not is_active and not waiting:
                observer.on_completed()

        def on_next(inner):
            if not _require_observable(inner, observer):
                return
            waiting.append(inner)
            drain()

        def on_completed():
            nonlocal outer_done
            outer_done = True
            drain()

        outer = SingleAssignmentDisposable()
        group.add(outer)
        outer.disposable = source.subscribe(
            Observer(on_next, observer.on_error, on_completed, parent=observer)
        )
        return group

    return create(producer)


def concat_map(source: Observable, mapper: Callable[[Any], Observable]) -> Observable:
    """``map(mapper)`` followed by ``concat_all()``."""
    return concat_all(map(source, mapper))


# ============================================================================
# SWITCH
# ============================================================================


def switch_latest(source: Observable) -> Observable:
    """
    Follow only the most recent inner Observable.

    A new inner sequence disposes the previous one. Completes once the
    outer sequence and the current inner sequence have completed.
    """

    def producer(observer):
        group = CompositeDisposable()
        current = SerialDisposable()
        group.add(current)
        latest = 0
        has_inner = False
        outer_done = False

        def on_next(inner):
            nonlocal latest, has_inner
            if not _require_observable(inner, observer):
                return
            latest += 1
            generation = latest
            has_inner = True
            handle = SingleAssignmentDisposable()
            current.disposable = handle

            def on_inner_next(value):
                if generation == latest:
                    observer.on_next(value)

            def on_inner_error(error):
                if generation == latest:
                    observer.on_error(error)

            def on_inner_completed():
                nonlocal has_inner
                if generation == latest:
                    has_inner = False
                    if outer_done:
                        observer.on_completed()

            handle.disposable = inner.subscribe(
                Observer(on_inner_next, on_inner_error, on_inner_completed, parent=observer)
            )

        def on_completed():
            nonlocal outer_done
            outer_done = True
            if not has_inner:
                observer.on_completed()

        outer = SingleAssignmentDisposable()
        group.add(outer)
        outer.disposable = source.subscribe(
            Observer(on_next, observer.on_error, on_completed, parent=observer)
        )
        return group

    return create(producer)


def switch_map(source: Observable, mapper: Callable[[Any], Observable]) -> Observable:
    """``map(mapper)`` followed by ``switch_latest()``."""
    return switch_latest(map(source, mapper))


# ============================================================================
# ZIP
# ============================================================================


def zip(combiner: Callable[..., Any], *sources: Observable) -> Observable:
    """
    Combine the n-th value of every source with ``combiner``.

    Values from faster sources wait in a per-source FIFO queue. The result
    completes as soon as a completed source has no buffered values left,
    so its length is that of the shortest source.
    """
    require_callable(combiner, "combiner")
    if not sources:
        raise InvalidArgumentError("zip needs at least one source")
    for candidate in sources:
        if not isinstance(candidate, Observable):
            raise InvalidArgumentError(
                f"zip sources must be Observables, got {type(candidate).__name__}"
            )

    def producer(observer):
        queues: List[Deque[Any]] = [deque() for _ in sources]
        done = [False] * len(sources)
        group = CompositeDisposable()

        def exhausted() -> bool:
            return any(done[i] and not queues[i] for i in range(len(queues)))

        def make_on_next(index):
            def on_next(value):
                queues[index].append(value)
                if not all(queues):
                    return
                values = [queue.popleft() for queue in queues]
                try:
                    result = combiner(*values)
                except Exception as error:
                    observer.on_error(error)
                    return
                observer.on_next(result)
                if exhausted():
                    observer.on_completed()

            return on_next

        def make_on_completed(index):
            def on_completed():
                done[index] = True
                if not queues[index]:
                    observer.on_completed()

            return on_completed

        for index, zipped in enumerate(sources):
            if observer.is_stopped:
                break
            handle = SingleAssignmentDisposable()
            group.add(handle)
            handle.disposable = zipped.subscribe(
                Observer(
                    make_on_next(index),
                    observer.on_error,
                    make_on_completed(index),
                    parent=observer,
                )
            )
        return group

    return create(producer)
