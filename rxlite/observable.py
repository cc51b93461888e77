"""
rxlite Observable - Lazy Push-Based Sequences
=============================================

An Observable describes how to produce a sequence; nothing happens until
``subscribe``. Each subscription runs the producer afresh with its own
closure state, so one Observable can be subscribed any number of times.

Core operations:
- create(producer): wrap any push source
- subscribe(observer) -> Disposable: the only way to consume
- operator methods: map, filter, scan, reduce, merge_all, flat_map, zip_with,
  take, take_until, distinct_until_changed, throttle, ...

Operator syntax (the method forms are equivalent):
- ``source >> f`` is ``source.map(f)``
- ``source & predicate`` is ``source.filter(predicate)``
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from .disposable import Disposable, to_disposable
from .exceptions import require_callable
from .observer import AutoDetachObserver, OnCompleted, OnError, to_observer

T = TypeVar("T")
U = TypeVar("U")

Producer = Callable[[Any], Any]


# ============================================================================
# SENTINEL VALUES
# ============================================================================


class _Nothing:
    """Sentinel for "no value yet" in operator state."""

    def __repr__(self):
        return "NOTHING"


NOTHING = _Nothing()


class Observable(Generic[T]):
    """
    Re-subscribable description of a push-based sequence.

    The producer receives a guarded observer and returns its teardown: a
    Disposable, a zero-argument callable, or None.
    """

    __slots__ = ("_producer",)

    def __init__(self, producer: Producer):
        require_callable(producer, "producer")
        self._producer = producer

    # ========================================================================
    # SUBSCRIPTION
    # ========================================================================

    def subscribe(
        self,
        observer: Any = None,
        on_error: Optional[OnError] = None,
        on_completed: Optional[OnCompleted] = None,
        *,
        on_next: Optional[Callable[[T], None]] = None,
    ) -> Disposable:
        """
        Start the sequence and return its cancellation handle.

        Accepts an observer object or the three callbacks. Never raises on
        account of the producer or the observer: failures arrive through
        ``on_error``.
        """
        if on_next is not None:
            observer = on_next
        safe = AutoDetachObserver(to_observer(observer, on_error, on_completed))
        try:
            safe.set_subscription(to_disposable(self._producer(safe)))
        except Exception as error:
            safe.on_error(error)
            safe.set_subscription(Disposable())
        return Disposable(safe.dispose)

    for_each = subscribe

    # ========================================================================
    # OPERATORS
    # ========================================================================

    def map(self, mapper: Callable[[T], U]) -> "Observable[U]":
        from .operators.transform import map

        return map(self, mapper)

    def filter(self, predicate: Callable[[T], bool]) -> "Observable[T]":
        from .operators.transform import filter

        return filter(self, predicate)

    def scan(self, accumulator: Callable[[Any, T], Any], seed: Any) -> "Observable":
        from .operators.transform import scan

        return scan(self, accumulator, seed)

    def reduce(self, combiner: Callable[[Any, T], Any], *seed: Any) -> "Observable":
        """Emit the single accumulated value once upstream completes."""
        from .operators.aggregate import reduce

        return reduce(self, combiner, *seed)

    def merge_all(self) -> "Observable":
        from .operators.combine import merge_all

        return merge_all(self)

    def flat_map(self, mapper: Callable[[T], "Observable[U]"]) -> "Observable[U]":
        from .operators.combine import flat_map

        return flat_map(self, mapper)

    def concat_all(self) -> "Observable":
        from .operators.combine import concat_all

        return concat_all(self)

    def concat_map(self, mapper: Callable[[T], "Observable[U]"]) -> "Observable[U]":
        from .operators.combine import concat_map

        return concat_map(self, mapper)

    def switch_latest(self) -> "Observable":
        from .operators.combine import switch_latest

        return switch_latest(self)

    def switch_map(self, mapper: Callable[[T], "Observable[U]"]) -> "Observable[U]":
        from .operators.combine import switch_map

        return switch_map(self, mapper)

    def zip_with(
        self, *others: "Observable", combiner: Optional[Callable[..., Any]] = None
    ) -> "Observable":
        """Zip with ``others``; without a combiner, emits tuples."""
        from .operators.combine import zip

        if combiner is None:
            combiner = lambda *values: values
        return zip(combiner, self, *others)

    def take(self, count: int) -> "Observable[T]":
        from .operators.filtering import take

        return take(self, count)

    def take_until(self, notifier: "Observable") -> "Observable[T]":
        from .operators.filtering import take_until

        return take_until(self, notifier)

    def distinct_until_changed(
        self,
        key: Optional[Callable[[T], Any]] = None,
        comparer: Optional[Callable[[Any, Any], bool]] = None,
    ) -> "Observable[T]":
        from .operators.filtering import distinct_until_changed

        return distinct_until_changed(self, key, comparer)

    def throttle(self, duration, scheduler=None) -> "Observable[T]":
        from .operators.time import throttle

        return throttle(self, duration, scheduler)

    def pipe(self, *operators: Callable[["Observable"], "Observable"]) -> "Observable":
        """Apply single-argument operator functions left to right."""
        result = self
        for operator in operators:
            result = operator(result)
        return result

    def __rshift__(self, mapper: Callable[[T], U]) -> "Observable[U]":
        return self.map(mapper)

    def __and__(self, predicate: Callable[[T], bool]) -> "Observable[T]":
        return self.filter(predicate)

    def __repr__(self) -> str:
        name = getattr(self._producer, "__qualname__", type(self._producer).__name__)
        return f"Observable({name})"


def create(producer: Producer) -> Observable:
    """
    Build an Observable from a producer function.

    The producer is called once per subscription with an observer and pushes
    notifications to it. Its return value releases the underlying resource:

        def producer(observer):
            handle = source.add_listener(observer.on_next)
            return lambda: source.remove_listener(handle)

        events = create(producer)
    """
    return Observable(producer)
