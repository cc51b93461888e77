"""
rxlite Observers - Consumers of Push-Based Sequences
====================================================

An Observer is the three-callback consumer contract: ``on_next`` for each
value, then at most one of ``on_error`` / ``on_completed``.

Observer wraps plain callbacks. AutoDetachObserver is the guard placed
around every observer handed to a producer; it enforces the grammar
``on_next* (on_error | on_completed)?`` and tears the subscription down on
termination, so misbehaving producers cannot reach the consumer.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from .config import get_unhandled_error_handler
from .disposable import Disposable, SingleAssignmentDisposable
from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")

OnNext = Callable[[Any], None]
OnError = Callable[[Exception], None]
OnCompleted = Callable[[], None]


class Observer(Generic[T]):
    """
    Observer built from optional callbacks.

    Missing ``on_next`` / ``on_completed`` callbacks are no-ops. A missing
    ``on_error`` hands the error to the unhandled-error hook.

    ``parent`` links an operator's inner observer to the downstream observer
    it feeds: once the parent stops, so does this observer.
    """

    __slots__ = ("_on_next", "_on_error", "_on_completed", "_parent")

    def __init__(
        self,
        on_next: Optional[OnNext] = None,
        on_error: Optional[OnError] = None,
        on_completed: Optional[OnCompleted] = None,
        parent: Optional[Any] = None,
    ):
        self._on_next = on_next
        self._on_error = on_error
        self._on_completed = on_completed
        self._parent = parent

    @property
    def is_stopped(self) -> bool:
        return self._parent is not None and self._parent.is_stopped

    def on_next(self, value: T) -> None:
        if self._on_next is not None:
            self._on_next(value)

    def on_error(self, error: Exception) -> None:
        if self._on_error is not None:
            self._on_error(error)
        else:
            get_unhandled_error_handler()(error)

    def on_completed(self) -> None:
        if self._on_completed is not None:
            self._on_completed()


def to_observer(
    observer: Any = None,
    on_error: Optional[OnError] = None,
    on_completed: Optional[OnCompleted] = None,
) -> Observer:
    """
    Coerce ``subscribe`` arguments into an Observer.

    ``observer`` may be an Observer, any object with some of the three
    callback methods, a bare ``on_next`` callable, or None.
    """
    if isinstance(observer, Observer):
        return observer
    if _looks_like_observer(observer):
        return Observer(
            getattr(observer, "on_next", None),
            getattr(observer, "on_error", None),
            getattr(observer, "on_completed", None),
            parent=observer if hasattr(observer, "is_stopped") else None,
        )
    if observer is not None and not callable(observer):
        raise InvalidArgumentError(
            f"Expected an observer or an on_next callable, got {type(observer).__name__}"
        )
    return Observer(observer, on_error, on_completed)


def _looks_like_observer(candidate: Any) -> bool:
    return any(
        hasattr(candidate, name) for name in ("on_next", "on_error", "on_completed")
    )


class AutoDetachObserver(Generic[T]):
    """
    Safety wrapper around one subscription's observer.

    - Drops every notification after a terminal one or after disposal.
    - Turns an exception raised by the wrapped ``on_next`` into ``on_error``.
    - Disposes the subscription right after the terminal notification, even
      if the producer has not returned its teardown yet.
    - Never lets exceptions from terminal callbacks reach the producer.
    """

    __slots__ = ("_observer", "_subscription", "_is_stopped")

    def __init__(self, observer: Observer):
        self._observer = observer
        self._subscription = SingleAssignmentDisposable()
        self._is_stopped = False

    @property
    def is_stopped(self) -> bool:
        if self._is_stopped:
            return True
        return bool(getattr(self._observer, "is_stopped", False))

    def set_subscription(self, disposable: Disposable) -> None:
        self._subscription.disposable = disposable

    def on_next(self, value: T) -> None:
        if self._is_stopped:
            logger.debug("Dropped on_next(%r) after the subscription stopped", value)
            return
        try:
            self._observer.on_next(value)
        except Exception as error:
            self.on_error(error)

    def on_error(self, error: Exception) -> None:
        if self._is_stopped:
            logger.debug("Dropped on_error(%r) after the subscription stopped", error)
            return
        self._is_stopped = True
        try:
            self._observer.on_error(error)
        except Exception:
            logger.exception("Error in on_error callback")
        finally:
            self._subscription.dispose()

    def on_completed(self) -> None:
        if self._is_stopped:
            logger.debug("Dropped on_completed after the subscription stopped")
            return
        self._is_stopped = True
        try:
            self._observer.on_completed()
        except Exception:
            logger.exception("Error in on_completed callback")
        finally:
            self._subscription.dispose()

    def dispose(self) -> None:
        self._is_stopped = True
        self._subscription.dispose()
