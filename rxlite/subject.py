"""
rxlite Subject - Hot Multicast Event Source
===========================================

A Subject is both an Observer (producers push into it) and an Observable
(consumers subscribe to it). Values reach only the observers subscribed at
the time of the push; nothing is replayed except the terminal notification,
which late subscribers receive immediately.
"""

import threading
from typing import List, Optional, TypeVar

from .exceptions import DisposedError
from .observable import Observable

T = TypeVar("T")


class Subject(Observable[T]):
    """Multicast event source that can be fed directly."""

    __slots__ = ("_observers", "_lock", "_is_stopped", "_error", "_is_disposed")

    def __init__(self) -> None:
        super().__init__(self._subscribe_core)
        self._observers: List = []
        self._lock = threading.RLock()
        self._is_stopped = False
        self._error: Optional[Exception] = None
        self._is_disposed = False

    @property
    def is_stopped(self) -> bool:
        return self._is_stopped

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    @property
    def has_observers(self) -> bool:
        with self._lock:
            return bool(self._observers)

    def _check_disposed(self) -> None:
        if self._is_disposed:
            raise DisposedError("Subject has been disposed")

    # ========================================================================
    # OBSERVABLE SIDE
    # ========================================================================

    def _subscribe_core(self, observer):
        with self._lock:
            self._check_disposed()
            if not self._is_stopped:
                self._observers.append(observer)
                return lambda: self._remove(observer)
            error = self._error
        if error is not None:
            observer.on_error(error)
        else:
            observer.on_completed()
        return None

    def _remove(self, observer) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    # ========================================================================
    # OBSERVER SIDE
    # ========================================================================

    def on_next(self, value: T) -> None:
        with self._lock:
            self._check_disposed()
            if self._is_stopped:
                return
            current = list(self._observers)
        for observer in current:
            observer.on_next(value)

    def on_error(self, error: Exception) -> None:
        with self._lock:
            self._check_disposed()
            if self._is_stopped:
                return
            self._is_stopped = True
            self._error = error
            current, self._observers = self._observers, []
        for observer in current:
            observer.on_error(error)

    def on_completed(self) -> None:
        with self._lock:
            self._check_disposed()
            if self._is_stopped:
                return
            self._is_stopped = True
            current, self._observers = self._observers, []
        for observer in current:
            observer.on_completed()

    def dispose(self) -> None:
        """Release every observer; further use raises DisposedError."""
        with self._lock:
            self._is_disposed = True
            self._observers = []

    def __repr__(self) -> str:
        return f"Subject(observers={len(self._observers)}, stopped={self._is_stopped})"
