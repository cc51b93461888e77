"""
rxlite Disposables - Cancellation Handles
=========================================

A Disposable is the capability returned by ``subscribe``: calling
``dispose()`` stops further notifications and releases whatever the
subscription holds. Every disposable in this module is idempotent.

Classes:
- Disposable: runs an optional teardown action exactly once
- CompositeDisposable: disposes a group of disposables together
- SingleAssignmentDisposable: holds one disposable that may arrive late
- SerialDisposable: holds one replaceable disposable
"""

from typing import Any, Callable, List, Optional


class Disposable:
    """
    Idempotent teardown handle.

    The action runs on the first ``dispose()`` call and never again.
    """

    __slots__ = ("_action", "_is_disposed")

    def __init__(self, action: Optional[Callable[[], Any]] = None):
        self._action = action
        self._is_disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._is_disposed

    def dispose(self) -> None:
        if self._is_disposed:
            return
        self._is_disposed = True
        action, self._action = self._action, None
        if action is not None:
            action()

    def __enter__(self) -> "Disposable":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._is_disposed else "active"
        return f"{type(self).__name__}({state})"


def to_disposable(teardown: Any) -> Disposable:
    """
    Normalize a producer's return value into a Disposable.

    Accepts None (nothing to release), anything with a ``dispose`` method,
    or a zero-argument callable.
    """
    if teardown is None:
        return Disposable()
    if isinstance(teardown, Disposable):
        return teardown
    if hasattr(teardown, "dispose"):
        return Disposable(teardown.dispose)
    if callable(teardown):
        return Disposable(teardown)
    raise TypeError(
        f"Producer must return a Disposable, a callable or None, got {type(teardown).__name__}"
    )


class CompositeDisposable(Disposable):
    """
    Group of disposables released together.

    Items added after disposal are disposed immediately.
    """

    __slots__ = ("_disposables",)

    def __init__(self, *disposables: Disposable):
        super().__init__()
        self._disposables: List[Disposable] = list(disposables)

    def add(self, disposable: Disposable) -> None:
        if self._is_disposed:
            disposable.dispose()
            return
        self._disposables.append(disposable)

    def remove(self, disposable: Disposable) -> bool:
        """Remove and dispose ``disposable``. Returns False if it was not held."""
        if self._is_disposed:
            return False
        try:
            self._disposables.remove(disposable)
        except ValueError:
            return False
        disposable.dispose()
        return True

    def __len__(self) -> int:
        return len(self._disposables)

    def dispose(self) -> None:
        if self._is_disposed:
            return
        self._is_disposed = True
        current, self._disposables = self._disposables, []
        for disposable in current:
            disposable.dispose()


class SingleAssignmentDisposable(Disposable):
    """
    Placeholder for a disposable that is only known later.

    Synchronous producers can finish (and request disposal) before the
    subscription they produce has been handed back. Disposal requested
    before assignment is applied as soon as the disposable arrives.
    """

    __slots__ = ("_current",)

    def __init__(self):
        super().__init__()
        self._current: Optional[Disposable] = None

    @property
    def disposable(self) -> Optional[Disposable]:
        return self._current

    @disposable.setter
    def disposable(self, value: Disposable) -> None:
        if self._current is not None:
            raise ValueError("Disposable has already been assigned")
        self._current = value
        if self._is_disposed:
            value.dispose()

    def dispose(self) -> None:
        if self._is_disposed:
            return
        self._is_disposed = True
        if self._current is not None:
            self._current.dispose()


class SerialDisposable(Disposable):
    """Holds one disposable at a time; assigning a new one disposes the old."""

    __slots__ = ("_current",)

    def __init__(self):
        super().__init__()
        self._current: Optional[Disposable] = None

    @property
    def disposable(self) -> Optional[Disposable]:
        return self._current

    @disposable.setter
    def disposable(self, value: Optional[Disposable]) -> None:
        if self._is_disposed:
            if value is not None:
                value.dispose()
            return
        previous, self._current = self._current, value
        if previous is not None:
            previous.dispose()

    def dispose(self) -> None:
        if self._is_disposed:
            return
        self._is_disposed = True
        current, self._current = self._current, None
        if current is not None:
            current.dispose()
