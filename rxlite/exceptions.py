"""
rxlite Exceptions
=================

Errors raised synchronously by rxlite. Runtime failures inside a subscription
are never raised to the caller of ``subscribe``; they travel downstream as
``on_error`` notifications instead.
"""


class RxError(Exception):
    """Base class for all rxlite errors."""

    pass


class InvalidArgumentError(RxError, ValueError):
    """An operator or source was built with an unusable argument."""

    pass


class DisposedError(RxError):
    """A disposed object was used."""

    pass


def require_callable(func, name: str) -> None:
    """Raise InvalidArgumentError unless ``func`` is callable."""
    if func is None or not callable(func):
        raise InvalidArgumentError(
            f"{name} must be callable, got {type(func).__name__}"
        )
