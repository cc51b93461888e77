"""
rxlite - Lazy Push-Based Sequences
==================================

Five combinators (map, filter, merge_all, reduce, zip) that query lists and
asynchronous event streams the same way, plus the machinery streams need:
subscriptions, cancellation, error propagation, completion, and time.

    from rxlite import of

    of(1, 2, 3, 4).filter(lambda x: x % 2 == 0).map(lambda x: x * 10).subscribe(print)
"""

import logging

from . import arrays
from .config import (
    get_default_scheduler,
    get_unhandled_error_handler,
    set_default_scheduler,
    set_unhandled_error_handler,
)
from .disposable import (
    CompositeDisposable,
    Disposable,
    SerialDisposable,
    SingleAssignmentDisposable,
)
from .exceptions import DisposedError, InvalidArgumentError, RxError
from .observable import Observable, create
from .observer import AutoDetachObserver, Observer
from .operators import merge, zip
from .scheduler import AsyncIOScheduler, Scheduler, VirtualTimeScheduler
from .sources import (
    empty,
    from_callback,
    from_event,
    from_future,
    from_iterable,
    interval,
    never,
    of,
    throw,
    timer,
)
from .subject import Subject

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core types
    "Observable",
    "Observer",
    "AutoDetachObserver",
    "Subject",
    # Disposables
    "Disposable",
    "CompositeDisposable",
    "SingleAssignmentDisposable",
    "SerialDisposable",
    # Sources
    "create",
    "of",
    "from_iterable",
    "empty",
    "never",
    "throw",
    "from_event",
    "from_callback",
    "from_future",
    "timer",
    "interval",
    # Combining functions
    "merge",
    "zip",
    # Schedulers
    "Scheduler",
    "VirtualTimeScheduler",
    "AsyncIOScheduler",
    # Configuration
    "get_default_scheduler",
    "set_default_scheduler",
    "get_unhandled_error_handler",
    "set_unhandled_error_handler",
    # Exceptions
    "RxError",
    "InvalidArgumentError",
    "DisposedError",
    # Eager list combinators
    "arrays",
]
