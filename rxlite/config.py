"""
rxlite Configuration - Process-Wide Defaults
============================================

Two settings are shared by the whole process:

- the default Scheduler used by time-based operators and sources when no
  ``scheduler=`` argument is given
- the unhandled-error hook, called for errors that reach an observer with
  no ``on_error`` callback

Both are resolved lazily at subscribe time.
"""

import logging
import threading
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .scheduler import Scheduler

logger = logging.getLogger(__name__)

UnhandledErrorHandler = Callable[[Exception], None]


# ============================================================================
# UNHANDLED ERRORS
# ============================================================================


def _drop_unhandled_error(error: Exception) -> None:
    """Default policy: log at DEBUG and drop."""
    logger.debug(
        "Unhandled error dropped: %r",
        error,
        exc_info=(type(error), error, error.__traceback__),
    )


_unhandled_error_handler: UnhandledErrorHandler = _drop_unhandled_error


def get_unhandled_error_handler() -> UnhandledErrorHandler:
    return _unhandled_error_handler


def set_unhandled_error_handler(handler: Optional[UnhandledErrorHandler]) -> None:
    """Install ``handler``; None restores the default drop-and-log policy."""
    global _unhandled_error_handler
    _unhandled_error_handler = handler if handler is not None else _drop_unhandled_error


# ============================================================================
# DEFAULT SCHEDULER
# ============================================================================

_default_scheduler: Optional["Scheduler"] = None
_default_scheduler_lock = threading.Lock()


def get_default_scheduler() -> "Scheduler":
    """Get or create the process-wide scheduler (an AsyncIOScheduler)."""
    global _default_scheduler
    if _default_scheduler is None:
        with _default_scheduler_lock:
            if _default_scheduler is None:
                from .scheduler import AsyncIOScheduler

                _default_scheduler = AsyncIOScheduler()
    return _default_scheduler


def set_default_scheduler(scheduler: Optional["Scheduler"]) -> None:
    """Replace the default scheduler; None reverts to lazy creation."""
    global _default_scheduler
    with _default_scheduler_lock:
        _default_scheduler = scheduler


def _reset_config() -> None:
    """Restore every default (for testing)."""
    set_default_scheduler(None)
    set_unhandled_error_handler(None)
