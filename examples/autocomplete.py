"""
Autocomplete Example - Throttled Searches on an asyncio Event Loop

Keystrokes arrive faster than a search service should be called. The pipeline
waits until typing pauses, skips terms that did not change, and keeps only the
newest search in flight:

    keys.throttle(0.3).distinct_until_changed().switch_map(search)

To run this example:
    $ pip install rxlite && python examples/autocomplete.py
"""

import asyncio
import logging

from rxlite import Subject, from_future

# ==============================================================================================
# Logging Configuration
# ==============================================================================================

LOG_LEVEL = logging.INFO

logger = logging.getLogger(__name__)
logging.basicConfig(level=LOG_LEVEL, format="%(relativeCreated)6.0fms %(message)s")

# ==============================================================================================
# Fake Search Service
# ==============================================================================================

SEARCH_LATENCY_SECONDS = 0.5
CATALOG = ["rxjava", "rxjs", "rxlite", "rxpy", "reactor", "redux"]


def search(term: str):
    """Start a search and expose its result as an Observable."""
    loop = asyncio.get_running_loop()
    future = loop.create_future()
    logger.info("searching %r", term)

    def respond():
        if not future.done():
            future.set_result([name for name in CATALOG if name.startswith(term)])

    loop.call_later(SEARCH_LATENCY_SECONDS, respond)
    return from_future(future)


# ==============================================================================================
# Simulated Typing
# ==============================================================================================

KEYSTROKES = [
    (0.00, "r"),
    (0.10, "rx"),
    (0.60, "rxp"),
    (0.70, "rx"),  # backspace: same term as the last search, skipped
    (1.20, "rxl"),
    (1.60, "rxli"),  # arrives while "rxl" is in flight, which is dropped
]


async def main():
    keys = Subject()
    done = asyncio.Event()

    suggestions = keys.throttle(0.3).distinct_until_changed().switch_map(search)
    suggestions.subscribe(
        lambda names: logger.info("suggestions: %s", names),
        lambda error: logger.error("search failed: %s", error),
        done.set,
    )

    started = asyncio.get_running_loop().time()
    for at, term in KEYSTROKES:
        await asyncio.sleep(max(0.0, started + at - asyncio.get_running_loop().time()))
        logger.info("typed %r", term)
        keys.on_next(term)

    keys.on_completed()
    await done.wait()


if __name__ == "__main__":
    asyncio.run(main())
