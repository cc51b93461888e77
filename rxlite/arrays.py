"""
rxlite Arrays - The Five Combinators Over Lists
===============================================

Eager counterparts of the Observable operators, as free functions that
return new lists. A finite synchronous sequence gives the same values
whether it is queried here or through an Observable:

    arrays.filter(arrays.map(items, f), p)
    == values pushed by of(*items).map(f).filter(p)

``reduce`` returns a one-element list (or an empty list) so that its result
keeps the shape of the other combinators, just as Observable.reduce emits
at most one value.
"""

import builtins
from typing import Any, Callable, Iterable, List, TypeVar

from .exceptions import InvalidArgumentError, require_callable

T = TypeVar("T")
U = TypeVar("U")


def for_each(items: Iterable[T], action: Callable[[T], Any]) -> None:
    for item in items:
        action(item)


def map(items: Iterable[T], mapper: Callable[[T], U]) -> List[U]:
    results = []
    for item in items:
        results.append(mapper(item))
    return results


def filter(items: Iterable[T], predicate: Callable[[T], bool]) -> List[T]:
    results = []
    for item in items:
        if predicate(item):
            results.append(item)
    return results


def concat_all(nested: Iterable[Iterable[T]]) -> List[T]:
    """Flatten one level of nesting."""
    results = []
    for sub_items in nested:
        results.extend(sub_items)
    return results


def concat_map(items: Iterable[T], mapper: Callable[[T], Iterable[U]]) -> List[U]:
    return concat_all(map(items, mapper))


def reduce(items: Iterable[T], combiner: Callable[[Any, T], Any], *seed: Any) -> List[Any]:
    """
    Fold ``items`` into ``[result]``.

    Without a seed the first item starts the accumulation; an empty input
    without a seed gives ``[]``.
    """
    require_callable(combiner, "combiner")
    if len(seed) > 1:
        raise InvalidArgumentError(f"reduce takes at most one seed, got {len(seed)}")
    remaining = iter(items)
    if seed:
        acc = seed[0]
    else:
        try:
            acc = next(remaining)
        except StopIteration:
            return []
    for item in remaining:
        acc = combiner(acc, item)
    return [acc]


def zip(left: Iterable[T], right: Iterable[U], combiner: Callable[[T, U], Any]) -> List[Any]:
    """Combine items pairwise; the result is as long as the shorter input."""
    return [combiner(a, b) for a, b in builtins.zip(left, right)]
