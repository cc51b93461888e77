"""
rxlite Operators
================

Operators as free functions taking the source first. The Observable
methods of the same names delegate here.

- transform: map, filter, scan
- aggregate: reduce
- combine: merge_all, flat_map, merge, concat_all, concat_map,
  switch_latest, switch_map, zip
- filtering: take, take_until, distinct_until_changed
- time: throttle
"""

from .aggregate import reduce
from .combine import (
    concat_all,
    concat_map,
    flat_map,
    merge,
    merge_all,
    switch_latest,
    switch_map,
    zip,
)
from .filtering import distinct_until_changed, take, take_until
from .time import throttle
from .transform import filter, map, scan

__all__ = [
    "map",
    "filter",
    "scan",
    "reduce",
    "merge_all",
    "flat_map",
    "merge",
    "concat_all",
    "concat_map",
    "switch_latest",
    "switch_map",
    "zip",
    "take",
    "take_until",
    "distinct_until_changed",
    "throttle",
]
