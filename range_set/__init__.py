"""
range-set: ordered mappings from disjoint integer intervals to values,
and random sampling over them.
"""

from .interval import (
    INT64_MAX,
    INT64_MIN,
    Cloneable,
    Interval,
    InvalidIntervalError,
    compare_intervals,
    intervals_collide,
)
from .range_collection import (
    PREPEND_LEGACY,
    PREPEND_MODES,
    PREPEND_SYMMETRIC,
    RangeCollection,
)
from .sampler import BoundedRandom, EmptyRangeError, RangeSampler

__all__ = [
    "BoundedRandom",
    "Cloneable",
    "EmptyRangeError",
    "INT64_MAX",
    "INT64_MIN",
    "Interval",
    "InvalidIntervalError",
    "PREPEND_LEGACY",
    "PREPEND_MODES",
    "PREPEND_SYMMETRIC",
    "RangeCollection",
    "RangeSampler",
    "compare_intervals",
    "intervals_collide",
]
