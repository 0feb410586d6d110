"""
Closed integer intervals carrying a single value.

Classes:
    Interval: Immutable [min, max] range mapped to one value
    Cloneable: Interface for values that know how to deep-copy themselves

Functions:
    intervals_collide: Symmetric overlap test used by RangeCollection
    compare_intervals: Overlap-aware ordering relation between two intervals
"""

import numbers
from abc import ABC, abstractmethod
from typing import Any, Generic, Tuple, TypeVar

V = TypeVar("V")

# Bounds are signed 64-bit; the extremes double as empty-collection sentinels
INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


class InvalidIntervalError(ValueError):
    """Raised when an interval is constructed with min > max or bounds that are not int64 integers."""


class Cloneable(ABC):
    """
    Capability interface for values stored in an Interval.

    Values implementing this interface are deep-copied through clone()
    whenever the interval (or a RangeCollection holding it) is copied.
    Any other value is shared between the original and the copy.
    """

    @abstractmethod
    def clone(self) -> "Cloneable":
        ...


class Interval(Generic[V]):
    """
    An immutable closed range [min, max] mapped to a value.

    Example:
        >>> iv = Interval(0, 9, "a")
        >>> iv.contains(9)
        True
        >>> iv.contains(10)
        False
    """

    __slots__ = ("_min", "_max", "_value")

    def __init__(self, lo: int, hi: int, value: V = None):
        """
        Args:
            lo: Inclusive lower bound
            hi: Inclusive upper bound
            value: The value mapped by every point in [lo, hi]

        Raises:
            InvalidIntervalError: If a bound is not an integer, lo > hi, or a
                bound falls outside [INT64_MIN, INT64_MAX]
        """
        if (
            not isinstance(lo, numbers.Integral) or not isinstance(hi, numbers.Integral)
            or isinstance(lo, bool) or isinstance(hi, bool)
        ):
            raise InvalidIntervalError(f"Interval bounds must be integers, got ({lo!r}, {hi!r})")
        if hi < lo:
            raise InvalidIntervalError(f"Interval must satisfy min <= max, got [{lo}, {hi}]")
        if lo < INT64_MIN or hi > INT64_MAX:
            raise InvalidIntervalError(f"Interval bounds must fit in int64, got [{lo}, {hi}]")
        self._min = int(lo)
        self._max = int(hi)
        self._value = value

    @property
    def min(self) -> int:
        return self._min

    @property
    def max(self) -> int:
        return self._max

    @property
    def value(self) -> V:
        return self._value

    def contains(self, point: int) -> bool:
        """Return True if min <= point <= max."""
        return self._min <= point <= self._max

    def width(self) -> int:
        """Number of integer points covered by the interval."""
        return self._max - self._min + 1

    def as_tuple(self) -> Tuple[int, int, V]:
        return (self._min, self._max, self._value)

    def copy(self) -> "Interval[V]":
        """
        Return a new Interval with the same bounds.

        The value is deep-copied through clone() if it is Cloneable,
        otherwise the new interval shares the same value object.
        """
        value = self._value
        if isinstance(value, Cloneable):
            value = value.clone()
        return Interval(self._min, self._max, value)

    def __copy__(self) -> "Interval[V]":
        return self.copy()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Interval({self._min}, {self._max}, {self._value!r})"


def intervals_collide(a: Interval, b: Interval) -> bool:
    """Check if either interval's min or max falls inside the other."""
    return (
        a.contains(b.min) or a.contains(b.max)
        or b.contains(a.min) or b.contains(a.max)
    )


def compare_intervals(a: Interval, b: Interval) -> int:
    """
    Overlap-aware ordering of two intervals.

    Returns 0 when the intervals collide, -1 when a lies entirely before b
    and 1 when a lies entirely after b. This is not a total order once
    overlapping intervals are involved, so it is only meaningful between
    members of a collection that keeps its intervals disjoint.
    """
    if a.contains(b.min) or a.contains(b.max):
        return 0
    if a.max < b.min:
        return -1
    if a.min > b.max:
        return 1
    # b covers a without a covering either bound of b
    return 0
