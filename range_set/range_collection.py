"""
RangeCollection: an ordered mapping from disjoint closed intervals to values.

Intervals are kept in a treap (tree + heap) keyed on each interval's min and
augmented with the largest max of every subtree, so collision queries,
point lookups and removals by point run in O(log n) expected time.

Example:
    >>> ranges = RangeCollection()
    >>> ranges.insert_range(0, 9, "a")
    True
    >>> ranges.insert_range(10, 19, "b")
    True
    >>> ranges.insert_range(5, 14, "c")  # collides with both, rejected
    False
    >>> ranges.get(15)
    'b'
"""

import hashlib
import random
from typing import Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .interval import INT64_MAX, INT64_MIN, Interval, intervals_collide
from .logging_config import get_logger

logger = get_logger(__name__)

V = TypeVar("V")

PREPEND_LEGACY = "legacy"
PREPEND_SYMMETRIC = "symmetric"
PREPEND_MODES = (PREPEND_LEGACY, PREPEND_SYMMETRIC)

# Heap priorities only shape the tree, they never affect observable order
_priorities = random.Random()


class _Node:
    """Internal treap node for RangeCollection."""
    __slots__ = ("interval", "lo", "hi", "prio", "left", "right", "max_end")

    def __init__(self, interval: Interval):
        self.interval = interval
        self.lo = interval.min
        self.hi = interval.max
        self.prio = _priorities.random()
        self.left: Optional["_Node"] = None
        self.right: Optional["_Node"] = None
        self.max_end = interval.max

    def recalc(self):
        me = self.hi
        if self.left and self.left.max_end > me:
            me = self.left.max_end
        if self.right and self.right.max_end > me:
            me = self.right.max_end
        self.max_end = me


class RangeCollection(Generic[V]):
    """
    An ordered set of mutually non-overlapping intervals, each mapped to a value.

    Insertion is first-writer-wins: a candidate colliding with any stored
    interval is rejected and reported through the return value. Colliding
    intervals are never merged, trimmed or split.

    Methods:
        insert(interval) / insert_range(min, max, value): Add unless it collides
        replace(interval): Swap out the first colliding interval for the candidate
        append_after_max(width, value): Add a new interval right after the last one
        prepend_before_min(width, value): Add a new interval right before a reference one
        remove_at(point) / remove_value(value): Remove and return one interval
        get(point): Look up the value covering a point
        snapshot(): Independent ascending list of the stored intervals
        min_bound() / max_bound(): Smallest min and largest max
        copy(): Independent copy, values cloned where they are Cloneable
    """

    def __init__(
        self,
        intervals: Optional[Iterable[Interval[V]]] = None,
        prepend_mode: str = PREPEND_LEGACY,
    ):
        """
        Initialize a RangeCollection, optionally from an iterable of intervals.

        Args:
            intervals: Optional initial intervals, in any order. An interval
                colliding with one placed before it is dropped.
            prepend_mode: Which stored interval prepend_before_min measures from.
                "legacy" uses the last interval, "symmetric" uses the first.

        Raises:
            ValueError: If prepend_mode is not one of PREPEND_MODES
        """
        if prepend_mode not in PREPEND_MODES:
            raise ValueError(
                f"prepend_mode must be one of {PREPEND_MODES}, got {prepend_mode!r}"
            )
        self.prepend_mode = prepend_mode
        self._root: Optional[_Node] = None
        self._size = 0
        if intervals:
            num_dropped = 0
            for interval in intervals:
                if self._find(interval.min, interval.max) is not None:
                    num_dropped += 1
                    continue
                self._add(interval)
            if num_dropped > 0:
                logger.debug(f"Dropped {num_dropped} colliding intervals from initial batch.")

    @classmethod
    def from_tuples(
        cls,
        rows: Iterable[Tuple[int, int, V]],
        prepend_mode: str = PREPEND_LEGACY,
    ) -> "RangeCollection[V]":
        """
        Build a collection from (min, max, value) rows through insert().

        Rows that collide with an earlier row are skipped with a warning.
        """
        collection = cls(prepend_mode=prepend_mode)
        for lo, hi, value in rows:
            if not collection.insert_range(lo, hi, value):
                logger.warning(f"Skipping interval [{lo}, {hi}] -> {value!r}: overlaps an existing interval.")
        return collection

    # ----- treap internals -----

    def _rot_r(self, y: _Node) -> _Node:
        x = y.left
        y.left = x.right
        x.right = y
        y.recalc()
        x.recalc()
        return x

    def _rot_l(self, x: _Node) -> _Node:
        y = x.right
        x.right = y.left
        y.left = x
        x.recalc()
        y.recalc()
        return y

    def _insert(self, t: Optional[_Node], node: _Node) -> _Node:
        if not t:
            return node
        if node.lo < t.lo:
            t.left = self._insert(t.left, node)
            if t.left.prio < t.prio:
                t = self._rot_r(t)
        else:
            t.right = self._insert(t.right, node)
            if t.right.prio < t.prio:
                t = self._rot_l(t)
        t.recalc()
        return t

    def _merge(self, a: Optional[_Node], b: Optional[_Node]) -> Optional[_Node]:
        # every key in a is smaller than every key in b
        if not a:
            return b
        if not b:
            return a
        if a.prio < b.prio:
            a.right = self._merge(a.right, b)
            a.recalc()
            return a
        b.left = self._merge(a, b.left)
        b.recalc()
        return b

    def _delete(self, t: Optional[_Node], lo: int) -> Optional[_Node]:
        if not t:
            return None
        if lo < t.lo:
            t.left = self._delete(t.left, lo)
        elif lo > t.lo:
            t.right = self._delete(t.right, lo)
        else:
            return self._merge(t.left, t.right)
        t.recalc()
        return t

    def _find(self, lo: int, hi: int) -> Optional[_Node]:
        """Return the leftmost node whose interval overlaps [lo, hi], or None."""
        t = self._root
        while t:
            # Stored intervals are disjoint, so if anything overlaps it is on the left
            if t.left and t.left.max_end >= lo:
                t = t.left
                continue
            if not (t.hi < lo or hi < t.lo):
                return t
            t = t.right
        return None

    def _add(self, interval: Interval[V]) -> None:
        self._root = self._insert(self._root, _Node(interval))
        self._size += 1

    def _remove(self, interval: Interval[V]) -> None:
        self._root = self._delete(self._root, interval.min)
        self._size -= 1

    def _first(self) -> Optional[Interval[V]]:
        t = self._root
        if not t:
            return None
        while t.left:
            t = t.left
        return t.interval

    def _last(self) -> Optional[Interval[V]]:
        t = self._root
        if not t:
            return None
        while t.right:
            t = t.right
        return t.interval

    # ----- insertion -----

    def find_collision(self, interval: Interval) -> Optional[Interval[V]]:
        """
        Find the first stored interval that collides with the given one.

        Args:
            interval: The candidate interval

        Returns:
            The colliding stored interval, or None if there is no collision
        """
        for existing in self:
            if intervals_collide(existing, interval):
                return existing
            if existing.min > interval.max:
                break
        return None

    def insert(self, interval: Interval[V]) -> bool:
        """
        Add an interval unless it collides with a stored one.

        Args:
            interval: The interval to add

        Returns:
            True if the interval was stored, False if it was rejected
        """
        if self._size == 0:
            self._add(interval)
            return True

        existing = self.find_collision(interval)
        if existing is not None:
            logger.debug(f"Rejected {interval!r}: overlaps {existing!r}")
            return False

        self._add(interval)
        return True

    def insert_range(self, lo: int, hi: int, value: V) -> bool:
        """Convenience for insert(Interval(lo, hi, value))."""
        return self.insert(Interval(lo, hi, value))

    def replace(self, interval: Interval[V]) -> bool:
        """
        Replace the first stored interval colliding with the candidate.

        At most one stored interval is replaced. If the candidate collides
        with further intervals after the first one is removed, the removed
        interval is put back, nothing changes and False is returned. Storing
        the candidate there would leave two overlapping intervals, so this
        case deliberately does not report success. Without any collision
        this is a plain insert().

        Args:
            interval: The candidate interval

        Returns:
            True if the candidate was stored, False otherwise
        """
        if self._size == 0:
            self._add(interval)
            return True

        for existing in self.snapshot():
            if intervals_collide(existing, interval):
                self._remove(existing)
                if self._find(interval.min, interval.max) is not None:
                    self._add(existing)
                    logger.debug(
                        f"Cannot replace {existing!r} with {interval!r}: "
                        "candidate overlaps more than one interval"
                    )
                    return False
                self._add(interval)
                logger.debug(f"Replaced {existing!r} with {interval!r}")
                return True

        return self.insert(interval)

    def append_after_max(self, width: int, value: V) -> bool:
        """
        Add an interval directly after the last stored interval.

        The new interval is [last_max + 1, last_max + 1 + width], where
        last_max is the max of the last interval (0 for an empty collection).

        Returns:
            The result of insert() for the new interval

        Raises:
            InvalidIntervalError: If the new interval would end above INT64_MAX
        """
        last = self._last()
        last_max = 0 if last is None else last.max
        lo = last_max + 1
        return self.insert(Interval(lo, lo + width, value))

    def prepend_before_min(self, width: int, value: V) -> bool:
        """
        Add an interval ending directly before a reference interval.

        The new interval is [reference_max - width, reference_max] with
        reference_max = ref.min - 1 (0 for an empty collection). In "legacy"
        mode ref is the last stored interval, so on a collection with more
        than one interval the new interval usually collides and is rejected.
        In "symmetric" mode ref is the first stored interval.

        Returns:
            The result of insert() for the new interval

        Raises:
            InvalidIntervalError: If the new interval would start below INT64_MIN
        """
        if self.prepend_mode == PREPEND_SYMMETRIC:
            ref = self._first()
        else:
            ref = self._last()
        reference_max = 0 if ref is None else ref.min - 1
        return self.insert(Interval(reference_max - width, reference_max, value))

    # ----- removal and lookup -----

    def remove_at(self, point: int) -> Optional[Interval[V]]:
        """
        Remove the interval containing a point.

        Returns:
            The removed interval, or None if no interval contains the point
        """
        node = self._find(point, point)
        if node is None:
            return None
        self._remove(node.interval)
        return node.interval

    def remove_value(self, value: V) -> Optional[Interval[V]]:
        """
        Remove the first interval (in ascending order) whose value equals the given one.

        Returns:
            The removed interval, or None if no interval holds the value
        """
        for interval in self:
            if interval.value == value:
                self._remove(interval)
                return interval
        return None

    def get(self, point: int, default: Optional[V] = None) -> Optional[V]:
        """
        Look up the value of the interval containing a point.

        Args:
            point: The point to look up
            default: Returned when no interval contains the point

        Returns:
            The mapped value, or default
        """
        node = self._find(point, point)
        if node is None:
            return default
        return node.interval.value

    def snapshot(self) -> List[Interval[V]]:
        """Return all intervals as a new ascending list."""
        return list(self)

    def min_bound(self) -> int:
        """Smallest min of all intervals, or INT64_MAX if the collection is empty."""
        first = self._first()
        return INT64_MAX if first is None else first.min

    def max_bound(self) -> int:
        """Largest max of all intervals, or INT64_MIN if the collection is empty."""
        return INT64_MIN if self._root is None else self._root.max_end

    # ----- copying and comparison -----

    def copy(self) -> "RangeCollection[V]":
        """
        Return an independent collection holding copies of all intervals.

        Values implementing Cloneable are cloned, other values are shared.
        """
        clone = RangeCollection(prepend_mode=self.prepend_mode)
        for interval in self:
            clone.insert(interval.copy())
        return clone

    clone = copy

    def __copy__(self) -> "RangeCollection[V]":
        return self.copy()

    def __deepcopy__(self, memo) -> "RangeCollection[V]":
        return self.copy()

    def __len__(self) -> int:
        """Return the number of intervals in the collection."""
        return self._size

    def __iter__(self) -> Iterator[Interval[V]]:
        """Iterate over the intervals in ascending order."""
        stack: List[_Node] = []
        t = self._root
        while stack or t:
            while t:
                stack.append(t)
                t = t.left
            t = stack.pop()
            yield t.interval
            t = t.right

    def __contains__(self, point: Any) -> bool:
        """Support 'in' for checking whether a point is covered."""
        return self._find(point, point) is not None

    def __eq__(self, other: Any) -> bool:
        """Check if two collections hold equal intervals."""
        if not isinstance(other, RangeCollection):
            return False
        return self.snapshot() == other.snapshot()

    def stable_hash(self) -> int:
        """
        Compute a stable hash of the current intervals.

        The hash is based on the ascending list of (min, max, repr(value))
        triples, so it's independent of insertion order and tree structure.
        """
        rows = [(iv.min, iv.max, repr(iv.value)) for iv in self]
        hash_bytes = hashlib.sha256(str(rows).encode('utf-8')).digest()
        return int.from_bytes(hash_bytes[:8], 'big', signed=True)

    def __repr__(self) -> str:
        return f"RangeCollection({self.snapshot()})"
