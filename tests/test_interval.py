"""
Tests for Interval and the collision / ordering helpers.
"""

import pytest

from range_set import (
    INT64_MAX,
    INT64_MIN,
    Interval,
    InvalidIntervalError,
    compare_intervals,
    intervals_collide,
)

from conftest import Box


class TestIntervalConstruction:
    """Test Interval construction and validation."""

    def test_stores_bounds_and_value(self):
        """The constructor should keep min, max and value as given."""
        iv = Interval(3, 7, "x")
        assert iv.min == 3
        assert iv.max == 7
        assert iv.value == "x"

    def test_single_point_interval_allowed(self):
        """min == max is a valid one-point interval."""
        iv = Interval(5, 5, None)
        assert iv.width() == 1

    def test_min_greater_than_max_raises(self):
        """min > max should fail fast."""
        with pytest.raises(InvalidIntervalError):
            Interval(10, 5, "x")

    def test_non_integer_bounds_raise(self):
        """Float bounds are rejected."""
        with pytest.raises(InvalidIntervalError):
            Interval(0.5, 2, "x")

    def test_bool_bounds_raise(self):
        """Booleans are not accepted as integer bounds."""
        with pytest.raises(InvalidIntervalError):
            Interval(True, 3, "x")
        with pytest.raises(InvalidIntervalError):
            Interval(0, False, "x")

    @pytest.mark.parametrize("lo,hi", [
        (0, 2**63),
        (0, 2**64),
        (-(2**63) - 1, 0),
    ])
    def test_bounds_outside_int64_raise(self, lo, hi):
        """Bounds must fit in a signed 64-bit integer."""
        with pytest.raises(InvalidIntervalError):
            Interval(lo, hi, "x")

    def test_int64_extremes_allowed(self):
        """The full int64 range is a valid interval."""
        iv = Interval(INT64_MIN, INT64_MAX, "all")
        assert iv.contains(0)

    def test_invalid_interval_is_value_error(self):
        """InvalidIntervalError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Interval(1, 0)

    def test_is_immutable(self):
        """Bounds and value cannot be reassigned."""
        iv = Interval(0, 9, "a")
        with pytest.raises(AttributeError):
            iv.min = 3
        with pytest.raises(AttributeError):
            iv.value = "b"


class TestIntervalContains:
    """Test inclusive point containment."""

    def test_bounds_are_inclusive(self):
        """Both min and max are covered."""
        iv = Interval(0, 9, "a")
        assert iv.contains(0)
        assert iv.contains(9)

    def test_points_outside(self):
        """Points just outside the bounds are not covered."""
        iv = Interval(0, 9, "a")
        assert not iv.contains(-1)
        assert not iv.contains(10)


class TestIntervalCopy:
    """Test Interval.copy() and value semantics."""

    def test_copy_clones_cloneable_value(self):
        """A Cloneable value should be deep-copied."""
        iv = Interval(0, 9, Box([1, 2]))
        copied = iv.copy()

        assert copied == iv
        assert copied.value is not iv.value
        copied.value.items.append(3)
        assert iv.value.items == [1, 2]

    def test_copy_shares_plain_value(self):
        """Values without the Cloneable interface are shared."""
        value = [1, 2]
        copied = Interval(0, 9, value).copy()
        assert copied.value is value

    def test_equality_uses_bounds_and_value(self):
        """Intervals are equal only if bounds and value match."""
        assert Interval(0, 9, "a") == Interval(0, 9, "a")
        assert Interval(0, 9, "a") != Interval(0, 9, "b")
        assert Interval(0, 9, "a") != Interval(0, 8, "a")

    def test_repr(self):
        """repr shows bounds and value."""
        assert repr(Interval(0, 9, "a")) == "Interval(0, 9, 'a')"


class TestCompareIntervals:
    """Test the overlap-aware ordering relation."""

    def test_overlapping_intervals_compare_equal(self):
        """a contains b's min -> 0."""
        assert compare_intervals(Interval(0, 9), Interval(5, 14)) == 0

    def test_before(self):
        """a entirely before b -> -1."""
        assert compare_intervals(Interval(0, 4), Interval(5, 9)) == -1

    def test_after(self):
        """a entirely after b -> 1."""
        assert compare_intervals(Interval(10, 12), Interval(0, 5)) == 1

    def test_a_inside_b_compares_equal(self):
        """b covers a without a covering b's bounds -> 0 through the last branch."""
        assert compare_intervals(Interval(3, 4), Interval(0, 9)) == 0

    def test_touching_intervals_are_ordered(self):
        """Adjacent intervals sharing no point are ordered, not equal."""
        assert compare_intervals(Interval(0, 9), Interval(10, 19)) == -1
        assert compare_intervals(Interval(10, 19), Interval(0, 9)) == 1


class TestIntervalsCollide:
    """Test the symmetric collision test."""

    @pytest.mark.parametrize("a,b", [
        ((0, 9), (5, 14)),
        ((0, 9), (3, 4)),
        ((3, 4), (0, 9)),
        ((0, 9), (9, 20)),
        ((0, 9), (0, 9)),
    ])
    def test_collisions(self, a, b):
        """Any shared point is a collision, in both argument orders."""
        assert intervals_collide(Interval(*a), Interval(*b))
        assert intervals_collide(Interval(*b), Interval(*a))

    def test_disjoint(self):
        """Adjacent but disjoint intervals do not collide."""
        assert not intervals_collide(Interval(0, 9), Interval(10, 19))
