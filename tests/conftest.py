"""
Shared pytest fixtures for range-set tests.
"""

import pytest

from range_set import Cloneable, Interval, RangeCollection


class Box(Cloneable):
    """A mutable value that knows how to deep-copy itself."""

    def __init__(self, items):
        self.items = list(items)

    def clone(self):
        return Box(self.items)

    def __eq__(self, other):
        return isinstance(other, Box) and self.items == other.items

    def __repr__(self):
        return f"Box({self.items})"


class FixedRng:
    """Stand-in for numpy.random.Generator that always returns the same point."""

    def __init__(self, point):
        self.point = point
        self.calls = []

    def integers(self, low, high, endpoint=False):
        self.calls.append((low, high, endpoint))
        return self.point


@pytest.fixture
def ab_collection():
    """Two adjacent intervals: [0,9] -> "a", [10,19] -> "b"."""
    collection = RangeCollection()
    collection.insert_range(0, 9, "a")
    collection.insert_range(10, 19, "b")
    return collection


@pytest.fixture
def decile_collection():
    """Ten intervals of width 10 covering [0,99], values "d0" .. "d9"."""
    return RangeCollection(Interval(i * 10, i * 10 + 9, f"d{i}") for i in range(10))


@pytest.fixture
def write_yaml(tmp_path):
    """Write a YAML string to a file in tmp_path and return its path."""
    def _write(content, name="config.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write
