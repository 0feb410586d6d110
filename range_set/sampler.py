"""
Random sampling over a RangeCollection.

RangeSampler draws a uniformly random point between the collection's
min_bound() and max_bound() and resolves it to the value of the interval
covering that point. Wider intervals are proportionally more likely to be
picked, which makes a RangeCollection usable as a weighted lookup table:

    >>> weights = RangeCollection()
    >>> weights.append_after_max(89, "common")
    True
    >>> weights.append_after_max(9, "rare")
    True
    >>> sampler = RangeSampler(weights, seed=0)
    >>> sampler.sample() in ("common", "rare")
    True
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

import numpy as np

from .logging_config import get_logger
from .range_collection import RangeCollection

logger = get_logger(__name__)

V = TypeVar("V")


class EmptyRangeError(ValueError):
    """Raised when sampling from a collection that holds no intervals."""


class BoundedRandom(ABC):
    """
    A random generator producing values between a minimum and a maximum.
    """

    @abstractmethod
    def generate(self, *options: Any) -> Any:
        ...

    @abstractmethod
    def get_minimum(self) -> int:
        ...

    @abstractmethod
    def get_maximum(self) -> int:
        ...

    @abstractmethod
    def set_minimum(self, minimum: int) -> None:
        ...

    @abstractmethod
    def set_maximum(self, maximum: int) -> None:
        ...


class RangeSampler(BoundedRandom, Generic[V]):
    """
    Draws random values from a RangeCollection.

    The bounds are re-read from the collection on every draw, so the sampler
    follows any insertions or removals made after it was created. A draw
    landing in a gap between two intervals resolves to None.
    """

    def __init__(
        self,
        collection: RangeCollection[V],
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            collection: The collection to sample from
            rng: Random number generator (created from seed if not provided)
            seed: Seed for the generator created when rng is None
        """
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.collection = collection
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def min_bound(self) -> int:
        return self.collection.min_bound()

    @property
    def max_bound(self) -> int:
        return self.collection.max_bound()

    def draw_point(self) -> int:
        """
        Draw a uniformly random point in [min_bound, max_bound].

        Raises:
            EmptyRangeError: If the collection is empty
        """
        lo = self.collection.min_bound()
        hi = self.collection.max_bound()
        if lo > hi:
            raise EmptyRangeError("Cannot sample from an empty RangeCollection")
        return int(self.rng.integers(lo, hi, endpoint=True))

    def sample(self) -> Optional[V]:
        """
        Draw a random point and return the value of the interval covering it.

        Raises:
            EmptyRangeError: If the collection is empty
        """
        point = self.draw_point()
        value = self.collection.get(point)
        if value is None and point not in self.collection:
            logger.debug(f"Sampled point {point} falls in a gap between intervals")
        return value

    def sample_many(self, n: int) -> List[Optional[V]]:
        """Draw n independent samples."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        return [self.sample() for _ in range(n)]

    def generate(self, *options: Any) -> Optional[V]:
        # options are accepted for interface compatibility and ignored
        return self.sample()

    def get_minimum(self) -> int:
        return self.collection.min_bound()

    def get_maximum(self) -> int:
        return self.collection.max_bound()

    def set_minimum(self, minimum: int) -> None:
        # bounds are derived from the collection
        pass

    def set_maximum(self, maximum: int) -> None:
        pass

    def __repr__(self) -> str:
        return f"RangeSampler(min_bound={self.min_bound}, max_bound={self.max_bound}, intervals={len(self.collection)})"
