"""
Vectors whose contents are derived from another vector through a
transform, recomputed lazily whenever the source changes.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from winstats.graph import LazyNode
from winstats.stats.single import Mean, StdDev
from winstats.vector.base import BaseVector, normalize_value
from winstats.vector.sequence import Vector, as_vector

logger = logging.getLogger(__name__)

Transform = Callable[[List[Optional[float]]], Iterable[Optional[float]]]


def _identity(values):
    return values


class ComputedVector(BaseVector, LazyNode):
    """
    A read-only view of `transform(source.query())`.

    Statistics can be built on a computed vector exactly as on a plain
    one. Mutating methods are forwarded to the source.
    """

    def __init__(self, source=None, transform: Optional[Transform] = None):
        source = as_vector(source)
        super().__init__(source.config)
        self._source = source
        self._filter = transform if transform is not None else _identity
        self._values: List[Optional[float]] = []
        self._watch(source)

    def __repr__(self):
        state = "dirty" if self._dirty else f"{self._values!r}"
        return f"ComputedVector({state}, source={self._source!r})"

    @property
    def source(self) -> BaseVector:
        return self._source

    def set_filter(self, transform: Transform) -> "ComputedVector":
        self._filter = transform
        self._invalidate()
        return self

    def set_source(self, source) -> "ComputedVector":
        source = as_vector(source)
        self._unwatch(self._source)
        self._source = source
        self.config = source.config
        self._watch(source)
        self._invalidate()
        return self

    def query(self) -> List[Optional[float]]:
        self._ensure_clean()
        return list(self._values)

    def size(self) -> int:
        self._ensure_clean()
        return len(self._values)

    def copy(self) -> Vector:
        return Vector(self.query(), config=self.config)

    def _recompute(self) -> None:
        self._values = [normalize_value(v) for v in self._filter(self._source.query())]
        if self.config.debug:
            logger.debug("[recalc computed vector] %d -> %d entries",
                         self._source.size(), len(self._values))

    # --- Forwarded mutation ---

    def insert(self, *values) -> "ComputedVector":
        self._source.insert(*values)
        return self

    def append(self, *values) -> "ComputedVector":
        self._source.append(*values)
        return self

    ginsert = append

    def set_size(self, size: int) -> "ComputedVector":
        self._source.set_size(size)
        return self

    def set_vector(self, values) -> "ComputedVector":
        self._source.set_vector(values)
        return self


def _aligned(values, partner) -> List[float]:
    return [x for x, y in zip(values, partner) if x is not None and y is not None]


def handle_missing_values(source1, source2) -> Tuple[ComputedVector, ComputedVector]:
    """
    Returns two computed vectors over `source1` and `source2` that keep
    only the positions where both inputs have a value, so the pair stays
    index-aligned. Each one is refreshed when either input changes.
    """
    v1 = as_vector(source1)
    v2 = as_vector(source2)

    cv1 = ComputedVector(v1)
    cv2 = ComputedVector(v2)
    cv1._watch(v2)
    cv2._watch(v1)
    cv1.set_filter(lambda values: _aligned(values, v2.query()))
    cv2.set_filter(lambda values: _aligned(values, v1.query()))

    return cv1, cv2


def remove_outliers(source, k: float = 2.0) -> ComputedVector:
    """
    Computed vector dropping the values more than `k` standard deviations
    away from the mean of `source`. Missing entries are kept. When the
    spread is undefined nothing is dropped.
    """
    vector = as_vector(source)
    mean = Mean(vector)
    stddev = StdDev(vector)

    def within(values):
        m = mean.query()
        sd = stddev.query()
        if m is None or sd is None:
            return values
        return [v for v in values if v is None or abs(v - m) <= k * sd]

    return ComputedVector(vector, within)
