"""
Statistics of a single vector. Missing entries are left out of every
count and sum.
"""

from collections import Counter
from typing import List

import numpy as np

from winstats.errors import NotScalar
from winstats.stats.base import SingleInputStatistic, Undefined
from winstats.utils.format import format_vector
from winstats.vector.sequence import Vector


def _divisor(n: int, unbias: bool) -> int:
    return n - 1 if unbias else n


class Mean(SingleInputStatistic):
    kind = "mean"
    label = "mean"

    def _compute(self):
        values = self.vector.present()
        if len(values) == 0:
            raise Undefined("no values")
        return float(np.mean(values))


class Median(SingleInputStatistic):
    kind = "median"
    label = "median"

    def _compute(self):
        values = self.vector.present()
        if len(values) == 0:
            raise Undefined("no values")
        return float(np.median(values))


class Mode(SingleInputStatistic):
    """
    Most frequent value.

    The candidate is the first value whose count strictly beats the best
    seen so far while scanning in order. When several values share the
    top count the mode is multimodal: `query()` returns a `Vector` of the
    tied values (in order of first appearance) and `as_number()` raises
    `NotScalar`.
    """

    kind = "mode"
    label = "mode"

    def __init__(self, vector):
        super().__init__(vector)
        self._tied: List[float] = []
        self._candidate = None

    def _compute(self):
        counts = Counter()
        best, best_count = None, 0
        for value in self.vector.query():
            if value is None:
                continue
            counts[value] += 1
            if counts[value] > best_count:
                best, best_count = value, counts[value]

        self._tied = [v for v, c in counts.items() if c == best_count]
        self._candidate = best
        if best is None:
            raise Undefined("no values")
        if len(self._tied) > 1:
            return Vector(self._tied, config=self.config)
        return best

    def is_multimodal(self) -> bool:
        self._ensure_clean()
        return len(self._tied) > 1

    def candidate(self):
        """The first value to reach the top count, multimodal or not."""
        self._ensure_clean()
        return self._candidate

    def modes(self) -> List[float]:
        """All values sharing the highest count."""
        self._ensure_clean()
        return list(self._tied)

    def as_number(self) -> float:
        if self.is_multimodal():
            raise NotScalar(f"multimodal mode {self._tied} may not be used as a number")
        return super().as_number()

    def as_string(self) -> str:
        if self.is_multimodal():
            return f"{self.label}: {format_vector(self._tied, self.config.ipres)}"
        return super().as_string()


class Variance(SingleInputStatistic):
    """Divides by N, or by N-1 when the `unbias` setting is on."""

    kind = "variance"
    label = "var"

    def __init__(self, vector):
        super().__init__(vector)
        self._mean = Mean(vector)
        self._watch(self._mean)

    def mean(self) -> Mean:
        return self._mean

    def _compute(self):
        mean = self._mean.query()
        values = self.vector.present()
        d = _divisor(len(values), self.config.unbias)
        if mean is None or d <= 0:
            raise Undefined(f"not enough values ({len(values)})")
        dev = values - mean
        return float(np.sum(dev * dev) / d)


class StdDev(SingleInputStatistic):
    kind = "stddev"
    label = "stddev"

    def __init__(self, vector):
        super().__init__(vector)
        self._variance = Variance(vector)
        self._watch(self._variance)

    def variance(self) -> Variance:
        return self._variance

    def mean(self) -> Mean:
        return self._variance.mean()

    def _compute(self):
        var = self._variance.query()
        if var is None:
            raise Undefined(f"variance is undefined ({self._variance.reason})")
        return float(np.sqrt(var))
