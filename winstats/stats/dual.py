"""
Statistics of two paired vectors. Positions where either vector is
missing a value are skipped.

Every mean and variance entering a paired result is taken over the paired
values. The shared Mean and Variance nodes of each vector are used only
while the missing entries line up; otherwise those moments are computed
from the pairs directly.
"""

from typing import Optional, Tuple

import numpy as np

from winstats.errors import DegenerateStatistic, DivideByZero, NotScalar
from winstats.stats.base import DualInputStatistic, Undefined
from winstats.stats.single import Mean, Variance
from winstats.utils.format import format_number


def _spread(values, divisor: int) -> float:
    a = np.asarray(values, dtype=float)
    d = a - np.mean(a)
    return float(np.sum(d * d) / divisor)


class Covariance(DualInputStatistic):
    kind = "covariance"
    label = "cov"

    def __init__(self, vector1, vector2):
        super().__init__(vector1, vector2)
        self._mean1 = Mean(vector1)
        self._mean2 = Mean(vector2)
        self._watch(self._mean1, self._mean2)

    def mean1(self) -> Mean:
        return self._mean1

    def mean2(self) -> Mean:
        return self._mean2

    def _compute(self):
        x, y, dropped = self._paired_values()
        d = self._divisor(len(x))
        if not x or d <= 0:
            raise Undefined(f"not enough paired values ({len(x)})")
        if dropped:
            m1, m2 = float(np.mean(x)), float(np.mean(y))
        else:
            m1, m2 = self._mean1.query(), self._mean2.query()
        dx = np.asarray(x, dtype=float) - m1
        dy = np.asarray(y, dtype=float) - m2
        return float(np.sum(dx * dy) / d)


class Correlation(DualInputStatistic):
    """Pearson correlation, clamped to [-1, 1]."""

    kind = "correlation"
    label = "correlation"

    def __init__(self, vector1, vector2):
        super().__init__(vector1, vector2)
        self._covariance = Covariance(vector1, vector2)
        self._variance1 = Variance(vector1)
        self._variance2 = Variance(vector2)
        self._watch(self._covariance, self._variance1, self._variance2)

    def covariance(self) -> Covariance:
        return self._covariance

    def variance1(self) -> Variance:
        return self._variance1

    def variance2(self) -> Variance:
        return self._variance2

    def mean1(self) -> Mean:
        return self._covariance.mean1()

    def mean2(self) -> Mean:
        return self._covariance.mean2()

    def _compute(self):
        cov = self._covariance.query()
        if cov is None:
            raise Undefined(f"covariance is undefined ({self._covariance.reason})")
        x, y, dropped = self._paired_values()
        if dropped:
            d = self._divisor(len(x))
            v1, v2 = _spread(x, d), _spread(y, d)
        else:
            v1, v2 = self._variance1.query(), self._variance2.query()
        if not v1 or not v2:
            raise Undefined("a standard deviation is zero or undefined")
        r = cov / np.sqrt(v1 * v2)
        return float(min(1.0, max(-1.0, r)))


class LeastSquareFit(DualInputStatistic):
    """
    Ordinary least-squares line through (vector1, vector2).

    `query()` returns `(alpha, beta)` for y = beta * x + alpha, or
    `(None, None)` when the first vector has no spread. The result is a
    pair and can never be read as a single number.
    """

    kind = "lsf"
    label = "LSF"

    def __init__(self, vector1, vector2):
        super().__init__(vector1, vector2)
        self._variance1 = Variance(vector1)
        self._variance2 = Variance(vector2)
        self._mean1 = Mean(vector1)
        self._mean2 = Mean(vector2)
        self._covariance = Covariance(vector1, vector2)
        self._watch(self._variance1, self._mean1, self._mean2, self._covariance)

    def variance1(self) -> Variance:
        return self._variance1

    def variance2(self) -> Variance:
        return self._variance2

    def mean1(self) -> Mean:
        return self._mean1

    def mean2(self) -> Mean:
        return self._mean2

    def covariance(self) -> Covariance:
        return self._covariance

    def _compute(self):
        x, y, dropped = self._paired_values()
        if dropped:
            d = self._divisor(len(x))
            if not x or d <= 0:
                raise Undefined(f"not enough paired values ({len(x)})")
            var1 = _spread(x, d)
            m1, m2 = float(np.mean(x)), float(np.mean(y))
        else:
            var1 = self._variance1.query()
            if var1 is None:
                raise Undefined(f"variance of the first vector is undefined ({self._variance1.reason})")
            m1, m2 = self._mean1.query(), self._mean2.query()
        if var1 == 0:
            raise Undefined("the first vector has zero variance")
        cov = self._covariance.query()
        if cov is None:
            raise Undefined(f"covariance is undefined ({self._covariance.reason})")
        beta = cov / var1
        alpha = m2 - beta * m1
        return (alpha, beta)

    def query(self) -> Tuple[Optional[float], Optional[float]]:
        value = super().query()
        if value is None:
            return (None, None)
        return value

    def _fit(self) -> Tuple[float, float]:
        alpha, beta = self.query()
        if self._reason is not None:
            raise DegenerateStatistic(f"{self.label} is undefined: {self._reason}")
        return alpha, beta

    def y_given_x(self, x: float) -> float:
        alpha, beta = self._fit()
        return beta * x + alpha

    def x_given_y(self, y: float) -> float:
        alpha, beta = self._fit()
        if beta == 0:
            raise DivideByZero(f"{self.label} has zero slope; x is not determined by y")
        return (y - alpha) / beta

    def as_number(self) -> float:
        raise NotScalar("the result of LSF may not be used as a number")

    def equals(self, other) -> bool:
        raise NotScalar("the result of LSF may not be compared as a number")

    def as_string(self) -> str:
        alpha, beta = (format_number(v, self.config.ipres) for v in self.query())
        return f"{self.label}( alpha: {alpha}, beta: {beta} )"
