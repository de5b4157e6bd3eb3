"""
winstats: descriptive statistics over windowed vectors.

Statistics are lazy nodes sharing one dependency graph. Building the same
statistic on the same vector twice returns the same node, and mutating a
vector only marks its dependents dirty; they recompute on the next read.

    >>> v = vector([1, 2, 3], size=3)
    >>> sd = stddev(v)
    >>> v.insert(4).query()
    [2.0, 3.0, 4.0]
    >>> sd.mean() is mean(v)
    True
"""

from winstats.config import Settings, close_enough, configure, get_settings, reset_settings
from winstats.errors import (
    DegenerateStatistic,
    DivideByZero,
    InvalidSize,
    LengthMismatch,
    NotScalar,
    StatisticsError,
)
from winstats.vector.sequence import Vector, as_vector
from winstats.stats.single import Mean, Median, Mode, StdDev, Variance
from winstats.stats.dual import Correlation, Covariance, LeastSquareFit
from winstats.vector.computed import ComputedVector, handle_missing_values, remove_outliers
from winstats.shortcuts import (
    LSF,
    average,
    avg,
    computed,
    cor,
    corr,
    correlation,
    cov,
    covariance,
    describe,
    leastsquarefit,
    lsf,
    mean,
    median,
    mode,
    std,
    stddev,
    var,
    variance,
    vector,
)

__version__ = "0.1.0"
