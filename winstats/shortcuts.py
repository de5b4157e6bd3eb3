"""
Short constructor functions. Each accepts raw values (lists, tuples,
numpy arrays, pandas Series), vectors or statistics interchangeably and
hands back existing objects unchanged, so statistics built through the
shortcuts share their nodes with everything else on the same vectors.
"""

from typing import Optional

import numpy as np
import pandas as pd

from winstats.stats.dual import Correlation, Covariance, LeastSquareFit
from winstats.stats.single import Mean, Median, Mode, StdDev, Variance
from winstats.vector.computed import ComputedVector, handle_missing_values, remove_outliers
from winstats.vector.sequence import as_vector


def vector(*values, size: Optional[int] = None):
    """`vector(1, 2, 3)`, `vector([1, 2, 3])` or `vector(existing)`."""
    if len(values) == 1:
        return as_vector(values[0], size)
    return as_vector(list(values), size)


def computed(source=None, transform=None) -> ComputedVector:
    if isinstance(source, ComputedVector) and transform is None:
        return source
    return ComputedVector(source, transform)


def mean(source=None, size: Optional[int] = None) -> Mean:
    return Mean(source, size=size)


def median(source=None, size: Optional[int] = None) -> Median:
    return Median(source, size=size)


def mode(source=None, size: Optional[int] = None) -> Mode:
    return Mode(source, size=size)


def variance(source=None, size: Optional[int] = None) -> Variance:
    return Variance(source, size=size)


def stddev(source=None, size: Optional[int] = None) -> StdDev:
    return StdDev(source, size=size)


def _dual(cls, source1, source2):
    if isinstance(source1, cls) and source2 is None:
        return source1
    return cls(source1, source2)


def covariance(source1=None, source2=None) -> Covariance:
    return _dual(Covariance, source1, source2)


def correlation(source1=None, source2=None) -> Correlation:
    return _dual(Correlation, source1, source2)


def leastsquarefit(source1=None, source2=None) -> LeastSquareFit:
    return _dual(LeastSquareFit, source1, source2)


def describe(source=None) -> pd.Series:
    """
    Summary of one vector as a pandas Series, built from the vector's
    shared nodes. Undefined entries (and a multimodal mode) are NaN.
    """
    vec = as_vector(source)
    nodes = {
        "mean": Mean(vec),
        "median": Median(vec),
        "mode": Mode(vec),
        "variance": Variance(vec),
        "stddev": StdDev(vec),
    }
    row = {"size": float(vec.size()), "missing": float(vec.missing_count())}
    for name, node in nodes.items():
        value = node.query()
        row[name] = float(value) if isinstance(value, (int, float)) else np.nan
    return pd.Series(row, dtype=float)


average = avg = mean
var = variance
std = stddev
cov = covariance
cor = corr = correlation
lsf = LSF = leastsquarefit

__all__ = [
    "vector", "computed", "handle_missing_values", "remove_outliers",
    "mean", "average", "avg", "median", "mode", "variance", "var",
    "stddev", "std", "covariance", "cov", "correlation", "cor", "corr",
    "leastsquarefit", "lsf", "LSF", "describe",
]
