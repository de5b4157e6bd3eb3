"""
Read-side API shared by `Vector` and `ComputedVector`, plus the helpers
that turn loose caller input into a flat list of optional floats.
"""

from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from winstats.config import Settings, get_settings
from winstats.errors import NotScalar
from winstats.graph import GraphNode
from winstats.utils.format import format_vector
from winstats.vector.registry import DependencyRegistry


def is_missing(value) -> bool:
    """None and NaN both count as a missing entry."""
    return value is None or bool(pd.isna(value))


def normalize_value(value) -> Optional[float]:
    if is_missing(value):
        return None
    return float(value)


def flatten_values(values: Iterable) -> List[Optional[float]]:
    """
    Flattens one level of nesting: scalars, lists, tuples, numpy arrays,
    pandas Series and vector-likes may be mixed freely.
    """
    flat = []
    for item in values:
        if isinstance(item, BaseVector):
            flat.extend(item.query())
        elif isinstance(item, (np.ndarray, pd.Series)):
            flat.extend(normalize_value(v) for v in item.tolist())
        elif isinstance(item, (str, bytes)):
            raise TypeError(f"not a number: {item!r}")
        elif np.iterable(item):
            flat.extend(normalize_value(v) for v in item)
        else:
            flat.append(normalize_value(item))
    return flat


class BaseVector(GraphNode):
    """Anything statistics can be computed from."""

    def __init__(self, config: Optional[Settings] = None):
        super().__init__()
        self.config = config if config is not None else get_settings()
        self.registry = DependencyRegistry()

    def query(self) -> List[Optional[float]]:
        raise NotImplementedError

    def size(self) -> int:
        return len(self.query())

    def __len__(self) -> int:
        return self.size()

    def __iter__(self):
        return iter(self.query())

    def present(self) -> np.ndarray:
        """The non-missing entries as a float array, in order."""
        return np.array([v for v in self.query() if v is not None], dtype=float)

    def missing_count(self) -> int:
        return sum(1 for v in self.query() if v is None)

    def to_series(self, name: Optional[str] = None) -> pd.Series:
        values = [np.nan if v is None else v for v in self.query()]
        return pd.Series(values, dtype=float, name=name)

    def as_number(self) -> float:
        raise NotScalar(f"a {type(self).__name__} may not be used as a number")

    def as_string(self) -> str:
        return format_vector(self.query(), self.config.ipres)
