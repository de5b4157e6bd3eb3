"""
Common machinery for the statistic nodes.

Construction goes through `_Shared.__call__`: the sources are resolved to
vectors once, the owning vector's registry is consulted, and an existing
node for the same (kind, operands) is returned instead of a new one.
"""

import logging
from typing import Optional, Tuple

from winstats.config import close_enough, get_settings
from winstats.errors import DegenerateStatistic, LengthMismatch
from winstats.graph import LazyNode
from winstats.utils.format import format_number
from winstats.vector.base import BaseVector
from winstats.vector.sequence import as_vector

logger = logging.getLogger(__name__)


class Undefined(Exception):
    """Raised inside `_compute` to record an undefined result."""


class _Shared(type):
    """Metaclass that hands back the registered node when one exists."""

    def __call__(cls, *args, **kwargs):
        vectors = cls._resolve(*args, **kwargs)
        node = cls._lookup(vectors)
        if node is not None:
            return node
        node = super().__call__(*vectors)
        cls._register(node, vectors)
        if get_settings().debug >= 2:
            logger.debug("[new %s]", cls.kind)
        return node


class Statistic(LazyNode, metaclass=_Shared):
    """
    A lazily computed value with a recorded reason when it is undefined.

    Subclasses implement `_compute()`, returning the value or raising
    `Undefined`. Reading an undefined value through `query()` gives None;
    `as_number()` raises `DegenerateStatistic` every time it is read.
    """

    kind = ""
    label = ""

    def __init__(self):
        super().__init__()
        self._value = None
        self._reason: Optional[str] = None
        self.config = get_settings()

    def __repr__(self):
        state = "dirty" if self._dirty else repr(self._value)
        return f"<{type(self).__name__} {state}>"

    @classmethod
    def _resolve(cls, *args, **kwargs) -> Tuple[BaseVector, ...]:
        raise NotImplementedError

    @classmethod
    def _lookup(cls, vectors):
        raise NotImplementedError

    @classmethod
    def _register(cls, node, vectors) -> None:
        raise NotImplementedError

    def _recompute(self) -> None:
        try:
            self._value = self._compute()
            self._reason = None
        except Undefined as e:
            self._value = None
            self._reason = str(e)
        if self.config.debug:
            if self._reason is None:
                logger.debug("[recalc %s] %r", self.kind, self._value)
            else:
                logger.debug("[recalc %s] undefined: %s", self.kind, self._reason)

    def _compute(self):
        raise NotImplementedError

    def query(self):
        self._ensure_clean()
        return self._value

    def is_defined(self) -> bool:
        self._ensure_clean()
        return self._reason is None

    @property
    def reason(self) -> Optional[str]:
        """Why the current value is undefined, or None."""
        self._ensure_clean()
        return self._reason

    def as_number(self) -> float:
        value = self.query()
        if self._reason is not None:
            raise DegenerateStatistic(f"{self.label} is undefined: {self._reason}")
        return float(value)

    def as_string(self) -> str:
        return f"{self.label}: {format_number(self.query(), self.config.ipres)}"

    def equals(self, other) -> bool:
        """Compares numeric values, honouring the configured tolerance."""
        if isinstance(other, Statistic):
            other = other.as_number()
        return close_enough(self.as_number(), other, self.config.tolerance)


class SingleInputStatistic(Statistic):
    """A statistic of one vector: `Kind(source=None, size=None)`."""

    def __init__(self, vector: BaseVector):
        super().__init__()
        self.vector = vector
        self.config = vector.config
        self._watch(vector)

    @classmethod
    def _resolve(cls, source=None, size: Optional[int] = None):
        return (as_vector(source, size),)

    @classmethod
    def _lookup(cls, vectors):
        return vectors[0].registry.get(cls.kind)

    @classmethod
    def _register(cls, node, vectors) -> None:
        vectors[0].registry.register(cls.kind, node)

    def query_vector(self) -> BaseVector:
        return self.vector

    def size(self) -> int:
        return self.vector.size()

    # Mutation goes straight to the vector, which notifies every dependent.

    def insert(self, *values):
        self.vector.insert(*values)
        return self

    def append(self, *values):
        self.vector.append(*values)
        return self

    ginsert = append

    def set_size(self, size: int):
        self.vector.set_size(size)
        return self

    def set_vector(self, values):
        self.vector.set_vector(values)
        return self


class DualInputStatistic(Statistic):
    """A statistic of two equal-length vectors: `Kind(source1=None, source2=None)`."""

    def __init__(self, vector1: BaseVector, vector2: BaseVector):
        super().__init__()
        self.vector1 = vector1
        self.vector2 = vector2
        self.config = vector1.config
        self._watch(vector1, vector2)

    @classmethod
    def _resolve(cls, source1=None, source2=None):
        v1 = as_vector(source1)
        v2 = as_vector(source2)
        if v1.size() != v2.size():
            raise LengthMismatch(cls.label, v1.size(), v2.size())
        return v1, v2

    @classmethod
    def _lookup(cls, vectors):
        v1, v2 = vectors
        return v1.registry.get(cls.kind, v2)

    @classmethod
    def _register(cls, node, vectors) -> None:
        v1, v2 = vectors
        v1.registry.register(cls.kind, node, v2)

    def query_vector1(self) -> BaseVector:
        return self.vector1

    def query_vector2(self) -> BaseVector:
        return self.vector2

    def size(self) -> int:
        return self.vector1.size()

    def _paired_values(self):
        """
        Positions where both vectors have a value, as two lists, and whether
        any position holding a value in only one of the vectors was dropped.

        When nothing was dropped the paired values are exactly the values
        the single-vector statistics see, so their shared nodes can be used.
        """
        x = self.vector1.query()
        y = self.vector2.query()
        if len(x) != len(y):
            raise Undefined(f"vectors differ in length ({len(x)} != {len(y)})")
        pairs = [(a, b) for a, b in zip(x, y) if a is not None and b is not None]
        dropped = any((a is None) != (b is None) for a, b in zip(x, y))
        return [a for a, _ in pairs], [b for _, b in pairs], dropped

    def _divisor(self, n: int) -> int:
        return n - 1 if self.config.unbias else n

    # --- Mutation, forwarded to both vectors ---

    def insert(self, x, y):
        self.vector1.insert(x)
        self.vector2.insert(y)
        return self

    def append(self, x, y):
        self.vector1.append(x)
        self.vector2.append(y)
        return self

    ginsert = append

    def set_size(self, size: int):
        self.vector1.set_size(size)
        self.vector2.set_size(size)
        return self

    def set_vector(self, x, y):
        self.vector1.set_vector(x)
        self.vector2.set_vector(y)
        return self
