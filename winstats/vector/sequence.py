"""
The mutable vector every statistic is computed from, and `as_vector`, the
single place where loose caller input becomes a vector.
"""

import logging
from typing import List, Optional

from winstats.config import Settings
from winstats.errors import InvalidSize
from winstats.graph import GraphNode
from winstats.vector.base import BaseVector, flatten_values

logger = logging.getLogger(__name__)


def check_size(size) -> int:
    if size is None or size < 1:
        raise InvalidSize(size)
    return int(size)


class Vector(BaseVector):
    """
    An ordered list of optional floats, either growable or a fixed window.

    With `size` given the vector is a FIFO window of exactly that length:
    `insert` appends at the tail and drops the same number of entries from
    the head. Without it, `insert` simply grows the vector.

    Constructing from another vector copies its contents into a new,
    independent vector. Use `as_vector` (or the `vector()` shortcut) to get
    the same instance back instead.

    Args:
        values: Initial contents (scalar, iterable, array, Series or vector).
            A vector is copied, never shared.
        size: Fixed window length, or None for a growable vector.
        fill: Pad with zeros (True) or missing entries (False) when the
            window grows. Defaults to the configured fill policy.
        config: Settings to use instead of the shared ones.
    """

    def __init__(self, values=None, size: Optional[int] = None, fill: Optional[bool] = None,
                 config: Optional[Settings] = None):
        super().__init__(config)
        self._values: List[Optional[float]] = [] if values is None else flatten_values([values])
        self.fill = (not self.config.nofill) if fill is None else fill
        self.capacity: Optional[int] = None
        if size is not None:
            self.capacity = check_size(size)
            self._fix_size()

    def __repr__(self):
        return f"Vector({self._values!r}, size={self.capacity!r})"

    def query(self) -> List[Optional[float]]:
        return list(self._values)

    def size(self) -> int:
        return len(self._values)

    def copy(self) -> "Vector":
        """An independent vector with the same contents, capacity and fill policy."""
        return Vector(self._values, size=self.capacity, fill=self.fill, config=self.config)

    # --- Mutation ---

    def insert(self, *values) -> "Vector":
        new = flatten_values(values)
        self._values.extend(new)
        if self.capacity is not None:
            self._fix_size()
        self._changed("insert", len(new))
        return self

    def append(self, *values) -> "Vector":
        new = flatten_values(values)
        self._values.extend(new)
        if self.capacity is not None:
            self.capacity = len(self._values)
        self._changed("append", len(new))
        return self

    ginsert = append

    def set_size(self, size: int) -> "Vector":
        self.capacity = check_size(size)
        self._fix_size()
        self._changed("set_size", size)
        return self

    def set_vector(self, values) -> "Vector":
        """
        Replaces the contents; a fixed window takes on the new length.

        A vector argument is copied, not adopted by reference: later changes
        to either vector do not show up in the other, and this vector keeps
        its own identity, registry and dependents.
        """
        self._values = flatten_values([values])
        if self.capacity is not None:
            self.capacity = len(self._values)
        self._changed("set_vector", len(self._values))
        return self

    def _fix_size(self) -> None:
        excess = len(self._values) - self.capacity
        if excess > 0:
            del self._values[:excess]
        elif excess < 0:
            pad = 0.0 if self.fill else None
            self._values[:0] = [pad] * -excess

    def _changed(self, op: str, arg) -> None:
        if self.config.debug:
            logger.debug("[%s vector] %s -> %d entries", op, arg, len(self._values))
        self._notify_dependents()


def as_vector(source=None, size: Optional[int] = None) -> BaseVector:
    """
    Resolves a sequence source to a vector-like.

    Existing vectors and computed vectors come back as the same object
    (resized when `size` is given), a statistic yields the vector it reads,
    None yields a new empty vector and anything else is wrapped in a new
    `Vector`.
    """
    if isinstance(source, BaseVector):
        vector = source
    elif isinstance(getattr(source, "vector", None), BaseVector):
        vector = source.vector
    elif isinstance(source, GraphNode):
        raise TypeError(f"cannot take a single vector from {type(source).__name__}")
    else:
        return Vector(source, size=size)

    if size is not None:
        vector.set_size(size)
    return vector
