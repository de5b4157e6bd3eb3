"""
Dependency plumbing shared by vectors, computed vectors and statistics.

Every participant keeps a weak set of the objects that read from it.
Forward edges (a statistic holding its inputs) are ordinary references,
so the graph never owns itself through its back-edges.
"""

import weakref


class GraphNode:
    """Something other graph nodes can depend on."""

    def __init__(self):
        self._dependents = weakref.WeakSet()

    def _add_dependent(self, node: "GraphNode") -> None:
        self._dependents.add(node)

    def _remove_dependent(self, node: "GraphNode") -> None:
        self._dependents.discard(node)

    def _notify_dependents(self) -> None:
        for node in list(self._dependents):
            node._invalidate()

    def _invalidate(self) -> None:
        """Called when an input changed. Leaves have nothing to mark."""
        self._notify_dependents()

    def _ensure_clean(self) -> None:
        """Brings the cached state up to date. Leaves are always current."""


class LazyNode(GraphNode):
    """
    A graph node with a cached value and a dirty flag.

    Subclasses list their direct inputs in `_inputs` and implement
    `_recompute()`. A dirty node's dependents are always dirty too (they
    were marked when it was), so invalidation stops at the first node
    that is already dirty.
    """

    def __init__(self):
        super().__init__()
        self._inputs = []
        self._dirty = True
        self.recompute_count = 0

    def _watch(self, *inputs) -> None:
        for node in inputs:
            self._inputs.append(node)
            node._add_dependent(self)

    def _unwatch(self, node) -> None:
        self._inputs.remove(node)
        node._remove_dependent(self)

    @property
    def dirty(self) -> bool:
        return self._dirty

    def _invalidate(self) -> None:
        if self._dirty:
            return
        self._dirty = True
        self._notify_dependents()

    def _ensure_clean(self) -> None:
        if not self._dirty:
            return
        for node in self._inputs:
            node._ensure_clean()
        self._recompute()
        self.recompute_count += 1
        self._dirty = False

    def _recompute(self) -> None:
        raise NotImplementedError
