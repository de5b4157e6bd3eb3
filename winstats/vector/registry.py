"""
Per-vector lookup of the statistics already built on top of it, so that
asking twice for "the mean of this vector" hands back the same node.
"""

import logging
from typing import Dict, Optional, Tuple

from winstats.config import get_settings

logger = logging.getLogger(__name__)

RegistryKey = Tuple[str, Optional[int]]


class DependencyRegistry:
    """
    Maps (kind, identity of the other operand or None) to a statistic node.

    Nodes are held by strong reference. A node holds its second operand,
    so an `id()` in a key can never be recycled while its entry exists.
    Keys are order-sensitive: Covariance(a, b) is stored on `a` under
    ("covariance", id(b)) and is a different entry from Covariance(b, a).
    """

    def __init__(self):
        self._nodes: Dict[RegistryKey, object] = {}

    @staticmethod
    def key(kind: str, other=None) -> RegistryKey:
        return (kind, None if other is None else id(other))

    def get(self, kind: str, other=None):
        node = self._nodes.get(self.key(kind, other))
        if node is not None and get_settings().debug >= 2:
            logger.debug("[registry] reusing %s", kind)
        return node

    def register(self, kind: str, node, other=None) -> None:
        self._nodes[self.key(kind, other)] = node

    def __contains__(self, key: RegistryKey) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def kinds(self):
        return sorted({kind for kind, _ in self._nodes})
