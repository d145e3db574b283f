from __future__ import annotations

from typing import Union

#: Represents a numeric path length or edge key.
Cost = Union[int, float]

#: Distance reported for vertices that are unreachable from the source, and the
#: initial key of every vertex before it joins a spanning-tree frontier.
MAX_PATH: Cost = 1_000_000.0


class GraphKindError(ValueError):
    """Raised when an algorithm is not defined for the store's graph kind."""


class NoSpanningTreeError(ValueError):
    """Raised when a minimum spanning tree is requested on a disconnected graph."""
