"""Strongly connected components (Kosaraju, two passes).

Pass 1 runs depth-first search over a reversed copy of the graph and records
vertices in decreasing finishing time. Pass 2 walks the original graph,
starting a new search from each unvisited vertex in that order; every vertex
reached belongs to the component named after the search's starting vertex.

Both passes use an explicit stack; finishing order matches the recursive
formulation.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Set, Tuple

from algraph.algorithms.base import GraphKindError
from algraph.graph.store import GraphStore, NodeID, Vertex
from algraph.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SccResult:
    """Component labels produced by ``find_sccs``.

    Attributes:
        groups: Vertex id -> representative id of its component.
        populations: Representative id -> component size, in discovery order.
    """

    groups: Dict[NodeID, NodeID]
    populations: Dict[NodeID, int]

    def scc_count(self) -> int:
        """Number of distinct components."""
        return len(self.populations)

    def top_components(self, n: int) -> List[Tuple[NodeID, int]]:
        """Return the ``n`` most populous ``(representative, size)`` pairs.

        Sorted by size descending; ties keep discovery order.

        Raises:
            ValueError: If ``n`` is negative.
        """
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        ranked = sorted(
            self.populations.items(), key=lambda item: item[1], reverse=True
        )
        return ranked[:n]

    def members(self, representative: NodeID) -> List[NodeID]:
        """Vertex ids labelled with ``representative``."""
        return [v for v, rep in self.groups.items() if rep == representative]

    def same_component(self, u: NodeID, v: NodeID) -> bool:
        return self.groups[u] == self.groups[v]


def _dfs(
    start: Vertex, visited: Set[NodeID], on_finish: Callable[[NodeID], None]
) -> None:
    """Depth-first search from ``start``, calling ``on_finish`` in post-order."""
    visited.add(start.id)
    stack = [(start, iter(start.edges))]
    while stack:
        vertex, pending = stack[-1]
        for edge in pending:
            nxt = edge.dest
            if nxt.id not in visited:
                visited.add(nxt.id)
                stack.append((nxt, iter(nxt.edges)))
                break
        else:
            stack.pop()
            on_finish(vertex.id)


def finishing_order(store: GraphStore) -> Deque[NodeID]:
    """Return vertex ids of the reversed graph by decreasing finishing time."""
    reversed_store = store.copy(reverse=True)
    order: Deque[NodeID] = deque()
    visited: Set[NodeID] = set()
    for vertex in reversed_store.vertices():
        if vertex.id not in visited:
            _dfs(vertex, visited, order.appendleft)
    return order


def find_sccs(store: GraphStore) -> SccResult:
    """Label every vertex of a directed store with its component.

    Args:
        store: Directed graph. Not modified.

    Returns:
        SccResult: Component labels and populations.

    Raises:
        GraphKindError: If the store is undirected.
    """
    if not store.directed:
        raise GraphKindError(
            "Strongly connected components are only defined for directed graphs."
        )

    logger.debug("SCC pass 1: ordering vertices on the reversed graph")
    order = finishing_order(store)

    logger.debug("SCC pass 2: labelling components on the original graph")
    groups: Dict[NodeID, NodeID] = {}
    populations: Dict[NodeID, int] = {}
    visited: Set[NodeID] = set()

    while order:
        start_id = order.popleft()
        if start_id in visited:
            continue
        populations[start_id] = 0

        def assign(vertex_id: NodeID, representative: NodeID = start_id) -> None:
            groups[vertex_id] = representative
            populations[representative] += 1

        _dfs(store.get_vertex(start_id), visited, assign)

    logger.debug(f"Found {len(populations)} strongly connected components")
    return SccResult(groups=groups, populations=populations)


def scc_count(store: GraphStore) -> int:
    """Return the number of strongly connected components of ``store``."""
    return find_sccs(store).scc_count()


def top_components_by_population(
    store: GraphStore, n: int
) -> List[Tuple[NodeID, int]]:
    """Return the ``n`` largest components as ``(representative, size)`` pairs."""
    return find_sccs(store).top_components(n)
