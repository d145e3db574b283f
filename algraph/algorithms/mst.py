"""Minimum spanning tree (Prim).

Keys, parent edges and the frontier all refer to vertex ids of the source
store; the tree under construction is a separate undirected `GraphStore` that
only receives the chosen edges. Each frontier key remembers the edge that
produced it, so the tree edge is never re-derived by matching weights.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Dict, List, Optional, Tuple

from algraph.algorithms.base import MAX_PATH, Cost, NoSpanningTreeError
from algraph.graph.store import GraphStore, NodeID, VertexNotFoundError
from algraph.logging import get_logger

logger = get_logger(__name__)


def minimum_spanning_tree(
    store: GraphStore, root: Optional[NodeID] = None
) -> GraphStore:
    """Compute a minimum spanning tree of ``store``.

    Only outgoing arcs are followed, so on a directed store the result is a
    tree reachable from ``root`` over arc directions. Undirected stores are
    reciprocated and behave as expected.

    Args:
        store: Graph to span. Not modified.
        root: Starting vertex; defaults to the first vertex in insertion order.

    Returns:
        GraphStore: Undirected store holding each tree edge in both
            directions, so ``edge_count()`` is ``n - 1`` and ``total_weight()``
            is the tree weight. An empty store yields an empty tree.

    Raises:
        VertexNotFoundError: If ``root`` is given and not in the store.
        NoSpanningTreeError: If some vertex cannot be reached.
    """
    tree = GraphStore(directed=False)
    if not len(store):
        return tree
    if root is None:
        root = next(iter(store))
    elif root not in store:
        raise VertexNotFoundError(root)

    key: Dict[NodeID, Cost] = {vertex_id: MAX_PATH for vertex_id in store}
    parent: Dict[NodeID, Tuple[NodeID, Cost]] = {}
    frontier: List[Tuple[Cost, int, NodeID]] = []
    tiebreak = count()

    def relax(node_id: NodeID) -> None:
        for edge in store.get_vertex(node_id).edges:
            neighbor_id = edge.dest.id
            if neighbor_id in tree:
                continue
            if neighbor_id not in parent or edge.weight < key[neighbor_id]:
                key[neighbor_id] = edge.weight
                parent[neighbor_id] = (node_id, edge.weight)
                heappush(frontier, (edge.weight, next(tiebreak), neighbor_id))

    tree.add_vertex(root)
    relax(root)

    while frontier:
        node_key, _, node_id = heappop(frontier)
        # Superseded entries stay in the heap until popped
        if node_id in tree or node_key > key[node_id]:
            continue
        src_id, weight = parent[node_id]
        tree.add_edge(src_id, node_id, weight)
        tree.add_edge(node_id, src_id, weight)
        relax(node_id)

    if len(tree) != len(store):
        missing = len(store) - len(tree)
        raise NoSpanningTreeError(
            f"Graph is disconnected: {missing} of {len(store)} vertices "
            f"are unreachable from {root!r}; no spanning tree exists."
        )

    logger.debug(
        f"MST spans {len(tree)} vertices with total weight {tree.total_weight()}"
    )
    return tree
