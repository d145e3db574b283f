"""Single-source shortest paths (Dijkstra).

The frontier is a binary heap of ``(distance, seq, vertex_id)`` entries, where
``seq`` is an insertion counter that settles distance ties. Improving a
tentative distance pushes a new entry; the superseded entry stays in the heap
and is skipped when popped, since its vertex is already settled.

Edge weights must be non-negative; this is not validated.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Dict, List, Optional, Tuple

from algraph.algorithms.base import MAX_PATH, Cost
from algraph.graph.store import GraphStore, NodeID, VertexNotFoundError
from algraph.logging import get_logger

logger = get_logger(__name__)


def spf(
    store: GraphStore,
    src_node: NodeID,
    max_path: Cost = MAX_PATH,
) -> Tuple[Dict[NodeID, Cost], Dict[NodeID, Optional[NodeID]]]:
    """Compute shortest distances and predecessors from ``src_node``.

    Args:
        store: The graph to traverse. Not modified.
        src_node: Source vertex id.
        max_path: Sentinel reported for unreachable vertices. Paths at least
            this long are indistinguishable from unreachable.

    Returns:
        A tuple of (costs, pred):
          - costs: Every vertex of the store mapped to its shortest distance,
            or ``max_path`` if unreachable. The source maps to 0.
          - pred: For each reachable vertex, the vertex it was reached from on
            a shortest path (``None`` for the source).

    Raises:
        VertexNotFoundError: If ``src_node`` is not in the store.
    """
    if src_node not in store:
        raise VertexNotFoundError(src_node)

    tentative: Dict[NodeID, Cost] = {vertex_id: max_path for vertex_id in store}
    tentative[src_node] = 0.0
    settled: Dict[NodeID, Cost] = {}
    pred: Dict[NodeID, Optional[NodeID]] = {src_node: None}
    # Insertion counter breaks cost ties so vertex ids are never compared
    tiebreak = count()
    min_pq: List[Tuple[Cost, int, NodeID]] = [(0.0, next(tiebreak), src_node)]

    while min_pq:
        current_cost, _, node_id = heappop(min_pq)
        if node_id in settled:
            continue
        settled[node_id] = current_cost

        for edge in store.get_vertex(node_id).edges:
            neighbor_id = edge.dest.id
            if neighbor_id in settled:
                continue
            new_cost = current_cost + edge.weight
            if new_cost < tentative[neighbor_id]:
                tentative[neighbor_id] = new_cost
                pred[neighbor_id] = node_id
                heappush(min_pq, (new_cost, next(tiebreak), neighbor_id))

    logger.debug(
        f"SPF from {src_node!r}: {len(settled)} of {len(store)} vertices reachable"
    )
    costs = {vertex_id: settled.get(vertex_id, max_path) for vertex_id in store}
    return costs, pred


def shortest_paths(
    store: GraphStore, src_node: NodeID, max_path: Cost = MAX_PATH
) -> Dict[NodeID, Cost]:
    """Return the shortest distance from ``src_node`` to every vertex."""
    costs, _ = spf(store, src_node, max_path)
    return costs


def resolve_path(
    pred: Dict[NodeID, Optional[NodeID]], dst_node: NodeID
) -> List[NodeID]:
    """Walk the predecessor map back from ``dst_node``.

    Returns:
        List of vertex ids from the source to ``dst_node``, or an empty list
        if ``dst_node`` was not reached.
    """
    if dst_node not in pred:
        return []
    path = [dst_node]
    node = pred[dst_node]
    while node is not None:
        path.append(node)
        node = pred[node]
    path.reverse()
    return path
