"""Conversion utilities between GraphStore and NetworkX graphs.

Every stored arc becomes one edge of a ``networkx.MultiDiGraph`` with a
``weight`` attribute; the store's ``directed`` flag travels in the graph
attributes so the conversion can be reverted without re-reciprocating.
"""

from typing import Any

import networkx as nx

from algraph.graph.store import DEFAULT_WEIGHT, GraphStore


def to_networkx(store: GraphStore, weight: str = "weight") -> nx.MultiDiGraph:
    """Convert a GraphStore to a NetworkX MultiDiGraph.

    Undirected stores appear with both reciprocal arcs, so the result is
    always directed; ``graph.graph["directed"]`` records the original flag.

    Args:
        store: The store to convert.
        weight: Name of the edge attribute that receives the edge weight.

    Returns:
        A MultiDiGraph with one node per vertex and one edge per arc.
    """
    nx_graph = nx.MultiDiGraph(directed=store.directed)
    nx_graph.add_nodes_from(store)
    for src, dst, w in store.edges():
        nx_graph.add_edge(src, dst, **{weight: w})
    return nx_graph


def from_networkx(
    nx_graph: Any,
    weight: str = "weight",
    default: float = DEFAULT_WEIGHT,
) -> GraphStore:
    """Convert a NetworkX graph to a GraphStore.

    Directed graphs are copied arc by arc. Undirected graphs produce an
    undirected, reciprocated store. A MultiDiGraph carrying
    ``graph["directed"] is False`` (as produced by ``to_networkx``) is taken
    to be pre-reciprocated.

    Args:
        nx_graph: Any NetworkX graph (Graph, DiGraph, MultiGraph, MultiDiGraph).
        weight: Edge attribute holding the weight.
        default: Weight used when the attribute is missing.

    Returns:
        GraphStore: The converted store.
    """
    records = list(nx_graph.edges(data=weight, default=default))
    if nx_graph.is_directed():
        directed = nx_graph.graph.get("directed", True)
        store = GraphStore.from_edges(
            records, directed=directed, pre_reciprocated=not directed
        )
    else:
        store = GraphStore.from_edges(records, directed=False)

    # Isolated nodes carry no edges but still belong to the graph
    for node in nx_graph.nodes:
        store.add_vertex(node)
    return store
