"""algraph: in-memory graph engine for classical graph algorithms.

Primary API:
    GraphStore - Multigraph store with copy, reverse, merge and contraction
    spf(), shortest_paths() - Single-source shortest paths (Dijkstra)
    minimum_spanning_tree() - Minimum spanning tree (Prim)
    find_sccs() - Strongly connected components (Kosaraju)
    min_cut(), KargerMinCut - Randomized global minimum cut (Karger)
    read_graph() - Import edge-list and adjacency-list text files

Example:
    from algraph import GraphStore, min_cut, minimum_spanning_tree

    store = GraphStore.from_edges(
        [(1, 2, 4), (1, 3, 1), (2, 3, 2), (2, 4, 5), (3, 4, 3)],
        directed=False,
    )
    tree = minimum_spanning_tree(store)
    assert tree.total_weight() == 6

    result = min_cut(store, seed=1)
    print(result.cut)
"""

from __future__ import annotations

from algraph import cli, logging
from algraph._version import __version__
from algraph.algorithms import (
    MAX_PATH,
    GraphKindError,
    KargerMinCut,
    MinCutPlan,
    MinCutResult,
    NoSpanningTreeError,
    SccResult,
    find_sccs,
    min_cut,
    minimum_spanning_tree,
    resolve_path,
    scc_count,
    shortest_paths,
    spf,
    top_components_by_population,
)
from algraph.graph import Edge, GraphStore, Vertex, VertexNotFoundError
from algraph.graph.convert import from_networkx, to_networkx
from algraph.graph.io import GraphFormatError, InputFormat, read_graph

__all__ = [
    "__version__",
    "cli",
    "logging",
    "MAX_PATH",
    "GraphKindError",
    "KargerMinCut",
    "MinCutPlan",
    "MinCutResult",
    "NoSpanningTreeError",
    "SccResult",
    "find_sccs",
    "min_cut",
    "minimum_spanning_tree",
    "resolve_path",
    "scc_count",
    "shortest_paths",
    "spf",
    "top_components_by_population",
    "Edge",
    "GraphStore",
    "Vertex",
    "VertexNotFoundError",
    "from_networkx",
    "to_networkx",
    "GraphFormatError",
    "InputFormat",
    "read_graph",
]
