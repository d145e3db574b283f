"""Graph algorithms over `GraphStore`.

Modules:
  - ``spf``: single-source shortest paths (Dijkstra).
  - ``mst``: minimum spanning tree (Prim).
  - ``scc``: strongly connected components (Kosaraju).
  - ``mincut``: randomized global minimum cut (Karger).
"""

from algraph.algorithms.base import (
    MAX_PATH,
    Cost,
    GraphKindError,
    NoSpanningTreeError,
)
from algraph.algorithms.mincut import KargerMinCut, MinCutPlan, MinCutResult, min_cut
from algraph.algorithms.mst import minimum_spanning_tree
from algraph.algorithms.scc import (
    SccResult,
    find_sccs,
    scc_count,
    top_components_by_population,
)
from algraph.algorithms.spf import resolve_path, shortest_paths, spf

__all__ = [
    "MAX_PATH",
    "Cost",
    "GraphKindError",
    "NoSpanningTreeError",
    "KargerMinCut",
    "MinCutPlan",
    "MinCutResult",
    "min_cut",
    "minimum_spanning_tree",
    "SccResult",
    "find_sccs",
    "scc_count",
    "top_components_by_population",
    "resolve_path",
    "shortest_paths",
    "spf",
]
