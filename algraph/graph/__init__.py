"""Graph primitives and helpers.

This package provides the multigraph store `GraphStore` and helper modules for
networkx conversion (`convert`) and text import/export (`io`).
"""

from algraph.graph.store import (
    DEFAULT_WEIGHT,
    Edge,
    GraphStore,
    NodeID,
    Vertex,
    VertexNotFoundError,
    Weight,
)

__all__ = [
    "DEFAULT_WEIGHT",
    "Edge",
    "GraphStore",
    "NodeID",
    "Vertex",
    "VertexNotFoundError",
    "Weight",
]
