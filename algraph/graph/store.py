"""In-memory multigraph store with vertex contraction.

`GraphStore` owns a mapping from vertex id to `Vertex`; each `Vertex` keeps an
ordered list of outgoing `Edge` objects that reference destination vertices of
the same store. Parallel edges are allowed. Undirected graphs are stored as
pairs of reciprocal arcs, which is why ``edge_count()`` and ``total_weight()``
are halved for undirected stores.

Algorithm scratch state (visited flags, distances, keys) is not kept on
vertices; algorithms hold it in local dicts keyed by vertex id.
"""

from __future__ import annotations

from collections import Counter
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    ValuesView,
)

from algraph.logging import get_logger

logger = get_logger(__name__)

NodeID = int
Weight = float

#: Parsed edge record: ``(origin, destination)`` or ``(origin, destination, weight)``.
EdgeRecord = Tuple[Any, ...]

#: Parsed adjacency record: ``(origin, [(destination, weight_or_None), ...])``.
AdjacencyRecord = Tuple[NodeID, Sequence[Tuple[Any, ...]]]

#: Weight assigned to edges whose input omits one.
DEFAULT_WEIGHT: Weight = 1.0


class VertexNotFoundError(KeyError):
    """Raised when an operation references a vertex id absent from the store."""

    def __init__(self, vertex_id: Any) -> None:
        super().__init__(vertex_id)
        self.vertex_id = vertex_id

    def __str__(self) -> str:
        return f"Vertex '{self.vertex_id}' does not exist."


class Edge:
    """Directed edge to ``dest`` with a numeric ``weight``.

    Edges have no identity of their own: two edges are "the same" for removal
    purposes only when they are the same object, and matching by endpoint uses
    the destination vertex object, not its id.
    """

    __slots__ = ("dest", "weight")

    def __init__(self, dest: Vertex, weight: Weight = DEFAULT_WEIGHT) -> None:
        self.dest = dest
        self.weight = weight

    def __repr__(self) -> str:
        return f"Edge(dest={self.dest.id!r}, weight={self.weight!r})"


class Vertex:
    """A vertex id plus its ordered outgoing edges."""

    __slots__ = ("id", "edges")

    def __init__(self, vertex_id: NodeID) -> None:
        self.id = vertex_id
        self.edges: List[Edge] = []

    def add(self, edge: Edge) -> None:
        self.edges.append(edge)

    @property
    def out_degree(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def __repr__(self) -> str:
        return f"Vertex({self.id!r}, edges={len(self.edges)})"


class GraphStore:
    """Mapping of vertex id to `Vertex` with graph-level operations.

    The ``directed`` flag is fixed at construction. Stores built with
    ``directed=False`` through `from_edges` / `from_adjacency` are reciprocated
    (every arc u->v has a matching v->u of equal weight) unless the input is
    declared pre-reciprocated.

    Later mutation does not re-establish that invariant:
      - ``merge_vertices()`` keeps an already symmetric store symmetric, since
        it drops both directions between the merged pair and renames endpoints
        uniformly.
      - ``add_edge()`` adds a single arc and may break symmetry.
    Use ``is_symmetric()`` instead of assuming it.
    """

    def __init__(self, directed: bool = True) -> None:
        self.directed = directed
        self._vertices: Dict[NodeID, Vertex] = {}

    #
    # Construction
    #
    @classmethod
    def from_edges(
        cls,
        edges: Iterable[EdgeRecord],
        directed: bool = True,
        pre_reciprocated: bool = False,
    ) -> GraphStore:
        """Build a store from parsed edge tuples.

        Args:
            edges: Iterable of ``(origin, destination[, weight])``. A missing or
                None weight defaults to 1.
            directed: Whether the graph is directed.
            pre_reciprocated: For undirected graphs, whether the input already
                lists both directions of every edge.

        Returns:
            GraphStore: The constructed store.
        """
        store = cls(directed=directed)
        for record in edges:
            origin, dest, *rest = record
            store.add_edge(origin, dest, rest[0] if rest else None)
        store._reciprocate_if_needed(pre_reciprocated)
        return store

    @classmethod
    def from_adjacency(
        cls,
        records: Iterable[AdjacencyRecord],
        directed: bool = True,
        pre_reciprocated: bool = False,
    ) -> GraphStore:
        """Build a store from adjacency records ``(origin, [(dest[, weight]), ...])``.

        Origins with an empty neighbor list still become vertices.
        """
        store = cls(directed=directed)
        for origin, neighbors in records:
            store.add_vertex(origin)
            for dest, *rest in neighbors:
                store.add_edge(origin, dest, rest[0] if rest else None)
        store._reciprocate_if_needed(pre_reciprocated)
        return store

    def _reciprocate_if_needed(self, pre_reciprocated: bool) -> None:
        if not self.directed and not pre_reciprocated:
            self.merge_from(self.copy(reverse=True))
        logger.debug(
            f"Built {'directed' if self.directed else 'undirected'} graph: "
            f"{len(self)} vertices, {self.edge_count()} edges"
        )

    #
    # Vertex and edge management
    #
    def add_vertex(self, vertex_id: NodeID) -> Vertex:
        """Return the vertex with ``vertex_id``, creating it if absent."""
        vertex = self._vertices.get(vertex_id)
        if vertex is None:
            vertex = Vertex(vertex_id)
            self._vertices[vertex_id] = vertex
        return vertex

    def get_vertex(self, vertex_id: NodeID) -> Vertex:
        """Return the vertex with ``vertex_id``.

        Raises:
            VertexNotFoundError: If the vertex does not exist.
        """
        try:
            return self._vertices[vertex_id]
        except KeyError:
            raise VertexNotFoundError(vertex_id) from None

    def add_edge(
        self, src: NodeID, dst: NodeID, weight: Optional[Weight] = None
    ) -> Edge:
        """Append a directed edge src->dst, creating missing vertices.

        The reverse edge is never added implicitly.
        """
        origin = self.add_vertex(src)
        edge = Edge(self.add_vertex(dst), DEFAULT_WEIGHT if weight is None else weight)
        origin.add(edge)
        return edge

    def remove_self_loops(self) -> int:
        """Drop every edge whose destination is its own origin.

        Returns:
            int: Number of edges removed.
        """
        removed = 0
        for vertex in self._vertices.values():
            kept = [e for e in vertex.edges if e.dest is not vertex]
            removed += len(vertex.edges) - len(kept)
            vertex.edges = kept
        return removed

    #
    # Whole-graph operations
    #
    def copy(self, reverse: bool = False) -> GraphStore:
        """Return a new store with fresh vertices and edges.

        Args:
            reverse: If True, every edge u->v becomes v->u.

        Returns:
            GraphStore: Copy with the same ``directed`` flag; ``self`` is not
                modified and no edge of the copy references a vertex of ``self``.
        """
        out = GraphStore(directed=self.directed)
        for vertex_id, vertex in self._vertices.items():
            vertex_copy = out.add_vertex(vertex_id)
            for edge in vertex.edges:
                dest_copy = out.add_vertex(edge.dest.id)
                if reverse:
                    dest_copy.add(Edge(vertex_copy, edge.weight))
                else:
                    vertex_copy.add(Edge(dest_copy, edge.weight))
        return out

    def merge_from(self, other: GraphStore) -> None:
        """Absorb every vertex and edge of ``other`` into this store.

        Edges are re-created against this store's vertices, matched by id.
        """
        for vertex_id, vertex in list(other._vertices.items()):
            target = self.add_vertex(vertex_id)
            for edge in list(vertex.edges):
                target.add(Edge(self.add_vertex(edge.dest.id), edge.weight))

    def merge_vertices(self, a_id: NodeID, b_id: NodeID) -> int:
        """Contract vertex ``a`` into vertex ``b``.

        Removes all edges between the two (in both directions, plus any
        self-loops on either), moves ``a``'s remaining outgoing edges to ``b``,
        redirects every edge pointing at ``a`` to ``b`` and deletes ``a``.

        Args:
            a_id: Vertex that disappears.
            b_id: Vertex that absorbs ``a``.

        Returns:
            int: Number of edges removed.

        Raises:
            VertexNotFoundError: If either vertex does not exist.
            ValueError: If ``a_id == b_id``.
        """
        if a_id == b_id:
            raise ValueError(f"Cannot merge vertex '{a_id}' with itself.")
        a = self.get_vertex(a_id)
        b = self.get_vertex(b_id)

        removed = 0
        for vertex in (a, b):
            kept = [e for e in vertex.edges if e.dest is not a and e.dest is not b]
            removed += len(vertex.edges) - len(kept)
            vertex.edges = kept

        b.edges.extend(a.edges)
        a.edges = []

        for vertex in self._vertices.values():
            for edge in vertex.edges:
                if edge.dest is a:
                    edge.dest = b

        del self._vertices[a_id]
        return removed

    #
    # Queries
    #
    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._vertices

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self._vertices)

    def vertices(self) -> ValuesView[Vertex]:
        return self._vertices.values()

    def edges(self) -> Iterator[Tuple[NodeID, NodeID, Weight]]:
        """Yield every stored arc as ``(src, dst, weight)``."""
        for vertex_id, vertex in self._vertices.items():
            for edge in vertex.edges:
                yield vertex_id, edge.dest.id, edge.weight

    def adjacency(self) -> Iterator[Tuple[NodeID, List[Tuple[NodeID, Weight]]]]:
        """Yield ``(vertex_id, [(dest_id, weight), ...])`` in insertion order."""
        for vertex_id, vertex in self._vertices.items():
            yield vertex_id, [(e.dest.id, e.weight) for e in vertex.edges]

    def arc_count(self) -> int:
        """Return the number of stored arcs (sum of out-degrees), never halved."""
        return sum(len(vertex.edges) for vertex in self._vertices.values())

    def edge_count(self) -> int:
        """Return the number of edges, halved for undirected stores."""
        total = self.arc_count()
        return total if self.directed else total // 2

    def total_weight(self) -> float:
        """Return the sum of edge weights, halved for undirected stores."""
        total = sum(
            edge.weight
            for vertex in self._vertices.values()
            for edge in vertex.edges
        )
        return total if self.directed else total / 2

    def is_symmetric(self) -> bool:
        """Check that every arc u->v (weight w) has a matching v->u (weight w)."""
        forward = Counter(self.edges())
        backward = Counter((v, u, w) for u, v, w in forward.elements())
        return forward == backward

    def __repr__(self) -> str:
        return (
            f"GraphStore(directed={self.directed}, vertices={len(self)}, "
            f"edges={self.edge_count()})"
        )

    #
    # Pickling: flatten to ids so deep edge chains do not hit the recursion limit
    #
    def __getstate__(self) -> Dict[str, Any]:
        return {"directed": self.directed, "adjacency": list(self.adjacency())}

    def __setstate__(self, state: Dict[str, Any]) -> None:
        self.directed = state["directed"]
        self._vertices = {}
        for vertex_id, _ in state["adjacency"]:
            self.add_vertex(vertex_id)
        for vertex_id, neighbors in state["adjacency"]:
            for dest, weight in neighbors:
                self.add_edge(vertex_id, dest, weight)
