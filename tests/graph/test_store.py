import pickle

import pytest

from algraph.graph.store import (
    DEFAULT_WEIGHT,
    Edge,
    GraphStore,
    Vertex,
    VertexNotFoundError,
)


def test_init_empty_store():
    """A new store has no vertices or edges."""
    store = GraphStore()
    assert len(store) == 0
    assert store.directed is True
    assert store.edge_count() == 0
    assert store.total_weight() == 0
    assert list(store.edges()) == []


def test_add_vertex_is_idempotent():
    store = GraphStore()
    v1 = store.add_vertex(1)
    v2 = store.add_vertex(1)
    assert v1 is v2
    assert len(store) == 1
    assert 1 in store


def test_add_edge_creates_vertices_and_default_weight():
    store = GraphStore()
    edge = store.add_edge(1, 2)
    assert isinstance(edge, Edge)
    assert edge.weight == DEFAULT_WEIGHT
    assert edge.dest is store.get_vertex(2)
    assert set(store) == {1, 2}
    # No reverse edge is added implicitly
    assert store.get_vertex(2).edges == []


def test_add_edge_keeps_parallel_edges_in_order():
    store = GraphStore()
    store.add_edge(1, 2, 3)
    store.add_edge(1, 2, 5)
    store.add_edge(1, 3)
    assert list(store.edges()) == [(1, 2, 3), (1, 2, 5), (1, 3, 1.0)]
    assert store.get_vertex(1).out_degree == 3


def test_get_vertex_missing_raises():
    store = GraphStore()
    with pytest.raises(VertexNotFoundError, match="does not exist"):
        store.get_vertex(42)
    # Still a KeyError for callers that catch the built-in
    with pytest.raises(KeyError):
        store.get_vertex(42)


def test_vertex_iterates_edges():
    v = Vertex(7)
    w = Vertex(8)
    v.add(Edge(w, 2.5))
    assert [e.dest.id for e in v] == [8]
    assert len(v) == 1
    assert repr(v) == "Vertex(7, edges=1)"


class TestConstruction:
    def test_directed_from_edges(self):
        store = GraphStore.from_edges([(1, 2, 4), (2, 3)])
        assert store.directed
        assert store.edge_count() == 2
        assert store.total_weight() == 5

    def test_undirected_edges_are_reciprocated(self):
        records = [(1, 2, 4), (1, 3, 1), (2, 3, 2)]
        store = GraphStore.from_edges(records, directed=False)
        arcs = list(store.edges())
        for u, v, w in records:
            assert (u, v, w) in arcs
            assert (v, u, w) in arcs
        assert store.arc_count() == 6
        assert store.edge_count() == 3
        assert store.total_weight() == 7
        assert store.is_symmetric()

    def test_pre_reciprocated_input_is_not_doubled(self):
        records = [(1, 2, 4), (2, 1, 4)]
        store = GraphStore.from_edges(records, directed=False, pre_reciprocated=True)
        assert store.arc_count() == 2
        assert store.edge_count() == 1

    def test_from_adjacency(self):
        records = [(1, [(2, 3.0), (3, None)]), (2, [(3,)]), (4, [])]
        store = GraphStore.from_adjacency(records)
        assert list(store) == [1, 2, 3, 4]
        assert list(store.edges()) == [(1, 2, 3.0), (1, 3, 1.0), (2, 3, 1.0)]

    def test_from_adjacency_undirected(self):
        store = GraphStore.from_adjacency([(1, [(2, 2.0)])], directed=False)
        assert sorted(store.edges()) == [(1, 2, 2.0), (2, 1, 2.0)]


class TestCopy:
    def test_copy_is_independent(self, triangle):
        clone = triangle.copy()
        assert list(clone.edges()) == list(triangle.edges())
        assert clone.directed == triangle.directed
        for vertex_id in triangle:
            assert clone.get_vertex(vertex_id) is not triangle.get_vertex(vertex_id)
        # Edges of the copy point into the copy only
        for vertex in clone.vertices():
            for edge in vertex.edges:
                assert edge.dest is clone.get_vertex(edge.dest.id)
        clone.add_edge(1, 3)
        assert triangle.edge_count() == 3

    def test_copy_reverse(self, directed_weighted):
        rev = directed_weighted.copy(reverse=True)
        assert sorted(rev.edges()) == sorted(
            (v, u, w) for u, v, w in directed_weighted.edges()
        )
        assert set(rev) == set(directed_weighted)

    def test_double_reverse_restores_original(self, directed_weighted):
        twice = directed_weighted.copy(reverse=True).copy(reverse=True)
        assert sorted(twice.edges()) == sorted(directed_weighted.edges())
        assert set(twice) == set(directed_weighted)


class TestMerge:
    def test_merge_from_recreates_edges(self):
        a = GraphStore.from_edges([(1, 2)])
        b = GraphStore.from_edges([(2, 3, 7)])
        a.merge_from(b)
        assert sorted(a.edges()) == [(1, 2, 1.0), (2, 3, 7)]
        # Merged edges reference this store's vertices, not b's
        merged = a.get_vertex(2).edges[0]
        assert merged.dest is a.get_vertex(3)
        assert merged.dest is not b.get_vertex(3)

    def test_merge_vertices_contracts(self):
        store = GraphStore.from_edges(
            [(1, 2), (1, 2), (2, 1), (1, 3), (3, 1), (4, 1), (2, 4)]
        )
        removed = store.merge_vertices(1, 2)
        assert removed == 3
        assert 1 not in store
        assert len(store) == 3
        assert sorted(store.edges()) == [
            (2, 3, 1.0),
            (2, 4, 1.0),
            (3, 2, 1.0),
            (4, 2, 1.0),
        ]

    def test_merge_vertices_never_leaves_self_loops(self, two_cliques):
        before = len(two_cliques)
        two_cliques.merge_vertices(1, 2)
        two_cliques.merge_vertices(3, 2)
        assert len(two_cliques) == before - 2
        assert all(src != dst for src, dst, _ in two_cliques.edges())

    def test_merge_vertices_drops_existing_self_loops(self):
        store = GraphStore.from_edges([(1, 1), (1, 2), (2, 2), (2, 3)])
        store.merge_vertices(1, 2)
        assert list(store.edges()) == [(2, 3, 1.0)]

    def test_merge_vertices_keeps_symmetry(self, weighted_square):
        weighted_square.merge_vertices(1, 3)
        assert weighted_square.is_symmetric()
        # 1──3 [1] disappears; 1──2 [4] and 3──2 [2] become parallel 3──2 edges
        assert weighted_square.edge_count() == 4
        assert weighted_square.total_weight() == 4 + 2 + 5 + 3

    def test_merge_vertices_count_decreases_by_removed(self, two_cliques):
        arcs_before = two_cliques.arc_count()
        removed = two_cliques.merge_vertices(4, 5)
        assert removed == 2
        assert two_cliques.arc_count() == arcs_before - removed

    def test_merge_vertices_unknown(self, triangle):
        with pytest.raises(VertexNotFoundError):
            triangle.merge_vertices(1, 99)
        with pytest.raises(VertexNotFoundError):
            triangle.merge_vertices(99, 1)

    def test_merge_vertex_with_itself(self, triangle):
        with pytest.raises(ValueError, match="itself"):
            triangle.merge_vertices(1, 1)


def test_add_edge_after_construction_breaks_symmetry(weighted_square):
    assert weighted_square.is_symmetric()
    weighted_square.add_edge(1, 4, 9)
    assert not weighted_square.is_symmetric()


def test_remove_self_loops():
    store = GraphStore.from_edges([(1, 1), (1, 2), (2, 2), (2, 2)])
    assert store.remove_self_loops() == 3
    assert list(store.edges()) == [(1, 2, 1.0)]


def test_adjacency_view(weighted_square):
    adjacency = dict(weighted_square.adjacency())
    assert sorted(adjacency[3]) == [(1, 1), (2, 2), (4, 3)]


def test_pickle_roundtrip_preserves_structure(two_cliques):
    clone = pickle.loads(pickle.dumps(two_cliques))
    assert clone.directed is False
    assert list(clone.edges()) == list(two_cliques.edges())
    for vertex in clone.vertices():
        for edge in vertex.edges:
            assert edge.dest is clone.get_vertex(edge.dest.id)


def test_pickle_long_chain():
    """Flat pickling handles chains longer than the recursion limit."""
    store = GraphStore.from_edges((i, i + 1) for i in range(5000))
    clone = pickle.loads(pickle.dumps(store))
    assert clone.edge_count() == 5000


def test_repr(triangle):
    assert repr(triangle) == "GraphStore(directed=True, vertices=3, edges=3)"
