"""Shared graph fixtures for the algraph test suite."""

from __future__ import annotations

import itertools

import pytest

from algraph.graph.store import GraphStore


@pytest.fixture
def triangle():
    # 1 ──► 2 ──► 3
    # ▲           │
    # └───────────┘
    return GraphStore.from_edges([(1, 2), (2, 3), (3, 1)])


@pytest.fixture
def two_cycles():
    # Cycles 1→2→3→1 and 3→4→5→3 share vertex 3: one SCC of five vertices.
    return GraphStore.from_edges([(1, 2), (2, 3), (3, 1), (3, 4), (4, 5), (5, 3)])


@pytest.fixture
def dag_chain():
    # 1 → 2 → 3 → 4, every vertex is its own SCC.
    return GraphStore.from_edges([(1, 2), (2, 3), (3, 4)])


@pytest.fixture
def weighted_square():
    # Undirected edges (u, v, weight); the MST is 1──3, 3──2, 3──4 with weight 6.
    return GraphStore.from_edges(
        [(1, 2, 4), (1, 3, 1), (2, 3, 2), (2, 4, 5), (3, 4, 3)],
        directed=False,
    )


@pytest.fixture
def directed_weighted():
    # 1 →[1]→ 2 →[2]→ 4
    # 1 →[5]→ 3 →[1]→ 4
    # 2 →[1]→ 3        5 is isolated
    store = GraphStore.from_edges(
        [(1, 2, 1), (1, 3, 5), (2, 3, 1), (2, 4, 2), (3, 4, 1)]
    )
    store.add_vertex(5)
    return store


@pytest.fixture
def two_cliques():
    # Two K4s {1..4} and {5..8} joined by the single edge 4──5: min cut is 1.
    edges = [(u, v) for u, v in itertools.combinations(range(1, 5), 2)]
    edges += [(u, v) for u, v in itertools.combinations(range(5, 9), 2)]
    edges.append((4, 5))
    return GraphStore.from_edges(edges, directed=False)


@pytest.fixture
def split_graph():
    # Two undirected triangles with no edge between them.
    return GraphStore.from_edges(
        [(1, 2), (2, 3), (3, 1), (4, 5), (5, 6), (6, 4)], directed=False
    )
