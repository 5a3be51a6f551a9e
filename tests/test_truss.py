import itertools

import networkx as nx
import pytest

from corepeel.algorithms.coreness import get_coreness_fast
from corepeel.algorithms.truss import get_k_trusses
from corepeel.graph import from_edges, from_networkx


def _karate_nx():
    return nx.Graph(nx.karate_club_graph().edges())


def _canonical_edges(G):
    return {(u, v) if u < v else (v, u) for u, v in G.edges()}


def test_five_clique():
    graph = from_networkx(nx.complete_graph(5))
    trusses, truss_nodes = get_k_trusses(graph, 3)
    assert len(trusses) == 1
    assert trusses[0] == set(itertools.combinations(range(5), 2))
    assert truss_nodes == {frozenset(range(5))}

    # every edge of K5 closes exactly 3 triangles
    assert get_k_trusses(graph, 5)[0] == trusses
    assert get_k_trusses(graph, 6) == ([], set())


def test_invalid_k():
    graph = from_networkx(nx.complete_graph(3))
    for k in (-1, 0, 1):
        with pytest.raises(ValueError):
            get_k_trusses(graph, k)


def test_two_k_keeps_every_edge():
    graph = from_edges([(1, 2), (2, 3), (5, 6)], nodes=[9])
    trusses, truss_nodes = get_k_trusses(graph, 2)
    assert trusses == [{(1, 2), (2, 3)}, {(5, 6)}]
    assert truss_nodes == {frozenset({1, 2, 3}), frozenset({5, 6})}


def test_bridge_splits_trusses():
    graph = from_edges([(1, 2), (2, 3), (1, 3), (3, 4), (4, 5), (5, 6), (4, 6)])
    trusses, truss_nodes = get_k_trusses(graph, 3)
    assert trusses == [{(1, 2), (1, 3), (2, 3)}, {(4, 5), (4, 6), (5, 6)}]
    assert truss_nodes == {frozenset({1, 2, 3}), frozenset({4, 5, 6})}


def test_trusses_match_networkx():
    G = _karate_nx()
    graph = from_networkx(G)
    for k in range(2, 7):
        trusses, _ = get_k_trusses(graph, k)
        ours = set().union(*trusses) if trusses else set()
        assert ours == _canonical_edges(nx.k_truss(G, k))


def test_truss_support_and_core_precondition():
    G = nx.erdos_renyi_graph(80, 0.15, seed=3)
    graph = from_networkx(G)
    _, coreness = get_coreness_fast(graph)
    for k in (3, 4, 5):
        trusses, truss_nodes = get_k_trusses(graph, k)
        assert {frozenset(n for e in t for n in e) for t in trusses} == truss_nodes
        for t in trusses:
            sub = nx.Graph(list(t))
            for u, v in t:
                assert len(set(sub[u]) & set(sub[v])) >= k - 2
            for n in sub.nodes():
                assert coreness[n] >= k - 1


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func):
            print(f"Running {name} ...")
            func()
    print("Truss tests passed!")
