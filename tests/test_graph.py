import networkx as nx
import pytest

from corepeel.components import get_connected_components, get_connected_components_membership
from corepeel.graph import Graph, TypedGraph, from_edges, from_networkx
from corepeel.nodes import SimpleDirectedNode, SimpleNode, TypedNode, WeightedNode


def test_from_networkx_simple():
    G = nx.karate_club_graph()
    # drop the weights so the simple flavour is picked
    H = nx.Graph(G.edges())
    graph = from_networkx(H)
    assert isinstance(graph, Graph)
    assert graph.count_nodes() == G.number_of_nodes()
    assert graph.count_edges() == 2 * G.number_of_edges()
    assert all(isinstance(n, SimpleNode) for n in graph.get_nodes_iter())
    assert graph.get_ordered_node_ids() == sorted(G.nodes())
    assert graph.get_node(0).degree() == G.degree(0)
    with pytest.raises(KeyError):
        graph.get_node(1000)


def test_from_networkx_directed():
    graph = from_edges([(1, 2), (2, 1), (2, 3)], directed=True)
    node = graph.get_node(2)
    assert isinstance(node, SimpleDirectedNode)
    assert node.in_neighbors == [1]
    assert node.out_neighbors == [1, 3]
    assert node.degree() == 3


def test_from_networkx_weighted():
    graph = from_edges([(1, 2, 0.5), (2, 3, 2.0)], weighted=True)
    node = graph.get_node(2)
    assert isinstance(node, WeightedNode)
    assert node.weight() == pytest.approx(2.5)
    assert sorted(node.get_neighbor_ids()) == [1, 3]


def test_from_networkx_bipartite():
    G = nx.complete_bipartite_graph(2, 3)
    graph = from_networkx(G)
    assert isinstance(graph, TypedGraph)
    assert graph.get_core_ids() == [0, 1]
    assert graph.get_non_core_ids() == [2, 3, 4]
    assert all(isinstance(n, TypedNode) for n in graph.get_nodes_iter())
    assert graph.get_node(0).is_core()
    assert graph.count_edges() == 12


def test_from_networkx_directed_bipartite_lists_both_ends():
    G = nx.DiGraph()
    G.add_nodes_from([1, 2], bipartite=0)
    G.add_nodes_from([10, 11], bipartite=1, type="url")
    G.add_edges_from([(1, 10), (1, 11), (2, 10), (2, 11)], type=7)
    graph = from_networkx(G)
    assert isinstance(graph, TypedGraph)
    assert sorted(graph.get_node(1).get_neighbor_ids()) == [10, 11]
    assert sorted(graph.get_node(10).get_neighbor_ids()) == [1, 2]
    assert graph.get_node(10).neighbors_sets == {7: {1, 2}}
    assert graph.get_node(10).require_non_core_type() == "url"
    assert graph.count_edges() == 8


def test_multigraph_rejected():
    with pytest.raises(ValueError):
        from_networkx(nx.MultiGraph([(1, 2), (1, 2)]))


def test_connected_components_exclusions():
    graph = from_edges([(1, 2), (2, 3), (3, 4), (5, 6)], nodes=[7])
    assert get_connected_components(graph) == [[1, 2, 3, 4], [5, 6], [7]]
    assert get_connected_components(graph, ignore_nodes={3}) == [[1, 2], [4], [5, 6], [7]]
    # edges match in either orientation
    assert get_connected_components(graph, ignore_edges={(3, 2)}) == [[1, 2], [3, 4], [5, 6], [7]]

    membership, count = get_connected_components_membership(graph, ignore_nodes={7})
    assert count == 2
    assert membership == {1: 0, 2: 0, 3: 0, 4: 0, 5: 1, 6: 1}


def test_connected_components_directed_is_weak():
    graph = from_edges([(1, 2), (3, 2)], directed=True)
    assert get_connected_components(graph) == [[1, 2, 3]]


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func):
            print(f"Running {name} ...")
            func()
    print("Graph tests passed!")
