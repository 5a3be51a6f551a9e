import pytest

from corepeel.nodes import (
    NodeEdge,
    SimpleDirectedNode,
    SimpleNode,
    TypedNode,
    WeightedNode,
    WeightedNodeEdge,
)


def test_simple_node():
    node = SimpleNode(1, [3, 2, 2])
    assert node.get_id() == 1
    assert list(node.get_edges()) == [2, 3]
    assert list(node.get_outgoing_edges()) == [2, 3]
    assert node.degree() == 2
    assert node.count_ties_with_ids({2, 5, 7}) == 1
    assert node == SimpleNode(1)
    assert len({node, SimpleNode(1, [9])}) == 1


def test_directed_node_counts_both_directions():
    node = SimpleDirectedNode(1, in_neighbors=[2, 3], out_neighbors=[2])
    assert list(node.get_neighbor_ids()) == [2, 3, 2]
    assert node.degree() == 3
    assert node.get_in_degree() == 2
    assert node.get_out_degree() == 1
    assert node.has_in_neighbor(3) and not node.has_out_neighbor(3)
    # ties count distinct ids
    assert node.count_ties_with_ids({2, 3, 4}) == 2
    assert node.has_no_out_neighbors_except_set({2})
    assert not node.has_no_out_neighbors_except_set({3})


def test_weighted_node():
    node = WeightedNode(1, [WeightedNodeEdge(2, 0.5), WeightedNodeEdge(3, 1.5)])
    assert node.degree() == 2
    assert node.weight() == pytest.approx(2.0)
    assert list(node.get_neighbor_ids()) == [2, 3]
    assert node.count_ties_with_ids({3, 4}) == 1


def test_typed_node():
    core = TypedNode(1, True, edges=[NodeEdge(0, 10), NodeEdge(1, 11), NodeEdge(1, 12)])
    assert core.is_core()
    assert core.degree() == 3
    assert core.neighbors_sets == {0: {10}, 1: {11, 12}}
    assert core.count_ties_with_ids({10, 12, 99}) == 2
    with pytest.raises(ValueError):
        core.require_non_core_type()

    non_core = TypedNode(10, False, non_core_type="ip", edges=[NodeEdge(0, 1)])
    assert not non_core.is_core()
    assert non_core.require_non_core_type() == "ip"


if __name__ == "__main__":
    for name, func in list(globals().items()):
        if name.startswith("test_") and callable(func):
            print(f"Running {name} ...")
            func()
    print("Node tests passed!")
