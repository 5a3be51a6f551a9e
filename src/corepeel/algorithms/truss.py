"""truss.py
================
k-truss peeling: the maximal subgraph in which every edge closes at least
``k - 2`` triangles.

Edges are undirected and canonical, ``(lesser_id, greater_id)``.
"""
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List, Set, Tuple

from corepeel.algorithms.coreness import _get_k_cores
from corepeel.components import get_connected_components_membership
from corepeel.graph import GraphBase
from corepeel.nodes import NodeId

__all__ = ["get_k_trusses"]

_LOG = logging.getLogger(__name__)

Edge = Tuple[NodeId, NodeId]
EdgeSet = Set[Edge]


def _canonical(u: NodeId, v: NodeId) -> Edge:
    return (u, v) if u < v else (v, u)


def _get_k_trusses(
    graph: GraphBase,
    k: int,
    ignore_nodes: Set[NodeId],
) -> Tuple[List[EdgeSet], Set[FrozenSet[NodeId]]]:
    neighbors: Dict[NodeId, Set[NodeId]] = {}
    edges: EdgeSet = set()
    for node in graph.get_nodes_iter():
        node_id = node.get_id()
        if node_id in ignore_nodes:
            continue
        nbrs = {
            nid for nid in node.get_neighbor_ids()
            if nid != node_id and nid not in ignore_nodes
        }
        neighbors[node_id] = nbrs
        edges.update(_canonical(node_id, nid) for nid in nbrs)

    min_support = k - 2
    ignore_edges: EdgeSet = set()
    sweeps = 0
    while True:
        sweeps += 1
        to_remove = [
            (id1, id2) for id1, id2 in edges
            if len(neighbors[id1] & neighbors[id2]) < min_support
        ]
        if not to_remove:
            break
        for id1, id2 in to_remove:
            edges.discard((id1, id2))
            neighbors[id1].discard(id2)
            neighbors[id2].discard(id1)
            ignore_edges.add((id1, id2))
    _LOG.debug(
        "k=%d: %d edges kept, %d removed after %d sweeps",
        k, len(edges), len(ignore_edges), sweeps,
    )

    components, num_components = get_connected_components_membership(
        graph, ignore_nodes=ignore_nodes, ignore_edges=ignore_edges
    )
    trusses: List[EdgeSet] = [set() for _ in range(num_components)]
    for node_id, idx in components.items():
        for nid in neighbors[node_id]:
            if components[nid] == idx and node_id < nid:
                eid = (node_id, nid)
                if eid in edges:
                    trusses[idx].add(eid)

    filtered = [t for t in trusses if t]
    truss_nodes = {frozenset(n for edge in t for n in edge) for t in filtered}
    return filtered, truss_nodes


def get_k_trusses(graph: GraphBase, k: int) -> Tuple[List[EdgeSet], Set[FrozenSet[NodeId]]]:
    """
    Maximal k-trusses, one per connected component.

    Returns a list of edge sets (component order, empty ones dropped) and the
    set of their node sets. Nodes outside the (k-1)-core are discarded
    first. Only meaningful for undirected graphs.
    """
    if k < 2:
        raise ValueError(f"k-truss needs k >= 2, got {k}")
    # See https://louridas.github.io/rwa/assignments/finding-trusses/
    ignore_nodes: Set[NodeId] = set()
    _get_k_cores(graph, k - 1, ignore_nodes)
    return _get_k_trusses(graph, k, ignore_nodes)
