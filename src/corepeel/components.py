"""components.py
================
Connected-component partitioning used by the peeling algorithms.

Both helpers accept optional exclusion sets: excluded nodes disappear with
all their edges, excluded edges are matched in either orientation.  Edge
direction is ignored, i.e. directed graphs are split into weakly connected
components.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Dict, List, Optional, Tuple

import networkx as nx

from corepeel.graph import GraphBase
from corepeel.nodes import NodeId

__all__ = ["get_connected_components", "get_connected_components_membership"]

_LOG = logging.getLogger(__name__)

Edge = Tuple[NodeId, NodeId]


def _remaining_subgraph(
    graph: GraphBase,
    ignore_nodes: Optional[AbstractSet[NodeId]],
    ignore_edges: Optional[AbstractSet[Edge]],
) -> nx.Graph:
    ignore_nodes = ignore_nodes or set()
    ignore_edges = ignore_edges or set()
    H = nx.Graph()
    for node in graph.get_nodes_iter():
        u = node.get_id()
        if u in ignore_nodes:
            continue
        H.add_node(u)
        for v in node.get_neighbor_ids():
            if v in ignore_nodes or (u, v) in ignore_edges or (v, u) in ignore_edges:
                continue
            H.add_edge(u, v)
    return H


def get_connected_components(
    graph: GraphBase,
    ignore_nodes: Optional[AbstractSet[NodeId]] = None,
    ignore_edges: Optional[AbstractSet[Edge]] = None,
) -> List[List[NodeId]]:
    """Components as sorted id lists, ordered by their smallest member."""
    H = _remaining_subgraph(graph, ignore_nodes, ignore_edges)
    components = sorted((sorted(c) for c in nx.connected_components(H)), key=lambda c: c[0])
    _LOG.debug("%d components over %d remaining nodes", len(components), H.number_of_nodes())
    return components


def get_connected_components_membership(
    graph: GraphBase,
    ignore_nodes: Optional[AbstractSet[NodeId]] = None,
    ignore_edges: Optional[AbstractSet[Edge]] = None,
) -> Tuple[Dict[NodeId, int], int]:
    """Map every remaining node to the index of its component, plus the count."""
    components = get_connected_components(graph, ignore_nodes, ignore_edges)
    membership = {nid: idx for idx, comp in enumerate(components) for nid in comp}
    return membership, len(components)
