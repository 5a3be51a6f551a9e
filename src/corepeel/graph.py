"""graph.py
================
Read-only graph views over :mod:`corepeel.nodes` plus two builders.

The algorithms only use :class:`GraphBase`; they never mutate it.  Use
:func:`from_networkx` to wrap an existing NetworkX graph, or
:func:`from_edges` for a plain edge list.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import networkx as nx

from corepeel.nodes import (
    NodeBase,
    NodeEdge,
    NodeId,
    SimpleDirectedNode,
    SimpleNode,
    TypedNode,
    WeightedNode,
    WeightedNodeEdge,
)

__all__ = ["GraphBase", "Graph", "TypedGraph", "from_edges", "from_networkx"]

_LOG = logging.getLogger(__name__)


class GraphBase(ABC):
    """Minimal read-only graph view."""

    @abstractmethod
    def get_node(self, node_id: NodeId) -> NodeBase:
        """Return the node; absent ids raise :class:`KeyError`."""

    @abstractmethod
    def get_nodes_iter(self) -> Iterator[NodeBase]:
        ...

    def get_ids_iter(self) -> Iterator[NodeId]:
        return (n.get_id() for n in self.get_nodes_iter())

    def get_ordered_node_ids(self) -> List[NodeId]:
        return sorted(self.get_ids_iter())

    @abstractmethod
    def has_node(self, node_id: NodeId) -> bool:
        ...

    @abstractmethod
    def count_nodes(self) -> int:
        ...

    def count_edges(self) -> int:
        """Sum of node degrees (each undirected edge is seen from both ends)."""
        return sum(n.degree() for n in self.get_nodes_iter())


class Graph(GraphBase):
    """Graph backed by an ``{id: node}`` mapping of any node flavour."""

    def __init__(self, nodes: Mapping[NodeId, NodeBase]) -> None:
        self.nodes: Dict[NodeId, NodeBase] = dict(nodes)

    def get_node(self, node_id: NodeId) -> NodeBase:
        return self.nodes[node_id]

    def get_nodes_iter(self) -> Iterator[NodeBase]:
        return iter(self.nodes.values())

    def get_ids_iter(self) -> Iterator[NodeId]:
        return iter(self.nodes)

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self.nodes

    def count_nodes(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={self.count_nodes()}, edges={self.count_edges()})"


class TypedGraph(Graph):
    """
    Bipartite graph of "core" and "non-core" nodes. Only core <-> non-core
    edges exist; ``core_ids`` / ``non_core_ids`` list the two sides.
    """

    def __init__(
        self,
        nodes: Mapping[NodeId, TypedNode],
        core_ids: Iterable[NodeId],
        non_core_ids: Iterable[NodeId],
    ) -> None:
        super().__init__(nodes)
        self.core_ids: List[NodeId] = list(core_ids)
        self.non_core_ids: List[NodeId] = list(non_core_ids)

    def get_core_ids(self) -> List[NodeId]:
        return self.core_ids

    def get_non_core_ids(self) -> List[NodeId]:
        return self.non_core_ids


# ---------------------------------------------------------------------------#
# builders                                                                   #
# ---------------------------------------------------------------------------#


def from_edges(
    edges: Iterable[Tuple],
    *,
    nodes: Iterable[NodeId] = (),
    directed: bool = False,
    weighted: bool = False,
) -> Graph:
    """
    Build a :class:`Graph` from ``(u, v)`` or, when *weighted*, ``(u, v, w)``
    tuples. Extra *nodes* are added as isolates.
    """
    G: nx.Graph = nx.DiGraph() if directed else nx.Graph()
    G.add_nodes_from(nodes)
    if weighted:
        G.add_weighted_edges_from(edges)
    else:
        G.add_edges_from(edges)
    return from_networkx(G, weighted=weighted)


def _simple_nodes(G: nx.Graph) -> Dict[NodeId, NodeBase]:
    return {n: SimpleNode(n, G.neighbors(n)) for n in G.nodes()}


def _directed_nodes(G: nx.DiGraph) -> Dict[NodeId, NodeBase]:
    return {
        n: SimpleDirectedNode(n, G.predecessors(n), G.successors(n))
        for n in G.nodes()
    }


def _incident_edges(G: nx.Graph, n: NodeId, attr: str, default) -> List[Tuple]:
    """``(n, neighbour, value)`` for every edge at *n*; both directions on a DiGraph."""
    if not G.is_directed():
        return list(G.edges(n, data=attr, default=default))
    ins = [(n, u, val) for u, _, val in G.in_edges(n, data=attr, default=default)]
    return ins + list(G.out_edges(n, data=attr, default=default))


def _weighted_nodes(G: nx.Graph) -> Dict[NodeId, NodeBase]:
    nodes: Dict[NodeId, NodeBase] = {}
    for n in G.nodes():
        adj = _incident_edges(G, n, "weight", 1.0)
        nodes[n] = WeightedNode(n, [WeightedNodeEdge(v, float(w)) for _, v, w in adj])
    return nodes


def _typed_graph(G: nx.Graph) -> TypedGraph:
    core_ids: List[NodeId] = []
    non_core_ids: List[NodeId] = []
    nodes: Dict[NodeId, TypedNode] = {}
    for n, data in G.nodes(data=True):
        is_core = data.get("bipartite", 0) == 0
        (core_ids if is_core else non_core_ids).append(n)
        edges = [NodeEdge(etype, v) for _, v, etype in _incident_edges(G, n, "type", 0)]
        nodes[n] = TypedNode(n, is_core, None if is_core else data.get("type"), edges)
    return TypedGraph(nodes, core_ids, non_core_ids)


def from_networkx(G: nx.Graph, *, weighted: Optional[bool] = None) -> Graph:
    """
    Wrap a NetworkX graph, choosing the node flavour from its contents:

    * a ``bipartite`` node attribute → :class:`TypedGraph` of :class:`TypedNode`
    * *weighted* (default: any edge has a ``weight``) → :class:`WeightedNode`
    * ``G.is_directed()`` → :class:`SimpleDirectedNode`
    * otherwise → :class:`SimpleNode`
    """
    if G.is_multigraph():
        raise ValueError("Multigraphs are not supported; collapse parallel edges first.")
    if any("bipartite" in data for _, data in G.nodes(data=True)):
        _LOG.debug("Building typed graph from %d nodes", G.number_of_nodes())
        return _typed_graph(G)
    if weighted is None:
        weighted = any("weight" in data for _, _, data in G.edges(data=True))
    if weighted:
        nodes = _weighted_nodes(G)
    elif G.is_directed():
        nodes = _directed_nodes(G)
    else:
        nodes = _simple_nodes(G)
    _LOG.debug("Built %s graph with %d nodes", "directed" if G.is_directed() else "undirected", len(nodes))
    return Graph(nodes)
