"""nodes.py
================
Node flavours understood by the decomposition algorithms.

Every flavour implements :class:`NodeBase`, the only capability the
algorithms rely on:

* ``get_id()``               – the node identifier (hashable, ordered)
* ``get_edges()``            – *all* edges, a neighbour may repeat
* ``get_neighbor_ids()``     – one neighbour id per edge
* ``degree()``               – number of edges (not distinct neighbours)
* ``count_ties_with_ids()``  – ties into an arbitrary id set

Flavours
--------

* :class:`SimpleNode`          – undirected, unweighted
* :class:`SimpleDirectedNode`  – in/out neighbour sets
* :class:`WeightedNode`        – edges carry a float weight
* :class:`TypedNode`           – bipartite "core"/"non-core" node with typed edges
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet, Any, Dict, Hashable, Iterable, Iterator, List, Optional, Set

__all__ = [
    "NodeId",
    "NodeBase",
    "SimpleNode",
    "SimpleDirectedNode",
    "WeightedNodeEdge",
    "WeightedNode",
    "NodeEdge",
    "TypedNode",
]

NodeId = Hashable


# ---------------------------------------------------------------------------#
# capability interface                                                       #
# ---------------------------------------------------------------------------#


class NodeBase(ABC):
    """Read-only view of a node as consumed by the peeling algorithms."""

    node_id: NodeId

    @abstractmethod
    def get_id(self) -> NodeId:
        ...

    @abstractmethod
    def get_edges(self) -> Iterator[Any]:
        """All edges of the node."""

    def get_outgoing_edges(self) -> Iterator[Any]:
        """Edges followed during a traversal."""
        return self.get_edges()

    @abstractmethod
    def get_neighbor_ids(self) -> Iterator[NodeId]:
        """Neighbour id of every edge, in :meth:`get_edges` order."""

    @abstractmethod
    def degree(self) -> int:
        ...

    @abstractmethod
    def count_ties_with_ids(self, ids: AbstractSet[NodeId]) -> int:
        """Degree of the node inside the subgraph spanned by *ids*."""

    def __hash__(self) -> int:
        return hash(self.node_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeBase):
            return NotImplemented
        return self.node_id == other.node_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.node_id!r}, degree={self.degree()})"


# ---------------------------------------------------------------------------#
# 1. simple undirected                                                       #
# ---------------------------------------------------------------------------#


class SimpleNode(NodeBase):
    """Undirected node; an edge is just the neighbour id."""

    def __init__(self, node_id: NodeId, neighbors: Iterable[NodeId] = ()) -> None:
        self.node_id = node_id
        self.neighbors: List[NodeId] = sorted(set(neighbors))

    def get_id(self) -> NodeId:
        return self.node_id

    def get_edges(self) -> Iterator[NodeId]:
        return iter(self.neighbors)

    def get_neighbor_ids(self) -> Iterator[NodeId]:
        return iter(self.neighbors)

    def degree(self) -> int:
        return len(self.neighbors)

    def count_ties_with_ids(self, ids: AbstractSet[NodeId]) -> int:
        nbrs = set(self.neighbors)
        return sum(1 for x in ids if x in nbrs)


# ---------------------------------------------------------------------------#
# 2. directed                                                                #
# ---------------------------------------------------------------------------#


class SimpleDirectedNode(NodeBase):
    """
    Directed node. Edges are the in-neighbours followed by the out-neighbours,
    so a reciprocal pair contributes two edges (and two to the degree).
    """

    def __init__(
        self,
        node_id: NodeId,
        in_neighbors: Iterable[NodeId] = (),
        out_neighbors: Iterable[NodeId] = (),
    ) -> None:
        self.node_id = node_id
        self.in_neighbors: List[NodeId] = sorted(set(in_neighbors))
        self.out_neighbors: List[NodeId] = sorted(set(out_neighbors))

    def get_id(self) -> NodeId:
        return self.node_id

    def get_edges(self) -> Iterator[NodeId]:
        yield from self.in_neighbors
        yield from self.out_neighbors

    def get_neighbor_ids(self) -> Iterator[NodeId]:
        return self.get_edges()

    def degree(self) -> int:
        return len(self.in_neighbors) + len(self.out_neighbors)

    def count_ties_with_ids(self, ids: AbstractSet[NodeId]) -> int:
        ins, outs = set(self.in_neighbors), set(self.out_neighbors)
        return sum(1 for x in ids if x in ins or x in outs)

    # direction-aware helpers ----------------------------------------------

    def get_in_neighbors(self) -> Iterator[NodeId]:
        return iter(self.in_neighbors)

    def get_out_neighbors(self) -> Iterator[NodeId]:
        return iter(self.out_neighbors)

    def has_in_neighbor(self, nid: NodeId) -> bool:
        return nid in self.in_neighbors

    def has_out_neighbor(self, nid: NodeId) -> bool:
        return nid in self.out_neighbors

    def get_in_degree(self) -> int:
        return len(self.in_neighbors)

    def get_out_degree(self) -> int:
        return len(self.out_neighbors)

    def has_no_out_neighbors_except_set(self, exclude_set: AbstractSet[NodeId]) -> bool:
        """True if every out-neighbour is in *exclude_set* (leaf test)."""
        return all(nid in exclude_set for nid in self.out_neighbors)


# ---------------------------------------------------------------------------#
# 3. weighted                                                                #
# ---------------------------------------------------------------------------#


class WeightedNodeEdge:
    __slots__ = ("target_id", "weight")

    def __init__(self, target_id: NodeId, weight: float) -> None:
        self.target_id = target_id
        self.weight = weight

    def get_neighbor_id(self) -> NodeId:
        return self.target_id

    def get_weight(self) -> float:
        return self.weight

    def __repr__(self) -> str:
        return f"WeightedNodeEdge({self.target_id!r}, {self.weight!r})"


class WeightedNode(NodeBase):
    """Node whose edges carry weights; degree still counts edges."""

    def __init__(
        self,
        node_id: NodeId,
        edges: Iterable[WeightedNodeEdge] = (),
        neighbors: Optional[Iterable[NodeId]] = None,
    ) -> None:
        self.node_id = node_id
        self.edges: List[WeightedNodeEdge] = list(edges)
        if neighbors is None:
            neighbors = (e.target_id for e in self.edges)
        self.neighbors: Set[NodeId] = set(neighbors)

    def get_id(self) -> NodeId:
        return self.node_id

    def get_edges(self) -> Iterator[WeightedNodeEdge]:
        return iter(self.edges)

    def get_neighbor_ids(self) -> Iterator[NodeId]:
        return (e.target_id for e in self.edges)

    def degree(self) -> int:
        return len(self.edges)

    def weight(self) -> float:
        """Total weight of the node's edges."""
        return sum(e.get_weight() for e in self.edges)

    def count_ties_with_ids(self, ids: AbstractSet[NodeId]) -> int:
        return sum(1 for x in ids if x in self.neighbors)


# ---------------------------------------------------------------------------#
# 4. typed (bipartite)                                                       #
# ---------------------------------------------------------------------------#


class NodeEdge:
    """Typed edge leading to ``target_id``."""

    __slots__ = ("edge_type", "target_id")

    def __init__(self, edge_type: Hashable, target_id: NodeId) -> None:
        self.edge_type = edge_type
        self.target_id = target_id

    def get_neighbor_id(self) -> NodeId:
        return self.target_id

    def __repr__(self) -> str:
        return f"NodeEdge({self.edge_type!r}, {self.target_id!r})"


class TypedNode(NodeBase):
    """
    Node of a bipartite typed graph. Core nodes only connect to non-core
    nodes and vice versa; non-core nodes carry a type (IP, URL, …).
    ``neighbors_sets`` groups neighbour ids by edge type.
    """

    def __init__(
        self,
        node_id: NodeId,
        is_core: bool,
        non_core_type: Optional[Hashable] = None,
        edges: Iterable[NodeEdge] = (),
        neighbors_sets: Optional[Dict[Hashable, Set[NodeId]]] = None,
    ) -> None:
        self.node_id = node_id
        self._is_core = is_core
        self.non_core_type = non_core_type
        self.edges: List[NodeEdge] = list(edges)
        if neighbors_sets is None:
            neighbors_sets = {}
            for e in self.edges:
                neighbors_sets.setdefault(e.edge_type, set()).add(e.target_id)
        self.neighbors_sets: Dict[Hashable, Set[NodeId]] = neighbors_sets

    def get_id(self) -> NodeId:
        return self.node_id

    def get_edges(self) -> Iterator[NodeEdge]:
        return iter(self.edges)

    def get_neighbor_ids(self) -> Iterator[NodeId]:
        return (e.target_id for e in self.edges)

    def degree(self) -> int:
        return len(self.edges)

    def count_ties_with_ids(self, ids: AbstractSet[NodeId]) -> int:
        return sum(len(nbrs & ids) for nbrs in self.neighbors_sets.values())

    def is_core(self) -> bool:
        return self._is_core

    def require_non_core_type(self) -> Hashable:
        if self.non_core_type is None:
            raise ValueError(f"Node {self.node_id} is unexpectedly a core node.")
        return self.non_core_type
