"""coreness.py
================
k-core peeling and coreness.

Public API
----------

* :func:`get_k_cores`           – connected components of the k-core
* :func:`get_coreness`          – naive coreness via repeated peeling
* :func:`get_coreness_fast`     – Batagelj–Zaversnik bucket-sort coreness
* :func:`get_coreness_anomaly`  – Core-A log-rank anomaly score

Degrees are *edge counts* as reported by ``NodeBase.degree()``; a node that
lists the same neighbour twice (e.g. a reciprocal directed pair) counts
both edges.  Both coreness paths agree on such graphs.
"""
from __future__ import annotations

import heapq
import logging
import math
from typing import Dict, List, Optional, Set, Tuple

from corepeel.components import get_connected_components
from corepeel.graph import GraphBase
from corepeel.nodes import NodeId

__all__ = [
    "get_k_cores",
    "get_coreness",
    "get_coreness_fast",
    "get_coreness_anomaly",
]

_LOG = logging.getLogger(__name__)

Partition = List[List[NodeId]]


# ---------------------------------------------------------------------------#
# 1. k-core peeling                                                          #
# ---------------------------------------------------------------------------#


def _get_k_cores(graph: GraphBase, k: int, removed: Set[NodeId]) -> Partition:
    """
    Peel every node whose live degree is below *k*, adding it to *removed*
    (mutated in place, may already hold nodes from a lower *k*), and return
    the components of what survives.

    Nodes are popped in ascending id order; neighbours of a removed node are
    pushed again, so an id may sit in the queue more than once.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")

    # live degree only counts edges into nodes that are still present
    num_neighbors: Dict[NodeId, int] = {
        node.get_id(): sum(1 for nid in node.get_neighbor_ids() if nid not in removed)
        for node in graph.get_nodes_iter()
        if node.get_id() not in removed
    }
    queue: List[NodeId] = sorted(num_neighbors)

    while queue:
        node_id = heapq.heappop(queue)
        if node_id in removed or num_neighbors[node_id] >= k:
            continue
        removed.add(node_id)
        for nid in graph.get_node(node_id).get_neighbor_ids():
            if nid not in removed:
                heapq.heappush(queue, nid)
                num_neighbors[node_id] -= 1
                num_neighbors[nid] -= 1

    return get_connected_components(graph, ignore_nodes=removed)


def get_k_cores(graph: GraphBase, k: int) -> Partition:
    """Connected components of the k-core (sorted id lists)."""
    return _get_k_cores(graph, k, set())


# ---------------------------------------------------------------------------#
# 2. naive coreness                                                          #
# ---------------------------------------------------------------------------#


def get_coreness(graph: GraphBase) -> Tuple[List[Partition], Dict[NodeId, int]]:
    """
    Coreness by peeling with k = 1, 2, … until every node is gone.

    Returns the per-k partitions (index ``k - 1``) and the coreness map.
    Nodes that never survive k = 1 get coreness 0.
    """
    core_assignments: List[Partition] = []
    removed: Set[NodeId] = set()
    k = 0
    while len(removed) < graph.count_nodes():
        k += 1
        core_assignments.append(_get_k_cores(graph, k, removed))
        _LOG.debug("k=%d: %d nodes removed so far", k, len(removed))

    coreness: Dict[NodeId, int] = {}
    for i in reversed(range(k)):
        for ids in core_assignments[i]:
            for nid in ids:
                coreness.setdefault(nid, i + 1)
    for nid in graph.get_ids_iter():
        coreness.setdefault(nid, 0)
    return core_assignments, coreness


# ---------------------------------------------------------------------------#
# 3. bucket-sort coreness (Batagelj & Zaversnik, 2003)                       #
# ---------------------------------------------------------------------------#

# https://arxiv.org/abs/cs/0310049
# An O(m) Algorithm for Cores Decomposition of Networks


def _init_bin_starts(ordered_nodes: List[NodeId], degree: Dict[NodeId, int]) -> List[int]:
    """``bin_starts[d]`` is the first index in *ordered_nodes* with degree ≥ d."""
    bin_starts = [0]
    current_degree = 0
    for i, node in enumerate(ordered_nodes):
        new_degree = degree[node]
        if new_degree > current_degree:
            bin_starts.extend([i] * (new_degree - current_degree))
            current_degree = new_degree
    return bin_starts


def get_coreness_fast(graph: GraphBase) -> Tuple[List[Partition], Dict[NodeId, int]]:
    """
    Same coreness map as :func:`get_coreness` in O(n + m).

    No per-level partitions are reconstructed: the first element of the
    returned pair is always an empty list.
    """
    # initial guess is the degree; it only ever decreases
    coreness: Dict[NodeId, int] = {n.get_id(): n.degree() for n in graph.get_nodes_iter()}

    nodes: List[NodeId] = sorted(coreness, key=lambda n: (coreness[n], n))
    bin_starts = _init_bin_starts(nodes, coreness)
    node_idx: Dict[NodeId, int] = {node: i for i, node in enumerate(nodes)}

    # one entry per edge so parallel edges decrement once each
    neighbors: Dict[NodeId, List[NodeId]] = {
        n.get_id(): list(n.get_neighbor_ids()) for n in graph.get_nodes_iter()
    }

    for node_id in nodes:
        for nbr_id in neighbors[node_id]:
            nbr_coreness = coreness[nbr_id]
            if nbr_coreness > coreness[node_id]:
                # drop the back edge only, so nbr never decrements node_id
                neighbors[nbr_id].remove(node_id)
                nbr_idx = node_idx[nbr_id]
                bin_start = bin_starts[nbr_coreness]
                start_node = nodes[bin_start]

                node_idx[nbr_id], node_idx[start_node] = bin_start, nbr_idx
                nodes[nbr_idx], nodes[bin_start] = start_node, nbr_id

                bin_starts[nbr_coreness] += 1
                coreness[nbr_id] -= 1

    return [], coreness


# ---------------------------------------------------------------------------#
# 4. coreness anomaly (Core-A)                                               #
# ---------------------------------------------------------------------------#

# https://www.cs.cmu.edu/~kijungs/papers/kcoreICDM2016.pdf
# Shin et al., CoreScope: Graph Mining Using k-Core Analysis (ICDM 2016)


def _averaged_ties_ranking(scores: Dict[NodeId, int]) -> Dict[NodeId, float]:
    """
    Rank by value, highest first, starting at 1.

    Despite the name, ties are NOT averaged: tied nodes get consecutive
    ranks in id order (two nodes sharing the top value get 1 and 2, not
    1.5 each). This deviates from Core-A as published.
    """
    ordered = sorted(scores, key=lambda n: (-scores[n], n))
    return {node: float(rank) for rank, node in enumerate(ordered, 1)}


def get_coreness_anomaly(
    graph: GraphBase,
    coreness: Optional[Dict[NodeId, int]] = None,
) -> Dict[NodeId, float]:
    """|ln(rank by coreness) − ln(rank by degree)| for every node."""
    if coreness is None:
        _, coreness = get_coreness_fast(graph)
    core_ranks = _averaged_ties_ranking(coreness)
    deg_ranks = _averaged_ties_ranking({n.get_id(): n.degree() for n in graph.get_nodes_iter()})
    return {
        node: abs(math.log(core_ranks[node]) - math.log(deg_ranks[node]))
        for node in graph.get_ordered_node_ids()
    }
