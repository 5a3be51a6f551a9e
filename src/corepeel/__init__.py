"""corepeel: k-core, coreness and k-truss decompositions."""

from corepeel.algorithms.coreness import (
    get_coreness,
    get_coreness_anomaly,
    get_coreness_fast,
    get_k_cores,
)
from corepeel.algorithms.truss import get_k_trusses
from corepeel.graph import Graph, GraphBase, TypedGraph, from_edges, from_networkx

__version__ = "0.1.0"
