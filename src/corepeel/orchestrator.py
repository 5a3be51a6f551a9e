# ──────────────────────────────────────────────────────────────────────────────
# src/corepeel/orchestrator.py
"""
Central façade for the decompositions.

>>> import networkx as nx
>>> from corepeel.orchestrator import compute_decomposition, compute_decompositions
>>> G = nx.karate_club_graph()
>>> cores = compute_decomposition(G, "k_cores", k=3)
>>> batch = compute_decompositions(G, ["coreness_fast", "coreness_anomaly"])
"""
# -----------------------------------------------------------------------------
import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Union

import networkx as nx

from corepeel.algorithms.coreness import (
    get_coreness,
    get_coreness_anomaly,
    get_coreness_fast,
    get_k_cores,
)
from corepeel.algorithms.truss import get_k_trusses
from corepeel.graph import GraphBase, from_networkx

_LOG = logging.getLogger(__name__)

# ── registry: key → function ─────────────────────────────────────────────────
_DECOMPOSITION_REGISTRY: Dict[str, Callable[..., Any]] = {
    "k_cores":          get_k_cores,
    "coreness":         get_coreness,
    "coreness_fast":    get_coreness_fast,
    "coreness_anomaly": get_coreness_anomaly,
    "k_trusses":        get_k_trusses,
}

GraphLike = Union[GraphBase, nx.Graph]


# ── public helpers ───────────────────────────────────────────────────────────
def get_decomposition_names() -> List[str]:
    """Return all supported decomposition keys."""
    return list(_DECOMPOSITION_REGISTRY.keys())


def _lookup(name: str) -> Callable[..., Any]:
    if name not in _DECOMPOSITION_REGISTRY:
        raise ValueError(
            f"Unknown decomposition '{name}'. Available: {', '.join(get_decomposition_names())}"
        )
    return _DECOMPOSITION_REGISTRY[name]


def _as_graph(G: GraphLike) -> GraphBase:
    if isinstance(G, GraphBase):
        return G
    return from_networkx(G)


def compute_decomposition(G: GraphLike, name: str, **kwargs: Any) -> Any:
    """
    Compute a single decomposition by key.

    Parameters
    ----------
    G
        A :class:`~corepeel.graph.GraphBase` or a NetworkX graph.
    name
        One of the keys returned by :func:`get_decomposition_names`.
    **kwargs
        Passed straight to the function (``k`` for ``k_cores``/``k_trusses``,
        ``coreness`` for ``coreness_anomaly``).
    """
    fn = _lookup(name)
    return fn(_as_graph(G), **kwargs)


# ── batch runner ─────────────────────────────────────────────────────────────
def compute_decompositions(
    G: GraphLike,
    names: Iterable[str],
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    Compute several decompositions; the coreness map is computed once and
    shared with every function that accepts it.
    """
    graph = _as_graph(G)

    # 1) collect functions + signatures
    funcs = [(key, _lookup(key)) for key in names]
    sigs = {key: inspect.signature(fn).parameters for key, fn in funcs}

    # 2) run the shared helper once
    coreness = kwargs.pop("coreness", None)
    if coreness is None and any("coreness" in sig for sig in sigs.values()):
        _, coreness = get_coreness_fast(graph)

    # 3) call each function with *only* the args it accepts
    results: Dict[str, Any] = {}
    for key, fn in funcs:
        common = {"coreness": coreness, **kwargs}
        filtered = {k: v for k, v in common.items() if k in sigs[key] and v is not None}
        _LOG.debug("→ %s gets %s", key, list(filtered.keys()))
        results[key] = fn(graph, **filtered)

    return results
