#!/usr/bin/env python3
"""
CLI for corepeel: run k-core / coreness / k-truss decompositions on a network.

Example:
  corepeel-cli network.edgelist --decompositions coreness_fast coreness_anomaly --out results.csv
  corepeel-cli network.edgelist -d k_trusses -k 4
"""
import argparse
import csv
import json
import logging
import sys
from typing import Any, Dict, Optional

import networkx as nx

from corepeel.graph import from_networkx
from corepeel.orchestrator import compute_decompositions, get_decomposition_names

_LOG = logging.getLogger(__name__)

# file extension → NetworkX reader
_FORMAT_READERS = {
    "edgelist": nx.read_edgelist,
    "adjlist":  nx.read_adjlist,
    "gml":      nx.read_gml,
    "graphml":  nx.read_graphml,
}

# results that are a plain node → value map
_NODE_MAPS = {"coreness_anomaly"}
_PAIR_WITH_MAP = {"coreness", "coreness_fast"}


def _infer_and_load_graph(path: str, fmt: Optional[str] = None) -> nx.Graph:
    """Load a graph with an explicit format or by file extension."""
    if fmt:
        reader = _FORMAT_READERS.get(fmt.lower())
        if reader is None:
            raise ValueError(f"Unknown format: {fmt}")
        return reader(path)
    for ext, reader in _FORMAT_READERS.items():
        if path.endswith("." + ext):
            return reader(path)
    # fallback: plain edge list
    return nx.read_edgelist(path)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_to_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def _node_maps(results: Dict[str, Any]) -> Dict[str, Dict[Any, float]]:
    maps: Dict[str, Dict[Any, float]] = {}
    for key, res in results.items():
        if key in _NODE_MAPS:
            maps[key] = res
        elif key in _PAIR_WITH_MAP:
            maps[key] = res[1]
    return maps


def _write_json(data: Dict[str, Any], out) -> None:
    json.dump(_to_jsonable(data), out, indent=2)


def _write_csv(results: Dict[str, Any], out_path: str) -> None:
    """
    CSV with rows: node, decomposition1, decomposition2, …
    Only node-keyed results (coreness maps, anomaly scores) are written.
    """
    maps = _node_maps(results)
    if not maps:
        raise ValueError("None of the requested decompositions is a per-node map; use JSON output.")
    keys = list(maps.keys())
    nodes = sorted({n for res in maps.values() for n in res})
    with open(out_path, "w", newline="") as fp:
        writer = csv.writer(fp)
        writer.writerow(["node"] + keys)
        for node in nodes:
            writer.writerow([node] + [maps[k].get(node, "") for k in keys])


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="corepeel-cli",
        description="Compute k-core, coreness and k-truss decompositions of a network.",
    )
    parser.add_argument("graph", help="Path to the graph file (edgelist, adjlist, gml, graphml)")
    parser.add_argument(
        "--format", "-f",
        choices=sorted(_FORMAT_READERS),
        default=None,
        help="Force this input format instead of guessing from the extension",
    )
    parser.add_argument(
        "--decompositions", "-d",
        nargs="+",
        required=True,
        help="Decompositions to compute. Available: " + ", ".join(get_decomposition_names()),
    )
    parser.add_argument(
        "-k",
        type=int,
        default=None,
        help="Order for k_cores / k_trusses",
    )
    parser.add_argument(
        "--out", "-o",
        default=None,
        help="Output path ending in .json or .csv (stdout JSON if omitted)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        graph = from_networkx(_infer_and_load_graph(args.graph, args.format))
    except (OSError, ValueError, nx.NetworkXError) as e:
        print(f"Failed to load graph: {e}", file=sys.stderr)
        return 1
    _LOG.info("Loaded %r", graph)

    kwargs = {} if args.k is None else {"k": args.k}
    try:
        results = compute_decompositions(graph, args.decompositions, **kwargs)
    except (ValueError, TypeError) as e:
        print(f"Decomposition failed: {e}", file=sys.stderr)
        print("Available decompositions:", ", ".join(get_decomposition_names()), file=sys.stderr)
        return 1

    if args.out:
        if args.out.endswith(".csv"):
            try:
                _write_csv(results, args.out)
            except ValueError as e:
                print(str(e), file=sys.stderr)
                return 1
        else:
            with open(args.out, "w") as fp:
                _write_json(results, fp)
        print(f"Results written to {args.out}")
    else:
        _write_json(results, sys.stdout)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
