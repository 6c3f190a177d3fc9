"""Load topology scenarios from JSON files.

A scenario describes a cluster snapshot and the reachability between its
members::

    {
        "name": "split-brain",
        "nodes": [{"id": "n0"}, {"id": "n1", "client": true}],
        "reachable": [["n0", "n1"]],
        "bidirectional": [["n1", "n0"]]
    }

``reachable`` pairs are directed (source can reach target);
``bidirectional`` pairs add both directions.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import networkx as nx

from commresolve.exceptions import ScenarioError, TopologyError
from commresolve.topology.models import Node, TopologySnapshot
from commresolve.topology.oracle import GraphOracle


@dataclass
class Scenario:
    """A topology snapshot plus the directed reachability graph over it."""

    name: str
    snapshot: TopologySnapshot
    graph: nx.DiGraph

    def oracle(self) -> GraphOracle:
        return GraphOracle(self.graph)

    def get_stats(self) -> dict:
        servers = self.snapshot.server_count
        return {
            "nodes": len(self.snapshot),
            "servers": servers,
            "clients": len(self.snapshot) - servers,
            "links": self.graph.number_of_edges(),
        }


def parse_scenario(data: dict[str, Any], source: str = "") -> Scenario:
    """Build a scenario from already-decoded JSON data."""
    if not isinstance(data, dict):
        raise ScenarioError("Scenario must be a JSON object", source)

    raw_nodes = data.get("nodes")
    if not isinstance(raw_nodes, list) or not raw_nodes:
        raise ScenarioError("Scenario needs a non-empty 'nodes' list", source)

    nodes: list[Node] = []
    for entry in raw_nodes:
        if isinstance(entry, str):
            nodes.append(Node(id=entry))
        elif isinstance(entry, dict) and "id" in entry:
            attributes = entry.get("attributes", {})
            if not isinstance(attributes, dict):
                raise ScenarioError(f"attributes of node {entry['id']!r} must be an object", source)
            nodes.append(
                Node(
                    id=str(entry["id"]),
                    is_client=bool(entry.get("client", False)),
                    attributes=attributes,
                )
            )
        else:
            raise ScenarioError(f"Invalid node entry: {entry!r}", source)

    try:
        snapshot = TopologySnapshot(nodes)
    except TopologyError as e:
        raise ScenarioError(str(e), source) from e

    graph = nx.DiGraph()
    for node in snapshot:
        graph.add_node(node.id, client=node.is_client)

    def _pairs(key: str) -> list[tuple[str, str]]:
        raw = data.get(key, [])
        if not isinstance(raw, list):
            raise ScenarioError(f"'{key}' must be a list of [source, target] pairs", source)
        pairs = []
        for pair in raw:
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise ScenarioError(f"Invalid pair in '{key}': {pair!r}", source)
            a, b = str(pair[0]), str(pair[1])
            for node_id in (a, b):
                if not graph.has_node(node_id):
                    raise ScenarioError(f"Unknown node '{node_id}' in '{key}'", source)
            pairs.append((a, b))
        return pairs

    for a, b in _pairs("reachable"):
        graph.add_edge(a, b)
    for a, b in _pairs("bidirectional"):
        graph.add_edge(a, b)
        graph.add_edge(b, a)

    return Scenario(name=str(data.get("name", "")), snapshot=snapshot, graph=graph)


def load_scenario(path: str | Path) -> Scenario:
    """Load a scenario from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as e:
        raise ScenarioError("File not found", str(path)) from e
    except json.JSONDecodeError as e:
        raise ScenarioError(f"Invalid JSON: {e}", str(path)) from e

    scenario = parse_scenario(data, source=str(path))
    if not scenario.name:
        scenario.name = path.stem
    return scenario
