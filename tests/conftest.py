"""Shared test fixtures for CommResolve."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from pathlib import Path

import networkx as nx
import pytest

from commresolve.topology.models import Node
from commresolve.topology.oracle import GraphOracle

OracleFactory = Callable[..., GraphOracle]


@pytest.fixture
def five_nodes() -> list[Node]:
    """Nodes 0-4; nodes 2 and 4 are clients, the rest servers."""
    return [
        Node(id="n0"),
        Node(id="n1"),
        Node(id="n2", is_client=True),
        Node(id="n3"),
        Node(id="n4", is_client=True),
    ]


@pytest.fixture
def make_oracle() -> OracleFactory:
    """Build a GraphOracle from directed index pairs.

    ``make_oracle(nodes, directed=[(0, 1)], mutual=[(1, 2)])``
    """

    def _make(
        nodes: list[Node],
        directed: Iterable[tuple[int, int]] = (),
        mutual: Iterable[tuple[int, int]] = (),
    ) -> GraphOracle:
        graph = nx.DiGraph()
        graph.add_nodes_from(n.id for n in nodes)
        for a, b in directed:
            graph.add_edge(nodes[a].id, nodes[b].id)
        for a, b in mutual:
            graph.add_edge(nodes[a].id, nodes[b].id)
            graph.add_edge(nodes[b].id, nodes[a].id)
        return GraphOracle(graph)

    return _make


@pytest.fixture
def full_mesh(five_nodes: list[Node], make_oracle: OracleFactory) -> GraphOracle:
    """Every node reaches every other node in both directions."""
    pairs = [(i, j) for i in range(5) for j in range(5) if i != j]
    return make_oracle(five_nodes, directed=pairs)


@pytest.fixture
def split_brain_file(tmp_path: Path) -> Path:
    """A scenario file where {n0, n1, n2} is a clique and n3, n4 are cut off."""
    data = {
        "name": "split-brain",
        "nodes": [
            {"id": "n0"},
            {"id": "n1"},
            {"id": "n2", "client": True},
            {"id": "n3"},
            {"id": "n4", "client": True},
        ],
        "bidirectional": [["n0", "n1"], ["n1", "n2"], ["n0", "n2"]],
    }
    path = tmp_path / "split.json"
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def one_way_file(tmp_path: Path) -> Path:
    """Same grouping as split-brain, but n2 cannot reach n1."""
    data = {
        "nodes": [
            {"id": "n0"},
            {"id": "n1"},
            {"id": "n2", "client": True},
            {"id": "n3"},
            {"id": "n4", "client": True},
        ],
        "bidirectional": [["n0", "n1"], ["n0", "n2"]],
        "reachable": [["n1", "n2"]],
    }
    path = tmp_path / "one_way.json"
    path.write_text(json.dumps(data))
    return path
