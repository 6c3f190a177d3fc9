"""Reachability oracles answering directional connectivity queries."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

import networkx as nx

from commresolve.topology.models import Node

logger = logging.getLogger("commresolve.oracle")


class ReachabilityOracle(ABC):
    """Abstract base for reachability oracles.

    ``reachable(a, b)`` reports whether ``a`` can currently open a
    connection to ``b``. Answers are directional and point-in-time: the
    relation is not assumed symmetric, and may change between resolution
    passes, but must stay stable while one pass runs.
    """

    @abstractmethod
    def reachable(self, a: Node, b: Node) -> bool:
        """Return True if ``a`` can reach ``b``."""
        ...


class GraphOracle(ReachabilityOracle):
    """Oracle backed by a directed graph keyed by node id.

    An edge ``a.id -> b.id`` means ``a`` can reach ``b``.
    """

    def __init__(self, graph: nx.DiGraph) -> None:
        self.graph = graph

    def reachable(self, a: Node, b: Node) -> bool:
        return self.graph.has_edge(a.id, b.id)


class CallableOracle(ReachabilityOracle):
    """Oracle delegating to a plain ``(a, b) -> bool`` function."""

    def __init__(self, func: Callable[[Node, Node], bool]) -> None:
        self.func = func

    def reachable(self, a: Node, b: Node) -> bool:
        return bool(self.func(a, b))


class ProbeOracle(ReachabilityOracle):
    """Integration adapter for network probes.

    A probe that fails with ``OSError`` (which covers socket timeouts and
    refused connections) is reported as "not reachable". Any other
    exception is a defect in the probe and propagates.
    """

    def __init__(self, probe: Callable[[Node, Node], bool]) -> None:
        self.probe = probe
        self.failures = 0

    def reachable(self, a: Node, b: Node) -> bool:
        try:
            return bool(self.probe(a, b))
        except OSError as e:
            self.failures += 1
            logger.debug(f"Probe {a.id} -> {b.id} failed, treating as unreachable: {e}")
            return False


class CountingOracle(ReachabilityOracle):
    """Wraps another oracle and counts the queries made through it."""

    def __init__(self, inner: ReachabilityOracle) -> None:
        self.inner = inner
        self.queries = 0

    def reachable(self, a: Node, b: Node) -> bool:
        self.queries += 1
        return self.inner.reachable(a, b)
