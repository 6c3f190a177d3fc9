"""Problem context: the resolver's view of the surrounding cluster."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from commresolve.topology.models import Node
from commresolve.topology.oracle import ReachabilityOracle


class EvictionSink(ABC):
    """Receives the nodes a resolution pass decided to remove.

    ``evict`` is called once per node. It must be idempotent and safe to
    call for a node that has already left the cluster.
    """

    @abstractmethod
    def evict(self, node: Node) -> None:
        ...


class RecordingSink(EvictionSink):
    """Collects evicted nodes in call order."""

    def __init__(self) -> None:
        self.evicted: list[Node] = []

    def evict(self, node: Node) -> None:
        self.evicted.append(node)


class CommunicationProblemContext(ABC):
    """Everything a resolver needs from the cluster for one pass."""

    @abstractmethod
    def topology_snapshot(self) -> Sequence[Node]:
        """Current cluster members, in a fixed order for this pass."""
        ...

    @abstractmethod
    def connection_available(self, a: Node, b: Node) -> bool:
        """Whether ``a`` can currently connect to ``b``."""
        ...

    @abstractmethod
    def kill_node(self, node: Node) -> None:
        """Remove ``node`` from the cluster."""
        ...


class SimpleProblemContext(CommunicationProblemContext):
    """Context assembled from a node list, an oracle and a sink."""

    def __init__(
        self,
        nodes: Sequence[Node],
        oracle: ReachabilityOracle,
        sink: EvictionSink | None = None,
    ) -> None:
        self.nodes = list(nodes)
        self.oracle = oracle
        self.sink = sink or RecordingSink()

    def topology_snapshot(self) -> Sequence[Node]:
        return self.nodes

    def connection_available(self, a: Node, b: Node) -> bool:
        return self.oracle.reachable(a, b)

    def kill_node(self, node: Node) -> None:
        self.sink.evict(node)


class ContextOracle(ReachabilityOracle):
    """Exposes a context's ``connection_available`` as an oracle."""

    def __init__(self, ctx: CommunicationProblemContext) -> None:
        self.ctx = ctx

    def reachable(self, a: Node, b: Node) -> bool:
        return self.ctx.connection_available(a, b)
