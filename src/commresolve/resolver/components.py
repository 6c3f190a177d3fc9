"""Connected-component discovery over a reachability relation.

Two nodes are linked for grouping purposes when either direction of the
oracle reports reachable, so a one-way link is enough to merge them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from commresolve.exceptions import TopologyError
from commresolve.topology.bitset import BitIndexSet
from commresolve.topology.models import Node
from commresolve.topology.oracle import ReachabilityOracle

logger = logging.getLogger("commresolve.resolver")


@dataclass
class Component:
    """A maximal group of nodes connected under the symmetrized relation."""

    members: BitIndexSet
    start_index: int
    node_count: int = 0
    server_count: int = 0

    def add(self, index: int, node: Node) -> None:
        self.members.add(index)
        self.node_count += 1
        if not node.is_client:
            self.server_count += 1

    def indices(self) -> list[int]:
        return list(self.members)


@dataclass
class SearchContext:
    """Per-call traversal state. Never shared between calls."""

    nodes: Sequence[Node]
    oracle: ReachabilityOracle
    visited: BitIndexSet

    def linked(self, i: int, j: int) -> bool:
        a, b = self.nodes[i], self.nodes[j]
        return self.oracle.reachable(a, b) or self.oracle.reachable(b, a)


def find_components(nodes: Sequence[Node], oracle: ReachabilityOracle) -> list[Component]:
    """Partition node indices into connected components.

    Components are returned in discovery order: the outer scan visits
    start indices in ascending order, so each component's ``start_index``
    is its lowest member and the list is sorted by it.

    Raises:
        TopologyError: If ``nodes`` is empty.
    """
    if not nodes:
        raise TopologyError("Cannot find components of an empty topology")

    ctx = SearchContext(nodes=nodes, oracle=oracle, visited=BitIndexSet(len(nodes)))
    components: list[Component] = []

    for start in range(len(nodes)):
        if start in ctx.visited:
            continue
        component = _grow(ctx, start)
        logger.debug(
            f"Component #{len(components)} from index {start}: "
            f"{component.node_count} node(s), {component.server_count} server(s)"
        )
        components.append(component)

    return components


def _grow(ctx: SearchContext, start: int) -> Component:
    """Collect every unvisited index linked to ``start``, directly or not."""
    size = len(ctx.nodes)
    component = Component(members=BitIndexSet(size), start_index=start)

    # Indices are marked visited when pushed, so each is pushed at most once.
    ctx.visited.add(start)
    stack = [start]

    while stack:
        idx = stack.pop()
        component.add(idx, ctx.nodes[idx])

        for other in range(size):
            if other in ctx.visited:
                continue
            if ctx.linked(idx, other):
                ctx.visited.add(other)
                stack.append(other)

    return component
