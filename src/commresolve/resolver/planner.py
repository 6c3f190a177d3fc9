"""Turn a validated selection into an eviction list."""

from __future__ import annotations

from collections.abc import Sequence

from commresolve.resolver.components import Component
from commresolve.topology.models import Node


def plan_evictions(
    selected: Component, nodes: Sequence[Node], fully_connected: bool
) -> list[Node]:
    """Nodes outside ``selected``, in snapshot order.

    Empty unless the selection was confirmed fully connected and is a
    strict subset of the topology.
    """
    if not fully_connected or selected.node_count >= len(nodes):
        return []
    return [nodes[idx] for idx in selected.members.complement()]
