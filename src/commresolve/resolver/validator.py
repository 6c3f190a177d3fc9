"""Confirm that a selected component is fully connected."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from commresolve.resolver.components import Component
from commresolve.resolver.models import ValidationPolicy
from commresolve.topology.models import Node
from commresolve.topology.oracle import ReachabilityOracle

logger = logging.getLogger("commresolve.resolver")


def is_fully_connected(
    selected: Component,
    nodes: Sequence[Node],
    oracle: ReachabilityOracle,
    policy: ValidationPolicy | str = ValidationPolicy.DIRECTED,
) -> bool:
    """Check every pair of members for a direct link.

    Discovery accepts paths through intermediate nodes; this check does
    not. Each member ``i`` must reach every other member ``j`` directly.
    Under ``DIRECTED`` that means ``reachable(i, j)`` for every ordered pair,
    so both directions of every link are confirmed. Under ``LENIENT`` a pair
    passes if either direction holds.

    Members are compared by absolute node index, however sparse the
    selection is within the snapshot.
    """
    policy = ValidationPolicy(policy)
    members = selected.indices()

    for i in members:
        a = nodes[i]
        for j in members:
            if i == j:
                continue
            b = nodes[j]
            if oracle.reachable(a, b):
                continue
            if policy is ValidationPolicy.LENIENT and oracle.reachable(b, a):
                continue
            logger.debug(f"Connectivity check failed: {a.id} cannot reach {b.id}")
            return False

    return True
