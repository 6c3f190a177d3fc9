"""The resolution pipeline: Discover -> Select -> Validate -> Plan.

Each pass works from one immutable snapshot and builds all of its state
from scratch; a resolver instance only carries configuration.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from commresolve.resolver.components import Component, find_components
from commresolve.resolver.context import CommunicationProblemContext, ContextOracle
from commresolve.resolver.models import ComponentSummary, ResolutionResult, ValidationPolicy
from commresolve.resolver.planner import plan_evictions
from commresolve.resolver.selector import pick_largest
from commresolve.resolver.validator import is_fully_connected
from commresolve.topology.models import Node, TopologySnapshot
from commresolve.topology.oracle import CountingOracle, ReachabilityOracle

if TYPE_CHECKING:
    from commresolve.config import ResolverConfig

logger = logging.getLogger("commresolve.resolver")


class CommunicationProblemResolver:
    """Decides which nodes to evict when cluster members cannot talk.

    Usage:
        resolver = CommunicationProblemResolver()
        result = resolver.resolve(ctx)  # calls ctx.kill_node() per eviction
    """

    def __init__(
        self,
        policy: ValidationPolicy = ValidationPolicy.DIRECTED,
        dry_run: bool = False,
    ) -> None:
        self.policy = ValidationPolicy(policy)
        self.dry_run = dry_run

    @classmethod
    def from_config(cls, config: ResolverConfig) -> CommunicationProblemResolver:
        return cls(policy=config.validation_policy, dry_run=config.dry_run)

    def evaluate(self, nodes: Sequence[Node], oracle: ReachabilityOracle) -> ResolutionResult:
        """Run one pass and return the decision without evicting anything.

        Raises:
            TopologyError: If ``nodes`` is empty or holds duplicate ids.
        """
        start = time.time()
        snapshot = nodes if isinstance(nodes, TopologySnapshot) else TopologySnapshot(nodes)
        counting = CountingOracle(oracle)

        components = find_components(snapshot, counting)
        selected = pick_largest(components)
        logger.debug(
            f"Selected component from index {selected.start_index} "
            f"({selected.server_count} server(s)) out of {len(components)}"
        )

        connected = is_fully_connected(selected, snapshot, counting, self.policy)
        evictions = plan_evictions(selected, snapshot, connected)

        if not connected:
            logger.warning(
                f"Selected cluster of {selected.node_count} node(s) is not fully connected "
                f"under '{self.policy.value}' policy; skipping eviction"
            )

        summaries = [summarize_component(c, snapshot) for c in components]
        return ResolutionResult(
            policy=self.policy,
            total_nodes=len(snapshot),
            components=summaries,
            selected=next(s for s, c in zip(summaries, components) if c is selected),
            fully_connected=connected,
            evictions=evictions,
            oracle_queries=counting.queries,
            elapsed_ms=round((time.time() - start) * 1000, 2),
        )

    def resolve(self, ctx: CommunicationProblemContext) -> ResolutionResult:
        """Run one pass against ``ctx`` and kill every planned node.

        The full plan is computed before the first ``kill_node`` call, so
        an oracle failure leaves the cluster untouched.
        """
        result = self.evaluate(ctx.topology_snapshot(), ContextOracle(ctx))

        if result.evictions and not self.dry_run:
            for node in result.evictions:
                ctx.kill_node(node)
            result.applied = True

        logger.info(f"Resolution pass: {result.render()}")
        return result


def summarize_component(component: Component, nodes: Sequence[Node]) -> ComponentSummary:
    indices = component.indices()
    return ComponentSummary(
        start_index=component.start_index,
        indices=indices,
        node_ids=[nodes[i].id for i in indices],
        node_count=component.node_count,
        server_count=component.server_count,
    )
