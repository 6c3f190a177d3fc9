"""Communication problem resolution.

Finds the connected groups of a cluster, keeps the most valuable one and
plans the eviction of everything else once the kept group is confirmed
fully connected.

Usage:
    from commresolve.resolver import CommunicationProblemResolver, SimpleProblemContext

    ctx = SimpleProblemContext(nodes, oracle, sink)
    result = CommunicationProblemResolver().resolve(ctx)
    print(result.render())
"""

from commresolve.resolver.components import Component, find_components
from commresolve.resolver.context import (
    CommunicationProblemContext,
    EvictionSink,
    RecordingSink,
    SimpleProblemContext,
)
from commresolve.resolver.engine import CommunicationProblemResolver
from commresolve.resolver.models import ComponentSummary, ResolutionResult, ValidationPolicy
from commresolve.resolver.planner import plan_evictions
from commresolve.resolver.selector import pick_largest
from commresolve.resolver.validator import is_fully_connected

__all__ = [
    "CommunicationProblemContext",
    "CommunicationProblemResolver",
    "Component",
    "ComponentSummary",
    "EvictionSink",
    "RecordingSink",
    "ResolutionResult",
    "SimpleProblemContext",
    "ValidationPolicy",
    "find_components",
    "is_fully_connected",
    "pick_largest",
    "plan_evictions",
]
