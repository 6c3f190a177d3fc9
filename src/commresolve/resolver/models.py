"""Data models for resolution passes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from commresolve.topology.models import Node


class ValidationPolicy(str, Enum):
    """How strictly the selected cluster's connectivity is confirmed."""

    DIRECTED = "directed"  # reachable(i, j) for every ordered pair (default)
    LENIENT = "lenient"  # either direction per pair; tolerates one-way links


class ComponentSummary(BaseModel):
    """A discovered component, flattened for reporting."""

    start_index: int
    indices: list[int] = Field(default_factory=list)
    node_ids: list[str] = Field(default_factory=list)
    node_count: int = 0
    server_count: int = 0


class ResolutionResult(BaseModel):
    """Outcome of one Discover -> Select -> Validate -> Plan pass."""

    policy: ValidationPolicy = ValidationPolicy.DIRECTED
    total_nodes: int = 0
    components: list[ComponentSummary] = Field(default_factory=list)
    selected: ComponentSummary | None = None
    fully_connected: bool = False
    evictions: list[Node] = Field(default_factory=list)
    applied: bool = False  # evictions were dispatched to the context
    oracle_queries: int = 0
    elapsed_ms: float = 0.0

    @property
    def eviction_ids(self) -> list[str]:
        return [n.id for n in self.evictions]

    def render(self) -> str:
        """One-line summary of the decision for logs."""
        selected = self.selected.node_count if self.selected else 0
        if self.evictions:
            verdict = f"evict {', '.join(self.eviction_ids)}"
        elif not self.fully_connected:
            verdict = "no eviction (selected cluster not fully connected)"
        else:
            verdict = "no eviction (cluster already whole)"
        return (
            f"{len(self.components)} component(s), kept {selected}/{self.total_nodes} "
            f"nodes [{self.policy.value}]: {verdict}"
        )
