"""Data models for cluster topology snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from commresolve.exceptions import TopologyError


class Node(BaseModel):
    """A cluster member as seen by the resolver."""

    model_config = ConfigDict(frozen=True)

    id: str
    is_client: bool = False
    attributes: dict[str, Any] = Field(default_factory=dict)  # opaque to the resolver

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def is_server(self) -> bool:
        return not self.is_client


class TopologySnapshot(Sequence[Node]):
    """An immutable, ordered view of cluster members for one resolution pass.

    A node's position in the snapshot is its index: the only key used for
    set membership and oracle lookups while a pass runs.
    """

    def __init__(self, nodes: Iterable[Node]) -> None:
        self._nodes: tuple[Node, ...] = tuple(nodes)
        if not self._nodes:
            raise TopologyError("Topology snapshot must contain at least one node")

        seen: set[str] = set()
        for node in self._nodes:
            if node.id in seen:
                raise TopologyError(f"Duplicate node id in topology snapshot: '{node.id}'")
            seen.add(node.id)

    def __getitem__(self, idx):  # type: ignore[override]
        return self._nodes[idx]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"TopologySnapshot({[n.id for n in self._nodes]!r})"

    @property
    def server_count(self) -> int:
        return sum(1 for n in self._nodes if n.is_server)
