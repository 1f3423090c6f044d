"""ConnectionPolicy - Decides whether a proposed edge may be added."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from flowedit.graph.relations import FlowEdge


@dataclass(frozen=True)
class Connection:
    """A proposed edge from ``source`` to ``target``."""

    source: str
    target: str


@dataclass(frozen=True)
class Accept:
    edge: FlowEdge

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Reject:
    reason: str

    @property
    def accepted(self) -> bool:
        return False


Decision = Union[Accept, Reject]


class ConnectionPolicy:
    """Single-outgoing-edge connection rule.

    A source node may have at most one outgoing edge; fan-in is
    unrestricted. Self-loops and cycles are not examined.
    """

    def evaluate(
        self,
        candidate: Connection,
        existing_edges: Iterable[FlowEdge],
        node_ids: set[str] | None = None,
    ) -> Decision:
        """Evaluate a proposed connection.

        Args:
            candidate: The proposed edge.
            existing_edges: Edges currently in the snapshot.
            node_ids: Ids of nodes in the snapshot. When given, candidates
                with an unknown endpoint are rejected.

        Returns:
            Accept carrying the edge to add, or Reject with a reason.
        """
        if node_ids is not None:
            for endpoint in (candidate.source, candidate.target):
                if endpoint not in node_ids:
                    return Reject(f"Node '{endpoint}' does not exist")

        for edge in existing_edges:
            if edge.source == candidate.source:
                return Reject(
                    f"Node '{candidate.source}' already has an outgoing edge to '{edge.target}'"
                )

        return Accept(FlowEdge.between(candidate.source, candidate.target))
