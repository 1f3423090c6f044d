"""SaveValidator - Pre-save structural check of a graph snapshot.

A shallow heuristic, not reachability analysis: a graph with more than
one node is rejected when more than one node has no incoming edge,
i.e. when it looks like it has several disconnected starting points.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from flowedit.graph.FlowNode import FlowNode
from flowedit.graph.relations import Snapshot


@dataclass(frozen=True)
class Approved:
    @property
    def approved(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Save objection.

    Attributes:
        reason: User-facing message.
        rootless_ids: Ids of the nodes without an incoming edge.
    """

    reason: str
    rootless_ids: tuple[str, ...] = field(default=())

    @property
    def approved(self) -> bool:
        return False


SaveResult = Union[Approved, Rejected]


def rootless_nodes(snapshot: Snapshot) -> list[FlowNode]:
    """Return nodes no edge points at, in snapshot order."""
    targets = {e.target for e in snapshot.edges}
    return [n for n in snapshot.nodes if n.id not in targets]


class SaveValidator:
    """Approves or rejects a snapshot at save time."""

    def validate(self, snapshot: Snapshot) -> SaveResult:
        rootless = rootless_nodes(snapshot)
        if snapshot.node_count() > 1 and len(rootless) > 1:
            return Rejected(
                reason=(
                    f"{len(rootless)} nodes have no incoming edges. "
                    "Connect them before saving."
                ),
                rootless_ids=tuple(n.id for n in rootless),
            )
        return Approved()
