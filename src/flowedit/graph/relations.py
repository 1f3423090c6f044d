"""Relations - Directed edges and graph snapshots.

This module defines:
- FlowEdge: A directed connection between two message nodes
- Snapshot: The immutable (nodes, edges) pair representing graph state
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator

from flowedit.graph.FlowNode import FlowNode


def edge_id_for(source: str, target: str) -> str:
    """Build the canonical edge id for a source/target pair."""
    return f"xy-edge__{source}-{target}"


@dataclass(frozen=True)
class FlowEdge:
    """A directed edge between two nodes.

    Edges carry no data of their own. Once created they are never
    mutated (apart from the rendering surface's selection flag), only
    removed.

    Attributes:
        id: Unique edge identifier.
        source: Id of the node the edge leaves.
        target: Id of the node the edge enters.
        selected: Selection flag owned by the rendering surface.
    """

    id: str
    source: str
    target: str
    selected: bool = False

    @classmethod
    def between(cls, source: str, target: str) -> FlowEdge:
        """Create an edge with the canonical id for its endpoints."""
        return cls(id=edge_id_for(source, target), source=source, target=target)

    def with_selected(self, selected: bool) -> FlowEdge:
        return replace(self, selected=selected)

    def __str__(self) -> str:
        return f"{self.source} --> {self.target}"


@dataclass(frozen=True)
class Snapshot:
    """Graph state at one instant.

    Node order is insertion order and is preserved across mutations
    for stable rendering.
    """

    nodes: tuple[FlowNode, ...] = ()
    edges: tuple[FlowEdge, ...] = ()

    def find_node(self, node_id: str) -> FlowNode | None:
        """Find node by ID.

        Args:
            node_id: The node ID to find.

        Returns:
            The matching FlowNode, or None if not found.
        """
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}

    def outgoing(self, node_id: str) -> Iterator[FlowEdge]:
        """Iterate edges leaving ``node_id``."""
        for edge in self.edges:
            if edge.source == node_id:
                yield edge

    def incoming(self, node_id: str) -> Iterator[FlowEdge]:
        """Iterate edges entering ``node_id``."""
        for edge in self.edges:
            if edge.target == node_id:
                yield edge

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)
