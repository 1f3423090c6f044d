"""FlowNode - Node representation for the message flow graph.

This module provides the core data structures of the editor:
- Position: Graph-space coordinate
- NodeData: Editable payload carried by a node
- FlowNode: A message step placed on the canvas

All types are frozen; mutations produce new instances via
``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_NODE_KIND = "textUpdater"


@dataclass(frozen=True)
class Position:
    """A point in graph space (or screen space, depending on context)."""

    x: float
    y: float

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class NodeData:
    """Editable node payload."""

    label: str = ""


@dataclass(frozen=True)
class FlowNode:
    """A node in the message flow graph.

    Attributes:
        id: Unique, immutable identifier within a snapshot.
        kind: Node template name the node was created from.
        position: Graph-space position, changed only by drag operations.
        data: Editable payload, changed only through the selection controller.
        selected: Selection flag owned by the rendering surface.
    """

    id: str
    kind: str
    position: Position
    data: NodeData = NodeData()
    selected: bool = False

    @property
    def label(self) -> str:
        return self.data.label

    def moved_to(self, position: Position) -> FlowNode:
        """Return a copy at a new position."""
        return replace(self, position=position)

    def with_label(self, label: str) -> FlowNode:
        """Return a copy whose ``data.label`` is replaced."""
        return replace(self, data=replace(self.data, label=label))

    def with_selected(self, selected: bool) -> FlowNode:
        return replace(self, selected=selected)
