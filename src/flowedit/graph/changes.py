"""Change sets emitted by the rendering surface.

Node changes cover add, remove, reposition and the selection flag.
Edge changes cover remove and the selection flag; edges are only ever
added after connection-policy approval, never through a change set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from flowedit.graph.FlowNode import FlowNode, Position


@dataclass(frozen=True)
class NodeAdd:
    node: FlowNode


@dataclass(frozen=True)
class NodeRemove:
    id: str


@dataclass(frozen=True)
class NodePosition:
    """Reposition from a drag. ``dragging`` is True while the drag is in flight."""

    id: str
    position: Position
    dragging: bool = False


@dataclass(frozen=True)
class NodeSelect:
    id: str
    selected: bool


@dataclass(frozen=True)
class EdgeRemove:
    id: str


@dataclass(frozen=True)
class EdgeSelect:
    id: str
    selected: bool


NodeChange = Union[NodeAdd, NodeRemove, NodePosition, NodeSelect]
EdgeChange = Union[EdgeRemove, EdgeSelect]

__all__ = [
    "NodeAdd",
    "NodeRemove",
    "NodePosition",
    "NodeSelect",
    "EdgeRemove",
    "EdgeSelect",
    "NodeChange",
    "EdgeChange",
]
