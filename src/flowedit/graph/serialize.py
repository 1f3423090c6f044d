"""Graph Serialization - Convert snapshots and change sets to and from JSON.

The JSON shapes follow the rendering surface's conventions: nodes carry
``type``, ``position`` and ``data``; change sets are lists of objects
tagged by ``type`` ("add", "remove", "position", "select").
"""

from __future__ import annotations

from typing import Any

from flowedit.graph.changes import (
    EdgeChange,
    EdgeRemove,
    EdgeSelect,
    NodeAdd,
    NodeChange,
    NodePosition,
    NodeRemove,
    NodeSelect,
)
from flowedit.graph.FlowNode import FlowNode, NodeData, Position
from flowedit.graph.placement import Bounds, Viewport
from flowedit.graph.relations import FlowEdge, Snapshot


class PayloadError(ValueError):
    """A JSON payload does not have the expected shape."""


def serialize_position(position: Position) -> dict[str, float]:
    return {"x": position.x, "y": position.y}


def serialize_node(node: FlowNode) -> dict[str, Any]:
    """Serialize a FlowNode to a JSON-compatible dict.

    Args:
        node: The node to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    return {
        "id": node.id,
        "type": node.kind,
        "position": serialize_position(node.position),
        "data": {"label": node.data.label},
        "selected": node.selected,
    }


def serialize_edge(edge: FlowEdge) -> dict[str, Any]:
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "selected": edge.selected,
    }


def serialize_snapshot(snapshot: Snapshot) -> dict[str, Any]:
    """Serialize a Snapshot to ``{"nodes": [...], "edges": [...]}``."""
    return {
        "nodes": [serialize_node(n) for n in snapshot.nodes],
        "edges": [serialize_edge(e) for e in snapshot.edges],
    }


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise PayloadError(f"expected an object, got {type(data).__name__}")
    if key not in data:
        raise PayloadError(f"'{key}' required")
    return data[key]


def _number(value: Any, name: str) -> float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"'{name}' must be a number")
    return float(value)


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise PayloadError(f"'{name}' must be a non-empty string")
    return value


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise PayloadError(f"'{name}' must be true or false")
    return value


def parse_string(data: Any, key: str) -> str:
    """Return ``data[key]`` as a non-empty string."""
    return _string(_require(data, key), key)


def parse_optional_string(data: Any, key: str) -> str | None:
    """Like parse_string, but a missing, null or empty value gives None."""
    value = data.get(key) if isinstance(data, dict) else None
    if value is None or value == "":
        return None
    return _string(value, key)


def parse_point(data: Any) -> Position:
    """Parse ``{"x": .., "y": ..}`` into a Position."""
    return Position(_number(_require(data, "x"), "x"), _number(_require(data, "y"), "y"))


def parse_viewport(data: Any) -> Viewport:
    """Parse a viewport; missing keys fall back to the identity transform."""
    if data is None:
        return Viewport.identity()
    if not isinstance(data, dict):
        raise PayloadError("'viewport' must be an object")
    return Viewport(
        x=_number(data.get("x", 0.0), "viewport.x"),
        y=_number(data.get("y", 0.0), "viewport.y"),
        zoom=_number(data.get("zoom", 1.0), "viewport.zoom"),
    )


def parse_bounds(data: Any) -> Bounds | None:
    """Parse container bounds. ``None`` means the container is not mounted."""
    if data is None:
        return None
    width = data.get("width") if isinstance(data, dict) else None
    height = data.get("height") if isinstance(data, dict) else None
    return Bounds(
        left=_number(_require(data, "left"), "bounds.left"),
        top=_number(_require(data, "top"), "bounds.top"),
        width=None if width is None else _number(width, "bounds.width"),
        height=None if height is None else _number(height, "bounds.height"),
    )


def parse_node(data: Any) -> FlowNode:
    node_data = data.get("data") if isinstance(data, dict) else None
    label = node_data.get("label", "") if isinstance(node_data, dict) else ""
    if not isinstance(label, str):
        raise PayloadError("'data.label' must be a string")
    return FlowNode(
        id=_string(_require(data, "id"), "id"),
        kind=_string(_require(data, "type"), "type"),
        position=parse_point(_require(data, "position")),
        data=NodeData(label=label),
        selected=_bool(data.get("selected", False), "selected"),
    )


def parse_node_change(data: Any) -> NodeChange:
    """Parse one node change object.

    Raises:
        PayloadError: On an unknown ``type`` or missing fields.
    """
    kind = _require(data, "type")
    if kind == "add":
        return NodeAdd(parse_node(_require(data, "item")))
    if kind == "remove":
        return NodeRemove(_string(_require(data, "id"), "id"))
    if kind == "position":
        position = data.get("position")
        if position is None:
            # Drag start/end notifications carry no position
            raise PayloadError("'position' required for position change")
        return NodePosition(
            id=_string(_require(data, "id"), "id"),
            position=parse_point(position),
            dragging=_bool(data.get("dragging", False), "dragging"),
        )
    if kind == "select":
        return NodeSelect(
            id=_string(_require(data, "id"), "id"),
            selected=_bool(_require(data, "selected"), "selected"),
        )
    raise PayloadError(f"Unknown node change type: {kind!r}")


def parse_edge_change(data: Any) -> EdgeChange:
    kind = _require(data, "type")
    if kind == "remove":
        return EdgeRemove(_string(_require(data, "id"), "id"))
    if kind == "select":
        return EdgeSelect(
            id=_string(_require(data, "id"), "id"),
            selected=_bool(_require(data, "selected"), "selected"),
        )
    raise PayloadError(f"Unknown edge change type: {kind!r}")


def parse_changes(data: Any, parse_one) -> list:
    """Parse ``{"changes": [...]}`` with ``parse_one`` applied per item."""
    changes = _require(data, "changes")
    if not isinstance(changes, list):
        raise PayloadError("'changes' must be a list")
    return [parse_one(item) for item in changes]
