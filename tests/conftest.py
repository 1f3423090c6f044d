"""Pytest fixtures shared across the flowedit test suite."""

import pytest

from flowedit.config import EditorConfig
from flowedit.editor import FlowEditor
from flowedit.graph import FlowEdge, Position, Snapshot
from flowedit.graph.placement import Bounds, Viewport
from flowedit.persistence import MemorySink
from graph_test_helpers import make_node


@pytest.fixture
def three_nodes():
    """Three unconnected nodes 1, 2, 3."""
    return (
        make_node("node-1", "Hello", 0, 0),
        make_node("node-2", "How can I help?", 200, 0),
        make_node("node-3", "Goodbye", 400, 0),
    )


@pytest.fixture
def chain_snapshot(three_nodes):
    """node-1 -> node-2 -> node-3."""
    return Snapshot(
        nodes=three_nodes,
        edges=(FlowEdge.between("node-1", "node-2"), FlowEdge.between("node-2", "node-3")),
    )


@pytest.fixture
def sink():
    """In-memory persistence sink."""
    return MemorySink()


@pytest.fixture
def editor(sink):
    """Fresh editor with default settings and an in-memory sink."""
    return FlowEditor(config=EditorConfig(), sink=sink)


@pytest.fixture
def canvas_bounds():
    """Canvas container whose top-left corner is at (20, 60)."""
    return Bounds(left=20, top=60, width=800, height=600)


@pytest.fixture
def drop(editor, canvas_bounds):
    """Drop a message template on the editor canvas at a screen point."""

    def _drop(x: float = 120, y: float = 80, kind: str = "textUpdater", viewport=None):
        return editor.on_drop(kind, Position(x, y), canvas_bounds, viewport or Viewport())

    return _drop
