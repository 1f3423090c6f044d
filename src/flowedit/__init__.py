"""
flowedit - Visual editor core for message flow graphs

flowedit owns the graph state behind a drag-and-drop flow canvas:
message nodes, single-outgoing-edge connections, drop placement,
label editing for the focused node, and the structural check that
gates every save.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("flowedit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from flowedit.editor import FlowEditor
from flowedit.graph import FlowEdge, FlowNode, Snapshot

__all__ = [
    "__version__",
    "FlowEditor",
    "FlowNode",
    "FlowEdge",
    "Snapshot",
]
