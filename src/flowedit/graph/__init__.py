"""Graph module - Core graph-state data structures and rules.

Exports:
- Position, NodeData, FlowNode: Node model
- FlowEdge, Snapshot: Edge model and immutable graph state
- GraphStore: Holder of the current snapshot
- ConnectionPolicy, Connection, Accept, Reject: Connection rule
- PlacementMapper, Viewport, Bounds, map_to_graph: Drop placement
- SelectionController, NoSelection, Selected, NO_SELECTION: Focus handling
- SaveValidator, Approved, Rejected: Pre-save check
- NodeIdAllocator: Monotonic node ids
- MutationEntry, MutationLog: Unsaved-change history
"""

from flowedit.graph.errors import DuplicateIdError, GraphError, PersistError, PlacementError
from flowedit.graph.FlowNode import FlowNode, NodeData, Position
from flowedit.graph.ids import NodeIdAllocator
from flowedit.graph.mutations import MutationEntry, MutationLog
from flowedit.graph.placement import Bounds, PlacementMapper, Viewport, map_to_graph
from flowedit.graph.policy import Accept, Connection, ConnectionPolicy, Reject
from flowedit.graph.relations import FlowEdge, Snapshot
from flowedit.graph.selection import NO_SELECTION, NoSelection, Selected, SelectionController
from flowedit.graph.store import GraphStore
from flowedit.graph.validation import Approved, Rejected, SaveValidator

__all__ = [
    "Position",
    "NodeData",
    "FlowNode",
    "FlowEdge",
    "Snapshot",
    "GraphStore",
    "Connection",
    "ConnectionPolicy",
    "Accept",
    "Reject",
    "Bounds",
    "Viewport",
    "PlacementMapper",
    "map_to_graph",
    "SelectionController",
    "NoSelection",
    "Selected",
    "NO_SELECTION",
    "SaveValidator",
    "Approved",
    "Rejected",
    "NodeIdAllocator",
    "MutationEntry",
    "MutationLog",
    "GraphError",
    "DuplicateIdError",
    "PlacementError",
    "PersistError",
]
