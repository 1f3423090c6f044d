"""FlowEditor - Single owner of the editor's graph state.

Every rendering-surface event becomes a typed command. ``dispatch``
routes it to the component that handles it, installs the resulting
snapshot as the current state, and returns the command's result:

    NodeChanges  -> Snapshot
    EdgeChanges  -> Snapshot
    Connect      -> Accept | Reject
    Drop         -> FlowNode | None
    Focus        -> Selected
    ClearFocus   -> NoSelection
    EditLabel    -> Snapshot
    Save         -> Approved | Rejected

Each command also has a direct ``on_*`` method.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence, Union

from flowedit.config.settings import EditorConfig
from flowedit.graph.changes import EdgeChange, NodeAdd, NodeChange, NodeRemove, NodeSelect
from flowedit.graph.errors import PersistError
from flowedit.graph.FlowNode import FlowNode, NodeData, Position
from flowedit.graph.ids import NodeIdAllocator
from flowedit.graph.mutations import MutationEntry, MutationLog
from flowedit.graph.placement import Bounds, PlacementMapper, Viewport
from flowedit.graph.policy import Accept, Connection, ConnectionPolicy, Decision
from flowedit.graph.relations import Snapshot
from flowedit.graph.selection import (
    NO_SELECTION,
    NoSelection,
    Selected,
    SelectionController,
    SelectionState,
)
from flowedit.graph.store import GraphStore
from flowedit.graph.validation import Approved, SaveResult, SaveValidator
from flowedit.persistence import LoggingSink, PersistSink

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class NodeChanges:
    changes: Sequence[NodeChange]


@dataclass(frozen=True)
class EdgeChanges:
    changes: Sequence[EdgeChange]


@dataclass(frozen=True)
class Connect:
    source: str
    target: str


@dataclass(frozen=True)
class Drop:
    payload_type: str | None
    screen_point: Position
    bounds: Bounds | None
    viewport: Viewport = field(default_factory=Viewport.identity)


@dataclass(frozen=True)
class Focus:
    node_id: str


@dataclass(frozen=True)
class ClearFocus:
    pass


@dataclass(frozen=True)
class EditLabel:
    text: str


@dataclass(frozen=True)
class Save:
    pass


Command = Union[NodeChanges, EdgeChanges, Connect, Drop, Focus, ClearFocus, EditLabel, Save]


class UnknownCommandError(TypeError):
    """``dispatch`` was given something that is not a known command."""


def _change_target(change: NodeChange) -> str:
    if isinstance(change, NodeAdd):
        return change.node.id
    return change.id


def _allocator_for(snapshot: Snapshot, prefix: str) -> NodeIdAllocator:
    """Build an allocator that continues past every id already in ``snapshot``."""
    allocator = NodeIdAllocator(prefix=prefix)
    for node in snapshot.nodes:
        allocator.reserve(node.id)
    return allocator


class FlowEditor:
    """State owner for one editing session.

    Args:
        config: Editor settings (node templates, default label, id prefix).
        sink: Destination for approved saves (default: LoggingSink).
        snapshot: Initial graph state (default: empty).
        allocator: Node id source. Defaults to one that continues after
            the highest id in ``snapshot``.
    """

    def __init__(
        self,
        config: EditorConfig | None = None,
        sink: PersistSink | None = None,
        snapshot: Snapshot | None = None,
        allocator: NodeIdAllocator | None = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.sink: PersistSink = sink if sink is not None else LoggingSink()
        self._store = GraphStore(snapshot)
        self._ids = allocator or _allocator_for(self._store.snapshot, self.config.id_prefix)
        self._policy = ConnectionPolicy()
        self._placement = PlacementMapper(self.config.node_types)
        self._selection_controller = SelectionController()
        self._validator = SaveValidator()
        self._selection: SelectionState = NO_SELECTION
        self._mutation_log = MutationLog()

    # ─────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> Snapshot:
        return self._store.snapshot

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def mutation_log(self) -> MutationLog:
        return self._mutation_log

    @property
    def ids(self) -> NodeIdAllocator:
        return self._ids

    def selected_node(self) -> FlowNode | None:
        """Return the focused node from the current snapshot, if any."""
        return self._selection_controller.current_selection(self.snapshot.nodes, self._selection)

    def is_dirty(self) -> bool:
        """True if there are changes since the last successful save."""
        return len(self._mutation_log) > 0

    # ─────────────────────────────────────────────────────────────────────
    # Command dispatch
    # ─────────────────────────────────────────────────────────────────────

    def dispatch(self, command: Command) -> Any:
        """Route a command to its handler and return the handler's result.

        Raises:
            UnknownCommandError: If ``command`` is not a known command type.
        """
        if isinstance(command, NodeChanges):
            return self.on_node_change(command.changes)
        elif isinstance(command, EdgeChanges):
            return self.on_edge_change(command.changes)
        elif isinstance(command, Connect):
            return self.on_connect_attempt(Connection(command.source, command.target))
        elif isinstance(command, Drop):
            return self.on_drop(
                command.payload_type, command.screen_point, command.bounds, command.viewport
            )
        elif isinstance(command, Focus):
            return self.on_node_focus(command.node_id)
        elif isinstance(command, ClearFocus):
            return self.on_focus_clear()
        elif isinstance(command, EditLabel):
            return self.on_label_edit(command.text)
        elif isinstance(command, Save):
            return self.on_save_requested()
        raise UnknownCommandError(f"Unknown command: {command!r}")

    # ─────────────────────────────────────────────────────────────────────
    # Handlers
    # ─────────────────────────────────────────────────────────────────────

    def on_node_change(self, changes: Sequence[NodeChange]) -> Snapshot:
        """Apply a node change set from the rendering surface.

        Edges left without an endpoint are dropped. If the focused node
        is removed, the focus is cleared.

        Raises:
            DuplicateIdError: If the batch adds an existing id.
        """
        changes = list(changes)
        before = self.snapshot
        after = self._store.apply_node_changes(changes)
        for change in changes:
            if isinstance(change, NodeAdd):
                self._ids.reserve(change.node.id)

        focused = self._selection
        if isinstance(focused, Selected) and after.find_node(focused.node_id) is None:
            logger.debug("Focused node %s removed; clearing focus", focused.node_id)
            self._selection = NO_SELECTION

        structural = [c for c in changes if not isinstance(c, NodeSelect)]
        if structural and after != before:
            self._record(
                "node_changes",
                ",".join(sorted({_change_target(c) for c in structural})),
                {
                    "count": len(structural),
                    "removed": [c.id for c in structural if isinstance(c, NodeRemove)],
                    "edges_pruned": before.edge_count() - after.edge_count(),
                },
            )
        return after

    def on_edge_change(self, changes: Sequence[EdgeChange]) -> Snapshot:
        before = self.snapshot
        after = self._store.apply_edge_changes(changes)
        if after.edge_count() != before.edge_count():
            self._record(
                "edge_changes",
                ",".join(sorted({e.id for e in before.edges} - {e.id for e in after.edges})),
                {"removed": before.edge_count() - after.edge_count()},
            )
        return after

    def on_connect_attempt(self, candidate: Connection) -> Decision:
        """Add an edge if the connection policy accepts it.

        Returns:
            Accept with the new edge, or Reject with the reason. On
            rejection the edge set is unchanged.
        """
        decision = self._policy.evaluate(
            candidate, self.snapshot.edges, node_ids=self.snapshot.node_ids()
        )
        if isinstance(decision, Accept):
            self._store.add_edge(decision.edge)
            self._record(
                "connect",
                candidate.source,
                {"source": candidate.source, "target": candidate.target},
            )
        else:
            logger.debug(
                "Connection %s -> %s rejected: %s",
                candidate.source,
                candidate.target,
                decision.reason,
            )
        return decision

    def on_drop(
        self,
        payload_type: str | None,
        screen_point: Position,
        bounds: Bounds | None,
        viewport: Viewport | None = None,
    ) -> FlowNode | None:
        """Create a node from a dropped template.

        Returns:
            The new node, or None when placement was aborted.

        Raises:
            PlacementError: If the viewport zoom is not positive.
            DuplicateIdError: If the allocated id is already present.
        """
        position = self._placement.place(
            payload_type, screen_point, bounds, viewport or Viewport.identity()
        )
        if position is None or payload_type is None:
            return None

        node = FlowNode(
            id=self._ids.allocate(),
            kind=payload_type,
            position=position,
            data=NodeData(label=self.config.default_label),
        )
        self._store.add_node(node)
        self._record("add_node", node.id, {"kind": node.kind, "x": position.x, "y": position.y})
        return node

    def on_node_focus(self, node_id: str) -> Selected:
        self._selection = self._selection_controller.select(node_id)
        return self._selection

    def on_focus_clear(self) -> NoSelection:
        self._selection = self._selection_controller.clear()
        return self._selection

    def on_label_edit(self, text: str) -> Snapshot:
        """Replace the focused node's label. A no-op without a focused node."""
        node = self.selected_node()
        if node is None:
            return self.snapshot
        nodes = self._selection_controller.update_label(self._selection, text, self.snapshot.nodes)
        snapshot = self._store.update_nodes(nodes)
        self._record("update_label", node.id, {"before": node.label, "after": text})
        return snapshot

    def on_save_requested(self) -> SaveResult:
        """Validate the current snapshot and hand it to the sink if approved.

        A rejected save leaves the state untouched.

        Raises:
            PersistError: If the sink fails; state is left untouched.
        """
        snapshot = self.snapshot
        result = self._validator.validate(snapshot)
        if not isinstance(result, Approved):
            logger.info("Save rejected: %s", result.reason)
            return result

        try:
            self.sink.persist(snapshot)
        except PersistError:
            logger.error("Persisting flow failed", exc_info=True)
            raise
        self._mutation_log.clear()
        return result

    def _record(self, operation: str, target_id: str, details: dict[str, Any]) -> None:
        entry = MutationEntry(operation=operation, target_id=target_id, details=details)
        self._mutation_log.append(entry)
        logger.debug("%s", entry)
