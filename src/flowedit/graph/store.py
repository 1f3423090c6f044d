"""GraphStore - Canonical holder of the node and edge collections.

The module-level functions are pure: they take a collection and return
a new tuple, never touching their input. ``GraphStore`` wraps them and
owns the current ``Snapshot``.
"""

from __future__ import annotations

import logging
from typing import Iterable

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
from flowedit.graph.errors import DuplicateIdError
from flowedit.graph.FlowNode import FlowNode
from flowedit.graph.relations import FlowEdge, Snapshot

logger = logging.getLogger(__name__)


def apply_node_changes(
    changes: Iterable[NodeChange], nodes: tuple[FlowNode, ...]
) -> tuple[FlowNode, ...]:
    """Apply a batch of node changes.

    Changes apply in order against a working copy. Changes naming an
    unknown node id are skipped.

    Args:
        changes: Node changes from the rendering surface.
        nodes: Current node collection.

    Returns:
        The new node collection.

    Raises:
        DuplicateIdError: If a NodeAdd names an id already present. The
            whole batch is discarded.
        TypeError: If a change is not a node change.
    """
    working = list(nodes)

    def _index_of(node_id: str) -> int | None:
        for i, node in enumerate(working):
            if node.id == node_id:
                return i
        return None

    for change in changes:
        if isinstance(change, NodeAdd):
            if _index_of(change.node.id) is not None:
                raise DuplicateIdError(change.node.id)
            working.append(change.node)
            continue

        if not isinstance(change, (NodeRemove, NodePosition, NodeSelect)):
            raise TypeError(f"Unsupported node change: {change!r}")

        i = _index_of(change.id)
        if i is None:
            logger.debug("Ignoring %s for unknown node", type(change).__name__)
            continue

        if isinstance(change, NodeRemove):
            del working[i]
        elif isinstance(change, NodePosition):
            working[i] = working[i].moved_to(change.position)
        else:
            working[i] = working[i].with_selected(change.selected)

    return tuple(working)


def apply_edge_changes(
    changes: Iterable[EdgeChange], edges: tuple[FlowEdge, ...]
) -> tuple[FlowEdge, ...]:
    """Apply a batch of edge changes. Same contract as ``apply_node_changes``."""
    working = list(edges)

    for change in changes:
        if not isinstance(change, (EdgeRemove, EdgeSelect)):
            raise TypeError(f"Unsupported edge change: {change!r}")

        i = next((k for k, e in enumerate(working) if e.id == change.id), None)
        if i is None:
            logger.debug("Ignoring %s for unknown edge", type(change).__name__)
            continue

        if isinstance(change, EdgeRemove):
            del working[i]
        else:
            working[i] = working[i].with_selected(change.selected)

    return tuple(working)


def add_node(node: FlowNode, nodes: tuple[FlowNode, ...]) -> tuple[FlowNode, ...]:
    """Append a node.

    Raises:
        DuplicateIdError: If ``node.id`` is already present.
    """
    if any(n.id == node.id for n in nodes):
        raise DuplicateIdError(node.id)
    return nodes + (node,)


def add_edge(edge: FlowEdge, edges: tuple[FlowEdge, ...]) -> tuple[FlowEdge, ...]:
    """Append an edge that has already passed the connection policy."""
    return edges + (edge,)


def prune_dangling_edges(
    nodes: tuple[FlowNode, ...], edges: tuple[FlowEdge, ...]
) -> tuple[FlowEdge, ...]:
    """Drop edges whose source or target is no longer in ``nodes``."""
    ids = {n.id for n in nodes}
    kept = tuple(e for e in edges if e.source in ids and e.target in ids)
    if len(kept) != len(edges):
        logger.debug("Pruned %d dangling edge(s)", len(edges) - len(kept))
        return kept
    return edges


class GraphStore:
    """Container for the current graph snapshot.

    Every operation computes a new snapshot and swaps it in; the
    previous snapshot object is never modified.
    """

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        self._snapshot = snapshot if snapshot is not None else Snapshot()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def nodes(self) -> tuple[FlowNode, ...]:
        return self._snapshot.nodes

    @property
    def edges(self) -> tuple[FlowEdge, ...]:
        return self._snapshot.edges

    def replace(self, snapshot: Snapshot) -> Snapshot:
        self._snapshot = snapshot
        return snapshot

    def apply_node_changes(self, changes: Iterable[NodeChange]) -> Snapshot:
        """Apply node changes, dropping any edge left without an endpoint."""
        nodes = apply_node_changes(changes, self.nodes)
        edges = prune_dangling_edges(nodes, self.edges)
        return self.replace(Snapshot(nodes=nodes, edges=edges))

    def apply_edge_changes(self, changes: Iterable[EdgeChange]) -> Snapshot:
        edges = apply_edge_changes(changes, self.edges)
        return self.replace(Snapshot(nodes=self.nodes, edges=edges))

    def add_node(self, node: FlowNode) -> Snapshot:
        return self.replace(Snapshot(nodes=add_node(node, self.nodes), edges=self.edges))

    def add_edge(self, edge: FlowEdge) -> Snapshot:
        return self.replace(Snapshot(nodes=self.nodes, edges=add_edge(edge, self.edges)))

    def update_nodes(self, nodes: tuple[FlowNode, ...]) -> Snapshot:
        """Swap in a node collection that keeps every existing id."""
        return self.replace(Snapshot(nodes=nodes, edges=self.edges))
