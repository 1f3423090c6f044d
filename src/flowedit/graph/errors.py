"""Exceptions raised by graph-state operations."""

from __future__ import annotations


class GraphError(Exception):
    """Base class for graph-state errors."""


class DuplicateIdError(GraphError):
    """A node was added with an id already present in the collection.

    Attributes:
        node_id: The colliding node id.
    """

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' already exists")


class PlacementError(GraphError):
    """The viewport transform cannot be inverted."""


class PersistError(Exception):
    """The persistence sink failed to store an approved snapshot."""


__all__ = ["GraphError", "DuplicateIdError", "PlacementError", "PersistError"]
