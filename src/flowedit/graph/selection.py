"""SelectionController - Single-focus node selection and label editing.

The focused node is modelled as a sum type, ``NoSelection`` or
``Selected(node_id)``. The controller holds only the id; the node itself
is always looked up in the current snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from flowedit.graph.FlowNode import FlowNode


@dataclass(frozen=True)
class NoSelection:
    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Selected:
    node_id: str


SelectionState = Union[NoSelection, Selected]

NO_SELECTION = NoSelection()


class SelectionController:
    """Mediates reads and writes of the focused node's editable data."""

    def select(self, node_id: str) -> Selected:
        """Focus ``node_id``, replacing any prior selection."""
        return Selected(node_id)

    def clear(self) -> NoSelection:
        return NO_SELECTION

    def current_selection(
        self, nodes: tuple[FlowNode, ...], state: SelectionState
    ) -> FlowNode | None:
        """Look up the focused node in ``nodes``.

        Returns:
            The node, or None if nothing is focused or the focused id is
            no longer present.
        """
        if isinstance(state, NoSelection):
            return None
        for node in nodes:
            if node.id == state.node_id:
                return node
        return None

    def update_label(
        self, state: SelectionState, text: str, nodes: tuple[FlowNode, ...]
    ) -> tuple[FlowNode, ...]:
        """Replace the focused node's label.

        Every other node object is carried over unchanged (same identity).
        With no selection the input collection is returned as-is.
        """
        if isinstance(state, NoSelection):
            return nodes
        return tuple(n.with_label(text) if n.id == state.node_id else n for n in nodes)
