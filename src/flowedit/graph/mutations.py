"""Mutation records for FlowEditor operations.

The editor appends one entry per applied command. The log backs the
"unsaved changes" indicator and is cleared after a successful save.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4


@dataclass
class MutationEntry:
    """Single mutation operation record.

    Attributes:
        id: Unique mutation ID (UUID4).
        timestamp: When the mutation occurred.
        operation: Operation type (e.g., "add_node", "connect").
        target_id: Primary target of the mutation.
        details: Operation-specific values (new label, edge endpoints, ...).
    """

    operation: str
    target_id: str
    details: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"[{self.id[:8]}] {self.operation}({self.target_id})"


class MutationLog:
    """Append-only mutation history since the last save.

    Example:
        >>> log = MutationLog()
        >>> log.append(MutationEntry(operation="add_node", target_id="node-1"))
        >>> len(log)
        1
    """

    def __init__(self) -> None:
        self._entries: list[MutationEntry] = []

    def append(self, entry: MutationEntry) -> None:
        self._entries.append(entry)

    def iter_entries(self) -> Iterator[MutationEntry]:
        """Iterate over all entries in chronological order."""
        yield from self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def last(self) -> MutationEntry | None:
        """Return the most recent entry, or None if empty."""
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["MutationEntry", "MutationLog"]
