"""Persistence sinks for approved snapshots.

The editor hands an approved snapshot to a ``PersistSink``. How and
where it is stored is the sink's business; a failing sink raises
``PersistError`` and the editor leaves its state untouched.

Public API
----------
- ``PersistSink`` — protocol every sink satisfies
- ``LoggingSink`` — diagnostic sink that only logs the save
- ``MemorySink`` — keeps persisted snapshots in memory
"""

from __future__ import annotations

import logging
from typing import Protocol

from flowedit.graph.errors import PersistError
from flowedit.graph.relations import Snapshot

logger = logging.getLogger(__name__)


class PersistSink(Protocol):
    def persist(self, snapshot: Snapshot) -> None:
        """Store ``snapshot``.

        Raises:
            PersistError: If the snapshot could not be stored.
        """
        ...


class LoggingSink:
    """Sink that records the save in the log and stores nothing."""

    def persist(self, snapshot: Snapshot) -> None:
        logger.info(
            "Flow saved: %d node(s), %d edge(s)",
            snapshot.node_count(),
            snapshot.edge_count(),
        )
        for edge in snapshot.edges:
            logger.debug("  %s", edge)


class MemorySink:
    """Sink that appends each persisted snapshot to ``saved``.

    Args:
        fail_with: If set, every ``persist`` call raises
            ``PersistError(fail_with)`` instead of storing.
    """

    def __init__(self, fail_with: str | None = None) -> None:
        self.saved: list[Snapshot] = []
        self.fail_with = fail_with

    def persist(self, snapshot: Snapshot) -> None:
        if self.fail_with is not None:
            raise PersistError(self.fail_with)
        self.saved.append(snapshot)

    @property
    def last(self) -> Snapshot | None:
        return self.saved[-1] if self.saved else None


__all__ = ["PersistSink", "LoggingSink", "MemorySink", "PersistError"]
