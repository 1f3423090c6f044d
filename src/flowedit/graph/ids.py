"""Node id allocation."""

from __future__ import annotations

DEFAULT_ID_PREFIX = "node-"


class NodeIdAllocator:
    """Monotonic node id source.

    Ids are ``{prefix}{n}`` with ``n`` starting at ``start`` and
    increasing by one per allocation. Values are never handed out twice,
    even if the node carrying one is later removed.

    Example:
        >>> ids = NodeIdAllocator()
        >>> ids.allocate(), ids.allocate()
        ('node-1', 'node-2')
    """

    def __init__(self, prefix: str = DEFAULT_ID_PREFIX, start: int = 1) -> None:
        self._prefix = prefix
        self._next = start

    @property
    def prefix(self) -> str:
        return self._prefix

    def allocate(self) -> str:
        """Return a fresh id and advance the counter."""
        value = self._next
        self._next += 1
        return f"{self._prefix}{value}"

    def peek(self) -> str:
        """Return the id the next ``allocate()`` call will produce."""
        return f"{self._prefix}{self._next}"

    def reserve(self, node_id: str) -> None:
        """Advance the counter past ``node_id`` if it looks like one of ours.

        Ids without this prefix or without a numeric suffix are ignored.
        The counter never moves backwards.
        """
        if not node_id.startswith(self._prefix):
            return
        suffix = node_id[len(self._prefix) :]
        if suffix.isdigit():
            self._next = max(self._next, int(suffix) + 1)

    def sequence_of(self, node_id: str) -> int:
        """Extract the numeric sequence from an id this allocator produced.

        Raises:
            ValueError: If ``node_id`` does not carry this allocator's prefix.
        """
        if not node_id.startswith(self._prefix):
            raise ValueError(f"'{node_id}' was not allocated with prefix '{self._prefix}'")
        return int(node_id[len(self._prefix) :])
