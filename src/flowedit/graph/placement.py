"""PlacementMapper - Maps drop coordinates from screen space to graph space.

The rendering surface owns the pan/zoom transform. A graph point ``g``
is drawn at ``g * zoom + (x, y)`` relative to the canvas container, so
a drop point is mapped back by subtracting the container origin and
then inverting that transform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from flowedit.graph.errors import PlacementError
from flowedit.graph.FlowNode import Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewport:
    """Pan/zoom transform of the canvas."""

    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0

    @classmethod
    def identity(cls) -> Viewport:
        return cls()

    def to_graph(self, point: Position) -> Position:
        """Apply the inverse transform to a container-relative point.

        Raises:
            PlacementError: If ``zoom`` is not positive.
        """
        if self.zoom <= 0:
            raise PlacementError(f"Viewport zoom must be positive, got {self.zoom}")
        return Position((point.x - self.x) / self.zoom, (point.y - self.y) / self.zoom)

    def to_screen(self, point: Position) -> Position:
        return Position(point.x * self.zoom + self.x, point.y * self.zoom + self.y)


@dataclass(frozen=True)
class Bounds:
    """Bounding box of the canvas container in screen space."""

    left: float
    top: float
    width: float | None = None
    height: float | None = None

    @property
    def origin(self) -> Position:
        return Position(self.left, self.top)


def map_to_graph(screen_point: Position, container_origin: Position, viewport: Viewport) -> Position:
    """Convert a screen point into graph space.

    Example:
        >>> map_to_graph(Position(120, 80), Position(20, 60), Viewport.identity())
        Position(x=100.0, y=20.0)
    """
    return viewport.to_graph(screen_point - container_origin)


class PlacementMapper:
    """Resolves drop events into graph-space positions.

    Only payload types listed in ``known_kinds`` produce a placement;
    anything else aborts silently.
    """

    def __init__(self, known_kinds: Iterable[str]) -> None:
        self._known_kinds = frozenset(known_kinds)

    @property
    def known_kinds(self) -> frozenset[str]:
        return self._known_kinds

    def accepts(self, payload_type: str | None) -> bool:
        return bool(payload_type) and payload_type in self._known_kinds

    def place(
        self,
        payload_type: str | None,
        screen_point: Position,
        bounds: Bounds | None,
        viewport: Viewport,
    ) -> Position | None:
        """Compute where a dropped template lands.

        Returns:
            The graph-space position, or None when placement is aborted
            (no container bounds, or an empty/unrecognized payload type).
        """
        if bounds is None:
            logger.debug("Drop aborted: no container bounds")
            return None
        if not self.accepts(payload_type):
            logger.debug("Drop aborted: unrecognized payload type %r", payload_type)
            return None
        return map_to_graph(screen_point, bounds.origin, viewport)
