"""Core coordinate types for path representation.

This module defines the fundamental geometric types used throughout floorsketch:
- Point: A 2D canvas coordinate with an optional vertex name and snap metadata
- SnapRef: Advisory record of what a point was snapped to when it was placed
- SnapKind: Enum of snap target kinds
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

# Fixed canvas scale: 8 pixels represent one foot.
PIXELS_PER_FOOT = 8.0


class SnapKind(str, Enum):
    """Kind of target a point was snapped to."""

    VERTEX = "vertex"
    EDGE = "edge"
    GRID = "grid"
    PERMANENT = "permanent"
    HELPER = "helper"


@dataclass(frozen=True, slots=True)
class SnapRef:
    """What a point was snapped to at creation time.

    This is advisory metadata only. It lets the helper system find areas the
    current path is attached to, but geometry never depends on it.

    Attributes:
        kind: Kind of snap target
        area_id: Id of the area that owned the target, if any
        index: Vertex index (vertex snaps) or edge index (edge snaps)
    """

    kind: SnapKind
    area_id: int | None = None
    index: int | None = None


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the canvas in pixel space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in pixels
        y: Y coordinate in pixels (grows downward)
        name: Vertex name within its path (e.g. "p0")
        snap_info: What the point was snapped to when placed
    """

    x: float
    y: float
    name: str | None = None
    snap_info: SnapRef | None = None

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def renamed(self, name: str | None) -> "Point":
        """Return a copy of this point with a different vertex name."""
        return replace(self, name=name)

    def translated(self, dx: float, dy: float) -> "Point":
        """Return a copy of this point moved by (dx, dy)."""
        return replace(self, x=self.x + dx, y=self.y + dy)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted vertex shape.

        Snap metadata is transient and never persisted.

        Returns:
            Dictionary with x, y and (when set) name fields
        """
        data: dict[str, Any] = {"x": self.x, "y": self.y}
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x, y and optional name fields

        Returns:
            Point instance
        """
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            name=data.get("name"),
        )


def name_path(points: list[Point]) -> list[Point]:
    """Rename path vertices sequentially as p0, p1, ...

    Args:
        points: Path vertices

    Returns:
        New list with consistently named vertices
    """
    return [p.renamed(f"p{i}") for i, p in enumerate(points)]
