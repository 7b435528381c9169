"""Snap targets and alignment helper point types.

Snap results and helper points are tagged variants: each kind is its own
frozen dataclass with a class-level tag, so consumers can dispatch with
``match``/``isinstance`` instead of string comparisons.

- VertexSnap / EdgeSnap / GridSnap: result of resolving a cursor position
- PathProjection / PolygonProjection / PermanentProjection:
  transient alignment guides regenerated as the path changes
- PermanentPoint: long-lived alignment aid (e.g. vertices exposed by an
  edge deletion)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from floorsketch.domain.point import Point, SnapKind, SnapRef


@dataclass(frozen=True, slots=True)
class VertexSnap:
    """Snap onto an existing area vertex or a permanent point.

    Attributes:
        x: Snapped x coordinate
        y: Snapped y coordinate
        distance: Distance from the cursor to the target
        area_id: Owning area (None for permanent points)
        vertex_index: Index of the vertex within the area path
    """

    kind: ClassVar[SnapKind] = SnapKind.VERTEX
    confidence: ClassVar[float] = 1.0

    x: float
    y: float
    distance: float
    area_id: int | None = None
    vertex_index: int | None = None

    @property
    def from_permanent(self) -> bool:
        """True if the target was a permanent point rather than an area vertex."""
        return self.area_id is None

    def to_ref(self) -> SnapRef:
        kind = SnapKind.PERMANENT if self.from_permanent else SnapKind.VERTEX
        return SnapRef(kind=kind, area_id=self.area_id, index=self.vertex_index)

    def to_point(self) -> Point:
        return Point(self.x, self.y, snap_info=self.to_ref())


@dataclass(frozen=True, slots=True)
class EdgeSnap:
    """Snap onto the nearest point of an area boundary segment.

    Attributes:
        x: Projected x coordinate
        y: Projected y coordinate
        distance: Distance from the cursor to the projection
        area_id: Owning area
        edge_index: Index of the segment start vertex
        parameter: Clamped projection parameter in [0, 1]
    """

    kind: ClassVar[SnapKind] = SnapKind.EDGE
    confidence: ClassVar[float] = 0.8

    x: float
    y: float
    distance: float
    area_id: int
    edge_index: int
    parameter: float

    def to_ref(self) -> SnapRef:
        return SnapRef(kind=SnapKind.EDGE, area_id=self.area_id, index=self.edge_index)

    def to_point(self) -> Point:
        return Point(self.x, self.y, snap_info=self.to_ref())


@dataclass(frozen=True, slots=True)
class GridSnap:
    """Snap onto the nearest grid intersection."""

    kind: ClassVar[SnapKind] = SnapKind.GRID
    confidence: ClassVar[float] = 0.5

    x: float
    y: float
    distance: float

    def to_ref(self) -> SnapRef:
        return SnapRef(kind=SnapKind.GRID)

    def to_point(self) -> Point:
        return Point(self.x, self.y, snap_info=self.to_ref())


SnapResult = VertexSnap | EdgeSnap | GridSnap


class HelperSource(str, Enum):
    """Where a helper point was derived from."""

    CURRENT_PATH = "current_path"
    COMPLETED_POLYGON = "completed_polygon"
    PERMANENT = "permanent"


@dataclass(frozen=True, slots=True)
class PathProjection:
    """Axis-aligned projection between the last point and a prior path point."""

    source: ClassVar[HelperSource] = HelperSource.CURRENT_PATH
    from_permanent: ClassVar[bool] = False

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PolygonProjection:
    """Axis-aligned projection between the last point and a relevant area vertex."""

    source: ClassVar[HelperSource] = HelperSource.COMPLETED_POLYGON
    from_permanent: ClassVar[bool] = False

    x: float
    y: float
    area_id: int


@dataclass(frozen=True, slots=True)
class PermanentProjection:
    """Axis-aligned projection between the last point and a permanent point."""

    source: ClassVar[HelperSource] = HelperSource.PERMANENT
    from_permanent: ClassVar[bool] = True

    x: float
    y: float


HelperPoint = PathProjection | PolygonProjection | PermanentProjection


class PermanentOrigin(str, Enum):
    """Why a permanent point exists."""

    EDGE_DELETION = "edge_deletion"
    SNAP_POINT = "snap_point"
    COMPLETED_PATH = "completed_path"


@dataclass(frozen=True, slots=True)
class PermanentPoint:
    """Alignment aid that survives across drawing sessions until cleared.

    Attributes:
        x: X coordinate
        y: Y coordinate
        origin: Why the point was added
        group_id: Id shared by points added together (for bulk removal)
        original_name: Vertex name the point had in its source path
    """

    x: float
    y: float
    origin: PermanentOrigin = PermanentOrigin.SNAP_POINT
    group_id: int | None = None
    original_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "source": self.origin.value,
            "pathId": self.group_id,
            "originalName": self.original_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermanentPoint":
        group = data.get("pathId")
        name = data.get("originalName")
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            origin=PermanentOrigin(data.get("source", PermanentOrigin.SNAP_POINT.value)),
            group_id=int(group) if group is not None else None,
            original_name=str(name) if name is not None else None,
        )
