"""Domain models for floorsketch.

This module contains the core domain models representing points, areas,
snap targets and helper points. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to the persisted area record shape
- Independent of rendering and UI details

Key classes:
- Point: A 2D canvas coordinate with optional snap metadata
- Area: A closed, labeled region with derived square footage and centroid
- AreaLabel: Canvas annotation bound to an area
- VertexSnap / EdgeSnap / GridSnap: Snap result variants
- PathProjection / PolygonProjection / PermanentProjection: Helper point
  variants
- PermanentPoint: Long-lived alignment aid
"""

from floorsketch.domain.area import Area, AreaLabel, AreaType
from floorsketch.domain.point import PIXELS_PER_FOOT, Point, SnapKind, SnapRef, name_path
from floorsketch.domain.snap import (
    EdgeSnap,
    GridSnap,
    HelperPoint,
    HelperSource,
    PathProjection,
    PermanentOrigin,
    PermanentPoint,
    PermanentProjection,
    PolygonProjection,
    SnapResult,
    VertexSnap,
)

__all__: list[str] = [
    # Constants
    "PIXELS_PER_FOOT",
    # Enums
    "AreaType",
    "HelperSource",
    "PermanentOrigin",
    "SnapKind",
    # Core types
    "Area",
    "AreaLabel",
    "EdgeSnap",
    "GridSnap",
    "HelperPoint",
    "PathProjection",
    "PermanentPoint",
    "PermanentProjection",
    "Point",
    "PolygonProjection",
    "SnapRef",
    "SnapResult",
    "VertexSnap",
    # Helpers
    "name_path",
]
