"""Snap target selection for cursor positions.

Given a cursor position, the snap system picks the best alignment target in
strict priority order:

1. Vertex: nearest permanent point or area vertex within the vertex radius
2. Edge: nearest clamped projection onto an area boundary segment
3. Grid: nearest grid intersection within the grid radius

The first kind that produces a candidate wins, regardless of distance. Ties
within a kind keep the first candidate found in scan order.
"""

import math

import structlog

from floorsketch.config import SnapConfig
from floorsketch.core.geometry import distance, project_onto_segment, segment_intersection
from floorsketch.domain import (
    Area,
    EdgeSnap,
    GridSnap,
    PermanentOrigin,
    PermanentPoint,
    Point,
    SnapResult,
    VertexSnap,
)

logger = structlog.get_logger(__name__)


class SnapSystem:
    """Resolves cursor positions against existing geometry.

    The system keeps a read-only view of the committed areas and the
    permanent snap points; callers refresh it with ``set_areas`` and
    ``set_permanent_points`` whenever the store changes.

    Example:
        >>> snap = SnapSystem()
        >>> snap.set_areas([area])
        >>> result = snap.find_snap_point(102.0, 3.0)
        >>> result.kind
        <SnapKind.VERTEX: 'vertex'>
    """

    def __init__(self, config: SnapConfig | None = None) -> None:
        self.config = config or SnapConfig()
        self._areas: list[Area] = []
        self._permanent: list[PermanentPoint] = []

    def set_areas(self, areas: list[Area]) -> None:
        """Replace the areas considered for vertex and edge snapping."""
        self._areas = list(areas)

    def set_permanent_points(self, points: list[PermanentPoint]) -> None:
        """Replace the permanent points considered for vertex snapping."""
        self._permanent = list(points)

    @property
    def permanent_points(self) -> list[PermanentPoint]:
        return list(self._permanent)

    def add_permanent_snap_point(
        self, x: float, y: float, origin: PermanentOrigin = PermanentOrigin.SNAP_POINT
    ) -> bool:
        """Remember a confirmed snap position as a permanent point.

        Args:
            x: X coordinate
            y: Y coordinate
            origin: Why the point is being kept

        Returns:
            True if added, False if a point already exists within the
            de-duplication tolerance
        """
        tolerance = self.config.permanent_dedup_tolerance
        for existing in self._permanent:
            if abs(existing.x - x) < tolerance and abs(existing.y - y) < tolerance:
                return False
        self._permanent.append(PermanentPoint(x, y, origin=origin))
        return True

    def find_snap_point(self, x: float, y: float, radius: float | None = None) -> SnapResult | None:
        """Find the best snap target for a cursor position.

        Args:
            x: Cursor x coordinate
            y: Cursor y coordinate
            radius: Overrides both the vertex and edge snap radius

        Returns:
            VertexSnap, EdgeSnap or GridSnap, or None when nothing is in range
            (the caller then uses the raw cursor position)
        """
        cursor = Point(x, y)
        vertex_radius = radius if radius is not None else self.config.vertex_snap_radius
        edge_radius = radius if radius is not None else self.config.edge_snap_radius

        vertex = self._find_vertex_snap(cursor, vertex_radius)
        if vertex is not None:
            return vertex

        edge = self._find_edge_snap(cursor, edge_radius)
        if edge is not None:
            return edge

        return self._find_grid_snap(cursor)

    def _find_vertex_snap(self, cursor: Point, radius: float) -> VertexSnap | None:
        best: VertexSnap | None = None
        best_distance = math.inf

        # Permanent points are scanned first so they win exact ties
        for permanent in self._permanent:
            d = math.hypot(permanent.x - cursor.x, permanent.y - cursor.y)
            if d <= radius and d < best_distance:
                best_distance = d
                best = VertexSnap(permanent.x, permanent.y, d)

        for area in self._areas:
            for index, vertex in enumerate(area.path):
                d = distance(cursor, vertex)
                if d <= radius and d < best_distance:
                    best_distance = d
                    best = VertexSnap(vertex.x, vertex.y, d, area_id=area.id, vertex_index=index)

        return best

    def _find_edge_snap(self, cursor: Point, radius: float) -> EdgeSnap | None:
        best: EdgeSnap | None = None
        best_distance = math.inf

        for area in self._areas:
            n = len(area.path)
            if n < 2:
                continue
            for index in range(n):
                projection = project_onto_segment(cursor, area.path[index], area.path[(index + 1) % n])
                if projection.distance <= radius and projection.distance < best_distance:
                    best_distance = projection.distance
                    best = EdgeSnap(
                        x=projection.point.x,
                        y=projection.point.y,
                        distance=projection.distance,
                        area_id=area.id,
                        edge_index=index,
                        parameter=projection.parameter,
                    )

        return best

    def _find_grid_snap(self, cursor: Point) -> GridSnap | None:
        size = self.config.grid_size
        grid = Point(round(cursor.x / size) * size, round(cursor.y / size) * size)
        d = distance(cursor, grid)
        if d <= self.config.grid_snap_radius:
            return GridSnap(grid.x, grid.y, d)
        return None

    def find_intersections(self, path: list[Point]) -> list[Point]:
        """Find where an open path crosses the edges of existing areas.

        Args:
            path: Open path (consecutive points form segments)

        Returns:
            Intersection points in path order
        """
        hits: list[Point] = []
        for i in range(len(path) - 1):
            for area in self._areas:
                n = len(area.path)
                for j in range(n):
                    hit = segment_intersection(path[i], path[i + 1], area.path[j], area.path[(j + 1) % n])
                    if hit is not None:
                        hits.append(hit)
        return hits

    def is_valid_snap(self, snap: SnapResult, path: list[Point]) -> bool:
        """Reject a snap target that would reuse a vertex already in the path.

        Snapping back onto the first vertex is allowed (that closes the path).
        """
        target = Point(snap.x, snap.y)
        tolerance = self.config.path_reuse_tolerance
        for index, vertex in enumerate(path):
            if index == 0 and len(path) >= 3:
                continue
            if distance(target, vertex) < tolerance:
                logger.debug("Snap target reuses path vertex", x=snap.x, y=snap.y, index=index)
                return False
        return True

    def configuration(self) -> dict[str, float]:
        """Current radii and grid settings."""
        return {
            "vertex_snap_radius": self.config.vertex_snap_radius,
            "edge_snap_radius": self.config.edge_snap_radius,
            "grid_size": self.config.grid_size,
            "grid_snap_radius": self.config.grid_snap_radius,
        }
