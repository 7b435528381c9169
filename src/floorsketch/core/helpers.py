"""Alignment helper point generation.

Helper points are horizontal/vertical projections of the last placed point L
against other geometry. They let the user place the next vertex in
rectilinear alignment with:

- every earlier point of the current path
- the path's own starting edge (p0.x, p1.y)
- vertices of *relevant* areas: areas a path point was snapped to, or areas
  with a vertex within the proximity threshold of L
- permanent points (vertices exposed by an edge deletion, confirmed snaps)

Limiting area projections to relevant areas keeps the helper count bounded on
large plans. The temporary set is rebuilt from scratch every time the path
changes; permanent points survive until explicitly cleared.
"""

import math

import structlog

from floorsketch.config import HelperConfig
from floorsketch.core.geometry import coordinate_key, distance
from floorsketch.domain import (
    Area,
    HelperPoint,
    PathProjection,
    PermanentOrigin,
    PermanentPoint,
    PermanentProjection,
    Point,
    PolygonProjection,
    SnapKind,
    SnapRef,
)

logger = structlog.get_logger(__name__)


class HelperPointSystem:
    """Maintains temporary and permanent alignment helper points."""

    def __init__(self, config: HelperConfig | None = None) -> None:
        self.config = config or HelperConfig()
        self._helpers: dict[tuple[int, int], HelperPoint] = {}
        self._permanent: list[PermanentPoint] = []

    @property
    def helper_points(self) -> list[HelperPoint]:
        """Current temporary helper set, in insertion order."""
        return list(self._helpers.values())

    @property
    def permanent_points(self) -> list[PermanentPoint]:
        return list(self._permanent)

    def update_helper_points(self, current_path: list[Point], areas: list[Area]) -> list[HelperPoint]:
        """Regenerate the temporary helper set for the current path.

        Args:
            current_path: Open path being drawn
            areas: Committed areas

        Returns:
            The new helper set
        """
        self._helpers = {}
        if not current_path:
            return []

        last = current_path[-1]

        for prior in current_path[:-1]:
            self._put(PathProjection(prior.x, last.y))
            self._put(PathProjection(last.x, prior.y))

        if len(current_path) >= 2:
            first, second = current_path[0], current_path[1]
            self._put(PathProjection(first.x, second.y))

        for area in self._relevant_areas(current_path, areas):
            for vertex in area.path:
                self._put(PolygonProjection(vertex.x, last.y, area.id))
                self._put(PolygonProjection(last.x, vertex.y, area.id))

        for permanent in self._permanent:
            self._put(PermanentProjection(permanent.x, last.y))
            self._put(PermanentProjection(last.x, permanent.y))

        logger.debug(
            "Helper points updated",
            path_points=len(current_path),
            helpers=len(self._helpers),
        )
        return self.helper_points

    def _put(self, helper: HelperPoint) -> None:
        # Later writers replace earlier ones at the same key
        self._helpers[coordinate_key(Point(helper.x, helper.y))] = helper

    def _relevant_areas(self, current_path: list[Point], areas: list[Area]) -> list[Area]:
        referenced = {
            p.snap_info.area_id
            for p in current_path
            if p.snap_info is not None and p.snap_info.area_id is not None
        }
        last = current_path[-1]
        threshold = self.config.proximity_threshold

        relevant = []
        for area in areas:
            if area.id in referenced or any(distance(v, last) < threshold for v in area.path):
                relevant.append(area)
        return relevant

    def find_nearest_helper(self, x: float, y: float, radius: float | None = None) -> Point | None:
        """Find the helper position to use for a cursor position.

        Temporary helpers are searched first; permanent points are only
        considered when no temporary helper is in range.

        Args:
            x: Cursor x coordinate
            y: Cursor y coordinate
            radius: Search radius (defaults to the configured helper radius)

        Returns:
            Point tagged with a helper or permanent SnapRef, or None
        """
        cursor = Point(x, y)
        limit = radius if radius is not None else self.config.helper_snap_radius

        best: HelperPoint | None = None
        best_distance = math.inf
        for helper in self._helpers.values():
            d = distance(cursor, Point(helper.x, helper.y))
            if d <= limit and d < best_distance:
                best, best_distance = helper, d
        if best is not None:
            kind = SnapKind.PERMANENT if best.from_permanent else SnapKind.HELPER
            area_id = best.area_id if isinstance(best, PolygonProjection) else None
            return Point(best.x, best.y, snap_info=SnapRef(kind=kind, area_id=area_id))

        nearest: PermanentPoint | None = None
        for permanent in self._permanent:
            d = distance(cursor, Point(permanent.x, permanent.y))
            if d <= limit and d < best_distance:
                nearest, best_distance = permanent, d
        if nearest is not None:
            return Point(nearest.x, nearest.y, snap_info=SnapRef(kind=SnapKind.PERMANENT))

        return None

    def add_permanent_points(
        self,
        points: list[Point],
        origin: PermanentOrigin = PermanentOrigin.SNAP_POINT,
        group_id: int | None = None,
    ) -> int:
        """Add permanent points, skipping duplicates of existing ones.

        Args:
            points: Positions to keep
            origin: Why the points are being kept
            group_id: Shared id for later bulk removal

        Returns:
            Number of points actually added
        """
        tolerance = self.config.permanent_dedup_tolerance
        added = 0
        for point in points:
            duplicate = any(
                abs(existing.x - point.x) < tolerance and abs(existing.y - point.y) < tolerance
                for existing in self._permanent
            )
            if duplicate:
                continue
            self._permanent.append(
                PermanentPoint(point.x, point.y, origin=origin, group_id=group_id, original_name=point.name)
            )
            added += 1

        if added:
            logger.debug("Permanent points added", added=added, origin=origin.value, group=group_id)
        return added

    def set_permanent_points(self, points: list[PermanentPoint]) -> None:
        self._permanent = list(points)

    def remove_permanent_group(self, group_id: int) -> int:
        """Remove all permanent points added with a group id."""
        before = len(self._permanent)
        self._permanent = [p for p in self._permanent if p.group_id != group_id]
        return before - len(self._permanent)

    def clear_permanent_points(self) -> None:
        self._permanent = []

    def clear(self) -> None:
        """Drop the temporary helper set."""
        self._helpers = {}

    def stats(self) -> dict[str, int]:
        """Helper counts by source."""
        counts: dict[str, int] = {"total": len(self._helpers), "permanent_points": len(self._permanent)}
        for helper in self._helpers.values():
            counts[helper.source.value] = counts.get(helper.source.value, 0) + 1
        return counts
