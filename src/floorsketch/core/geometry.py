"""Geometric operations for path, snap and split calculations.

This module provides core mathematical utilities for:
- Distance and angle between points
- Signed area calculation (shoelace formula) and square footage
- Centroid (vertex mean) and point-in-polygon testing (ray casting)
- Segment projection and segment intersection
- Boundary location (is a point on a polygon vertex or edge?) and boundary arcs
- Coordinate quantization and canonical path identifiers

All functions are pure and stateless.
"""

import math
from dataclasses import dataclass

from floorsketch.domain import PIXELS_PER_FOOT, Point


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def angle_degrees(a: Point, b: Point) -> float:
    """Direction from a to b in degrees.

    The canvas y axis grows downward, so the angle is measured with y flipped:
    0 degrees points right and 90 degrees points up the screen.

    Returns:
        Angle in the range (-180, 180]
    """
    return math.degrees(math.atan2(-(b.y - a.y), b.x - a.x))


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    Args:
        points: List of points forming the polygon boundary (implicitly closed)

    Returns:
        Signed area in square pixels. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0, 0), Point(8, 0), Point(8, 8), Point(0, 8)]
        >>> signed_area(square)
        64.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def polygon_area(points: list[Point]) -> float:
    """Unsigned polygon area in square pixels."""
    return abs(signed_area(points))


def area_sq_ft(points: list[Point]) -> float:
    """Unsigned polygon area in square feet (8 px = 1 ft)."""
    return polygon_area(points) / (PIXELS_PER_FOOT * PIXELS_PER_FOOT)


def centroid(points: list[Point]) -> Point:
    """Vertex mean of a path, (0, 0) for an empty path."""
    if not points:
        return Point(0.0, 0.0)
    n = len(points)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


@dataclass(frozen=True, slots=True)
class SegmentProjection:
    """Result of projecting a point onto a segment.

    Attributes:
        point: Nearest point on the segment
        distance: Distance from the projected point to the segment
        parameter: Position along the segment, clamped to [0, 1]
    """

    point: Point
    distance: float
    parameter: float


def project_onto_segment(point: Point, seg_start: Point, seg_end: Point) -> SegmentProjection:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps the parameter to
    the segment endpoints. A zero-length segment projects onto its start.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        SegmentProjection with the nearest point, distance and parameter
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        nearest = Point(seg_start.x, seg_start.y)
        return SegmentProjection(nearest, distance(point, nearest), 0.0)

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point(seg_start.x + t * dx, seg_start.y + t * dy)
    return SegmentProjection(nearest, distance(point, nearest), t)


def segment_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Point | None:
    """Find intersection point of two line segments.

    Uses parametric line equations to find intersection. Returns None if lines
    are parallel or if intersection is outside either segment.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2

    Returns:
        Point at intersection if segments intersect, None otherwise
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Lines are parallel or coincident
    if abs(denom) < 1e-4:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))

    return None


def points_coincide(a: Point, b: Point, tolerance: float) -> bool:
    """True if both coordinates differ by less than tolerance."""
    return abs(a.x - b.x) < tolerance and abs(a.y - b.y) < tolerance


def offset_point(origin: Point, distance_ft: float, angle_deg: float) -> Point:
    """Place a point at a distance (feet) and direction (degrees) from origin.

    0 degrees points right, 90 degrees points up the screen (negative y).
    """
    radians = math.radians(angle_deg)
    pixels = distance_ft * PIXELS_PER_FOOT
    return Point(
        origin.x + pixels * math.cos(radians),
        origin.y - pixels * math.sin(radians),
    )


def quantize(value: float, quantum: float) -> int:
    """Snap a coordinate to an integer multiple of quantum."""
    return round(value / quantum)


def coordinate_key(point: Point, quantum: float = 0.1) -> tuple[int, int]:
    """Integer grid key for hashing nearly-equal coordinates together."""
    return (quantize(point.x, quantum), quantize(point.y, quantum))


def canonical_path_id(points: list[Point]) -> str:
    """Order-independent identifier of a path's vertex set.

    Each vertex becomes an "x.x,y.y" string; the strings are sorted and joined
    with ";". Two paths over the same vertices get the same id regardless of
    starting vertex or traversal direction.

    Args:
        points: Path vertices

    Returns:
        Canonical id, "" for an empty path
    """
    return ";".join(sorted(f"{p.x:.1f},{p.y:.1f}" for p in points))


@dataclass(frozen=True, slots=True)
class BoundaryHit:
    """Where a point touches a closed polygon boundary.

    Exactly one of vertex_index / edge_index is set.

    Attributes:
        point: Position on the boundary (the vertex, or the edge projection)
        vertex_index: Index of the coincident vertex
        edge_index: Index of the start vertex of the touched edge
        distance: Distance from the query point to the boundary position
    """

    point: Point
    distance: float
    vertex_index: int | None = None
    edge_index: int | None = None


def locate_on_boundary(point: Point, polygon: list[Point], tolerance: float) -> BoundaryHit | None:
    """Find the vertex or edge of a closed polygon that a point touches.

    Vertices take precedence over edges. Among candidates the nearest wins.

    Args:
        point: Query point
        polygon: Closed boundary vertices
        tolerance: Hit distance (exclusive, matching the graph merge tolerance)

    Returns:
        BoundaryHit, or None if the point is tolerance or more away
    """
    best: BoundaryHit | None = None
    for i, vertex in enumerate(polygon):
        d = distance(point, vertex)
        if d < tolerance and (best is None or d < best.distance):
            best = BoundaryHit(point=vertex, distance=d, vertex_index=i)
    if best is not None:
        return best

    n = len(polygon)
    if n < 2:
        return None
    for i in range(n):
        projection = project_onto_segment(point, polygon[i], polygon[(i + 1) % n])
        if projection.distance < tolerance and (best is None or projection.distance < best.distance):
            best = BoundaryHit(point=projection.point, distance=projection.distance, edge_index=i)
    return best


def insert_on_boundary(
    polygon: list[Point], point: Point, tolerance: float
) -> tuple[list[Point], int] | None:
    """Make a boundary point an explicit vertex of a closed polygon.

    If the point is already within tolerance of a vertex the polygon is
    returned unchanged. If it lies on an edge, the point is inserted between
    the edge's endpoints; the polygon's shape does not change.

    Args:
        polygon: Closed boundary vertices
        point: Point to insert
        tolerance: Maximum distance from the boundary

    Returns:
        Tuple of (boundary, vertex index of the point), or None if the point
        is not on the boundary
    """
    hit = locate_on_boundary(point, polygon, tolerance)
    if hit is None:
        return None
    if hit.vertex_index is not None:
        return list(polygon), hit.vertex_index

    assert hit.edge_index is not None
    index = hit.edge_index + 1
    boundary = list(polygon)
    boundary.insert(index, Point(point.x, point.y))
    return boundary, index


@dataclass(frozen=True, slots=True)
class BoundaryArc:
    """One way round a closed boundary between two of its vertices.

    Attributes:
        points: Vertices strictly between the endpoints, in walking order
        length: Total edge length walked, endpoints included
        forward: True when walking in increasing index order
    """

    points: list[Point]
    length: float
    forward: bool


def boundary_arcs(boundary: list[Point], from_index: int, to_index: int) -> list[BoundaryArc]:
    """Both ways round a closed boundary, shorter first.

    The forward direction (increasing index) comes first when both ways are
    the same length.

    Args:
        boundary: Closed boundary vertices
        from_index: Index to start walking from
        to_index: Index to stop at

    Returns:
        Forward and backward arcs ordered by length, or [] when the indices
        are equal or the boundary is empty
    """
    n = len(boundary)
    if n == 0 or from_index == to_index:
        return []

    def walk(step: int) -> BoundaryArc:
        points: list[Point] = []
        length = 0.0
        i = from_index
        while True:
            j = (i + step) % n
            length += distance(boundary[i], boundary[j])
            if j == to_index:
                return BoundaryArc(points, length, forward=step > 0)
            points.append(boundary[j])
            i = j

    return sorted([walk(1), walk(-1)], key=lambda arc: arc.length)


def covers_polygon(cycle: list[Point], polygon: list[Point], tolerance: float) -> bool:
    """True if every vertex of polygon lies on the cycle's boundary or inside it."""
    return all(
        locate_on_boundary(vertex, cycle, tolerance) is not None or point_in_polygon(vertex, cycle)
        for vertex in polygon
    )
