"""Unit tests for geometric primitives.

Tests cover:
- Shoelace area and square footage at 8 px per foot
- Segment projection, distance and intersection
- Boundary location, insertion and arcs between boundary vertices
- Coordinate quantization and canonical path ids
"""

import pytest

from floorsketch.core.geometry import (
    angle_degrees,
    area_sq_ft,
    boundary_arcs,
    canonical_path_id,
    centroid,
    coordinate_key,
    covers_polygon,
    insert_on_boundary,
    locate_on_boundary,
    offset_point,
    point_in_polygon,
    points_coincide,
    project_onto_segment,
    segment_intersection,
    signed_area,
)
from floorsketch.domain import Point

RECT = [Point(0, 0), Point(160, 0), Point(160, 80), Point(0, 80)]


class TestArea:
    """Tests for polygon area calculations."""

    def test_rectangle_square_feet(self):
        """A 160 x 80 px rectangle is 20 x 10 ft."""
        assert area_sq_ft(RECT) == pytest.approx(200.0)

    def test_orientation_changes_sign_only(self):
        forward = signed_area(RECT)
        backward = signed_area(list(reversed(RECT)))
        assert forward == pytest.approx(-backward)
        assert area_sq_ft(list(reversed(RECT))) == pytest.approx(200.0)

    def test_degenerate_polygon(self):
        assert signed_area([Point(0, 0), Point(10, 0)]) == 0.0
        assert area_sq_ft([]) == 0.0

    def test_centroid_is_vertex_mean(self):
        c = centroid(RECT)
        assert (c.x, c.y) == (80.0, 40.0)

    def test_centroid_of_empty_path(self):
        c = centroid([])
        assert (c.x, c.y) == (0.0, 0.0)


class TestPointInPolygon:
    """Tests for ray casting containment."""

    def test_inside(self):
        assert point_in_polygon(Point(10, 10), RECT)

    def test_outside(self):
        assert not point_in_polygon(Point(200, 10), RECT)

    def test_needs_three_vertices(self):
        assert not point_in_polygon(Point(1, 0), [Point(0, 0), Point(2, 0)])


class TestSegments:
    """Tests for projection and intersection."""

    def test_projection_inside_segment(self):
        projection = project_onto_segment(Point(5, 3), Point(0, 0), Point(10, 0))
        assert projection.point.to_tuple() == (5.0, 0.0)
        assert projection.distance == pytest.approx(3.0)
        assert projection.parameter == pytest.approx(0.5)

    def test_projection_clamped_to_endpoint(self):
        projection = project_onto_segment(Point(-10, 5), Point(0, 0), Point(10, 0))
        assert projection.point.to_tuple() == (0.0, 0.0)
        assert projection.parameter == 0.0
        assert projection.distance == pytest.approx((100 + 25) ** 0.5)

    def test_zero_length_segment_projects_to_start(self):
        projection = project_onto_segment(Point(3, 4), Point(0, 0), Point(0, 0))
        assert projection.point.to_tuple() == (0.0, 0.0)
        assert projection.distance == pytest.approx(5.0)

    def test_crossing_segments(self):
        hit = segment_intersection(Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0))
        assert hit is not None
        assert hit.x == pytest.approx(5.0)
        assert hit.y == pytest.approx(5.0)

    def test_parallel_segments(self):
        assert segment_intersection(Point(0, 0), Point(10, 0), Point(0, 5), Point(10, 5)) is None

    def test_disjoint_segments(self):
        assert segment_intersection(Point(0, 0), Point(1, 1), Point(5, 0), Point(6, -5)) is None

    def test_shared_endpoint_counts(self):
        hit = segment_intersection(Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10))
        assert hit is not None
        assert hit.to_tuple() == pytest.approx((10.0, 0.0))


class TestDirections:
    """Tests for angles and keypad offsets (y grows downward)."""

    def test_up_is_ninety_degrees(self):
        assert angle_degrees(Point(0, 0), Point(0, -10)) == pytest.approx(90.0)

    def test_right_is_zero_degrees(self):
        assert angle_degrees(Point(0, 0), Point(10, 0)) == pytest.approx(0.0)

    def test_offset_uses_feet(self):
        p = offset_point(Point(0, 0), 10, 0)
        assert p.x == pytest.approx(80.0)
        assert p.y == pytest.approx(0.0)

    def test_offset_up_moves_negative_y(self):
        p = offset_point(Point(0, 0), 10, 90)
        assert p.x == pytest.approx(0.0, abs=1e-9)
        assert p.y == pytest.approx(-80.0)


class TestCoordinateIdentity:
    """Tests for quantized keys and canonical ids."""

    def test_nearby_coordinates_share_key(self):
        assert coordinate_key(Point(80.0, 0.0)) == coordinate_key(Point(80.02, 0.01))

    def test_distinct_coordinates_differ(self):
        assert coordinate_key(Point(80.0, 0.0)) != coordinate_key(Point(80.5, 0.0))

    def test_canonical_id_ignores_start_and_direction(self):
        a = [Point(0, 0), Point(10, 0), Point(10, 10)]
        b = [Point(10, 10), Point(10, 0), Point(0, 0)]
        assert canonical_path_id(a) == canonical_path_id(b)
        assert canonical_path_id(a) == "0.0,0.0;10.0,0.0;10.0,10.0"

    def test_canonical_id_of_empty_path(self):
        assert canonical_path_id([]) == ""

    def test_points_coincide_is_strict(self):
        assert points_coincide(Point(0, 0), Point(4.9, 0), 5.0)
        assert not points_coincide(Point(0, 0), Point(5.0, 0), 5.0)


class TestBoundary:
    """Tests for locating and inserting points on closed boundaries."""

    def test_vertex_hit_preferred_over_edge(self):
        hit = locate_on_boundary(Point(158, 1), RECT, 5.0)
        assert hit is not None
        assert hit.vertex_index == 1
        assert hit.edge_index is None

    def test_edge_hit(self):
        hit = locate_on_boundary(Point(80, 2), RECT, 5.0)
        assert hit is not None
        assert hit.edge_index == 0
        assert hit.point.to_tuple() == (80.0, 0.0)

    def test_miss(self):
        assert locate_on_boundary(Point(80, 40), RECT, 5.0) is None

    def test_insert_on_edge(self):
        result = insert_on_boundary(RECT, Point(80, 80), 5.0)
        assert result is not None
        boundary, index = result
        assert index == 3
        assert len(boundary) == 5
        assert boundary[3].to_tuple() == (80.0, 80.0)
        assert area_sq_ft(boundary) == pytest.approx(200.0)

    def test_insert_on_vertex_keeps_boundary(self):
        result = insert_on_boundary(RECT, Point(0, 80), 5.0)
        assert result is not None
        boundary, index = result
        assert index == 3
        assert boundary == RECT
        assert boundary is not RECT

    def test_point_at_tolerance_misses(self):
        # Same exclusive bound the split graph uses for vertex merges
        assert locate_on_boundary(Point(165, 0), RECT, 5.0) is None
        assert locate_on_boundary(Point(164.9, 0), RECT, 5.0) is not None

    def test_boundary_arcs_shorter_first(self):
        # From (160,80) back to (160,0): directly is one edge
        arcs = boundary_arcs(RECT, 2, 1)

        assert [arc.points for arc in arcs] == [[], [Point(0, 80), Point(0, 0)]]
        assert [arc.length for arc in arcs] == [80.0, 400.0]
        assert [arc.forward for arc in arcs] == [False, True]

    def test_boundary_arcs_tie_puts_forward_first(self):
        arcs = boundary_arcs(RECT, 3, 1)
        # Both ways are 240 px
        assert arcs[0].forward
        assert [p.to_tuple() for p in arcs[0].points] == [(0.0, 0.0)]
        assert [p.to_tuple() for p in arcs[1].points] == [(160.0, 80.0)]

    def test_boundary_arcs_same_index(self):
        assert boundary_arcs(RECT, 2, 2) == []


class TestCoversPolygon:
    """Tests for detecting a cycle that encloses a whole polygon."""

    def test_same_outline_covers(self):
        augmented = [Point(0, 0), Point(80, 0), Point(160, 0), Point(160, 80), Point(0, 80)]
        assert covers_polygon(augmented, RECT, 5.0)

    def test_enclosing_cycle_covers(self):
        outer = [Point(-40, -40), Point(200, -40), Point(200, 120), Point(-40, 120)]
        assert covers_polygon(outer, RECT, 5.0)

    def test_half_does_not_cover(self):
        left = [Point(0, 0), Point(80, 0), Point(80, 80), Point(0, 80)]
        assert not covers_polygon(left, RECT, 5.0)

    def test_neighbor_does_not_cover(self):
        neighbor = [Point(160, 0), Point(240, 0), Point(240, 80), Point(160, 80)]
        assert not covers_polygon(neighbor, RECT, 5.0)
