"""Unit tests for vertex and cycle validation."""

import math

from floorsketch.config import DrawingConfig
from floorsketch.core.validation import PathValidator, ValidationCode
from floorsketch.domain import Point

RECT = [Point(0, 0), Point(160, 0), Point(160, 80), Point(0, 80)]


class TestVertexValidation:
    """Tests for appending a vertex to an open path."""

    def test_first_vertex_accepted(self):
        result = PathValidator().validate_vertex(Point(0, 0), [])
        assert result.valid
        assert result.code == ValidationCode.OK
        assert result.reason == ""

    def test_non_finite_rejected(self):
        result = PathValidator().validate_vertex(Point(math.nan, 0), [])
        assert not result.valid
        assert result.code == ValidationCode.NOT_FINITE

    def test_out_of_bounds_rejected(self):
        result = PathValidator().validate_vertex(Point(60_000, 0), [])
        assert result.code == ValidationCode.OUT_OF_BOUNDS

    def test_too_close_to_any_vertex(self):
        path = [Point(0, 0), Point(160, 0), Point(160, 80)]
        result = PathValidator().validate_vertex(Point(1, 1), path)
        assert result.code == ValidationCode.TOO_CLOSE

    def test_edge_too_long(self):
        result = PathValidator().validate_vertex(Point(9000, 0), [Point(0, 0)])
        assert result.code == ValidationCode.EDGE_TOO_LONG

    def test_edge_too_short_with_custom_limit(self):
        validator = PathValidator(DrawingConfig(min_vertex_spacing=0.0, min_edge_feet=1.0))
        result = validator.validate_vertex(Point(4, 0), [Point(0, 0)])
        assert result.code == ValidationCode.EDGE_TOO_SHORT

    def test_regular_edge_accepted(self):
        assert PathValidator().validate_vertex(Point(160, 0), [Point(0, 0)]).valid


class TestCycleValidation:
    """Tests for closing a path into an area."""

    def test_rectangle_accepted(self):
        assert PathValidator().validate_cycle(RECT).valid

    def test_too_few_vertices(self):
        result = PathValidator().validate_cycle(RECT[:2])
        assert result.code == ValidationCode.TOO_FEW_VERTICES

    def test_too_many_vertices(self):
        validator = PathValidator(DrawingConfig(max_vertices=3))
        result = validator.validate_cycle(RECT)
        assert result.code == ValidationCode.TOO_MANY_VERTICES

    def test_bow_tie_self_intersects(self):
        bow_tie = [Point(0, 0), Point(80, 80), Point(80, 0), Point(0, 80)]
        result = PathValidator().validate_cycle(bow_tie)
        assert result.code == ValidationCode.SELF_INTERSECTING

    def test_area_too_small(self):
        sliver = [Point(0, 0), Point(4, 0), Point(0, 4)]
        result = PathValidator().validate_cycle(sliver)
        assert result.code == ValidationCode.AREA_TOO_SMALL

    def test_closing_edge_checked(self):
        validator = PathValidator(DrawingConfig(max_edge_feet=25.0))
        # Every drawn edge is 20 ft but the closing edge is ~28 ft
        path = [Point(0, 0), Point(160, 0), Point(160, 160)]
        result = validator.validate_cycle(path)
        assert result.code == ValidationCode.EDGE_TOO_LONG


class TestClosingEdgeWarning:
    def test_long_closing_edge_flagged(self):
        path = [Point(0, 0), Point(800, 0), Point(800, 10)]
        warning = PathValidator().closing_edge_warning(path)
        assert warning is not None
        assert "ft long" in warning

    def test_regular_closing_edge(self):
        assert PathValidator().closing_edge_warning(RECT) is None

    def test_open_path_has_no_closing_edge(self):
        assert PathValidator().closing_edge_warning(RECT[:2]) is None
