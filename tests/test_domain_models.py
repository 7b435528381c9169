"""Tests for domain models to verify they work correctly."""

import pytest

from floorsketch.domain import (
    Area,
    AreaLabel,
    AreaType,
    EdgeSnap,
    GridSnap,
    PathProjection,
    PermanentOrigin,
    PermanentPoint,
    PermanentProjection,
    Point,
    SnapKind,
    SnapRef,
    VertexSnap,
    name_path,
)


def make_rect(area_id: int = 1, label: str = "Living Room 1") -> Area:
    points = [Point(0, 0), Point(160, 0), Point(160, 80), Point(0, 80)]
    return Area(id=area_id, path=name_path(points), label=label)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0
        assert p.name is None
        assert p.snap_info is None

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        p = Point(100.0, 200.0)
        assert p.to_tuple() == (100.0, 200.0)

    def test_point_serialization_drops_snap_info(self) -> None:
        """Snap metadata is transient and never persisted."""
        p1 = Point(10.0, 20.0, "p3", SnapRef(SnapKind.EDGE, area_id=4, index=2))
        data = p1.to_dict()
        assert data == {"x": 10.0, "y": 20.0, "name": "p3"}

        p2 = Point.from_dict(data)
        assert p2.to_tuple() == p1.to_tuple()
        assert p2.name == "p3"
        assert p2.snap_info is None

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_translated_keeps_name(self) -> None:
        p = Point(1.0, 2.0, "p0").translated(10.0, -2.0)
        assert p.to_tuple() == (11.0, 0.0)
        assert p.name == "p0"

    def test_name_path(self) -> None:
        named = name_path([Point(0, 0, "p7"), Point(1, 0), Point(1, 1)])
        assert [p.name for p in named] == ["p0", "p1", "p2"]


class TestArea:
    """Tests for Area class."""

    def test_area_square_feet(self) -> None:
        """8 px per foot: 160 x 80 px is 200 sq ft."""
        assert make_rect().area_sq_ft == pytest.approx(200.0)

    def test_area_is_unsigned(self) -> None:
        area = make_rect()
        area.path = list(reversed(area.path))
        assert area.signed_area() < 0
        assert area.area_sq_ft == pytest.approx(200.0)

    def test_derived_values_follow_path(self) -> None:
        area = make_rect()
        area.translate(40.0, 8.0)
        assert area.area_sq_ft == pytest.approx(200.0)
        assert area.centroid.to_tuple() == (120.0, 48.0)

    def test_gla_type(self) -> None:
        area = make_rect()
        assert area.gla_type == 1
        area.is_gla = False
        assert area.gla_type == 0

    def test_record_shape(self) -> None:
        record = make_rect().to_record()
        assert set(record) == {"id", "path", "label", "type", "glaType", "area", "centroid"}
        assert record["type"] == "living"
        assert record["glaType"] == 1
        assert record["area"] == pytest.approx(200.0)
        assert record["centroid"] == {"x": 80.0, "y": 40.0}
        assert record["path"][0] == {"x": 0, "y": 0, "name": "p0"}

    def test_from_record_ignores_stored_derived_values(self) -> None:
        record = make_rect().to_record()
        record["area"] = 999.0
        record["centroid"] = {"x": -1, "y": -1}
        area = Area.from_record(record)
        assert area.area_sq_ft == pytest.approx(200.0)
        assert area.centroid.to_tuple() == (80.0, 40.0)

    def test_from_record_defaults(self) -> None:
        area = Area.from_record({"id": 3, "path": [{"x": 0, "y": 0}, {"x": 8, "y": 0}, {"x": 8, "y": 8}]})
        assert area.label == ""
        assert area.area_type == AreaType.LIVING
        assert area.is_gla


class TestAreaType:
    """Tests for area categories."""

    def test_display_names(self) -> None:
        assert AreaType.LIVING.display_name == "Living Room"
        assert AreaType.GARAGE.display_name == "Garage"

    def test_default_gla(self) -> None:
        assert AreaType.LIVING.default_gla
        assert AreaType.BEDROOM.default_gla
        assert not AreaType.GARAGE.default_gla
        assert not AreaType.PORCH.default_gla


class TestAreaLabel:
    """Tests for the label annotation entity."""

    def test_label_for_area(self) -> None:
        label = AreaLabel.for_area(make_rect(7))
        assert label.id == "area_label_7"
        assert label.text == "Living Room 1"
        assert label.sq_ft_text == "200.0 sq ft"
        assert (label.x, label.y) == (80.0, 40.0)

    def test_label_width_grows_with_text(self) -> None:
        short = AreaLabel.for_area(make_rect(label="A"))
        long = AreaLabel.for_area(make_rect(label="Finished Basement Family Room"))
        assert short.width == 80.0
        assert long.width > 80.0


class TestSnapVariants:
    """Tests for snap result and helper variants."""

    def test_vertex_snap_on_area(self) -> None:
        snap = VertexSnap(160.0, 0.0, 1.5, area_id=2, vertex_index=1)
        assert snap.kind == SnapKind.VERTEX
        assert not snap.from_permanent
        point = snap.to_point()
        assert point.snap_info == SnapRef(SnapKind.VERTEX, area_id=2, index=1)

    def test_vertex_snap_on_permanent_point(self) -> None:
        snap = VertexSnap(160.0, 0.0, 1.5)
        assert snap.from_permanent
        assert snap.to_ref().kind == SnapKind.PERMANENT

    def test_confidence_ordering(self) -> None:
        assert VertexSnap.confidence > EdgeSnap.confidence > GridSnap.confidence

    def test_edge_snap_reference(self) -> None:
        snap = EdgeSnap(80.0, 0.0, 2.0, area_id=1, edge_index=0, parameter=0.5)
        assert snap.to_point().snap_info == SnapRef(SnapKind.EDGE, area_id=1, index=0)

    def test_helper_variants_compare_by_position(self) -> None:
        assert PathProjection(0.0, 30.0) == PathProjection(0.0, 30.0)
        assert PermanentProjection.from_permanent
        assert not PathProjection.from_permanent


class TestPermanentPoint:
    """Tests for permanent helper points."""

    def test_permanent_point_serialization(self) -> None:
        point = PermanentPoint(10.0, 20.0, PermanentOrigin.EDGE_DELETION, group_id=3, original_name="p2")
        data = point.to_dict()
        assert data == {
            "x": 10.0,
            "y": 20.0,
            "source": "edge_deletion",
            "pathId": 3,
            "originalName": "p2",
        }
        assert PermanentPoint.from_dict(data) == point

    def test_permanent_point_defaults(self) -> None:
        point = PermanentPoint.from_dict({"x": 1, "y": 2})
        assert point.origin == PermanentOrigin.SNAP_POINT
        assert point.group_id is None
        assert point.original_name is None
