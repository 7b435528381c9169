"""Area (closed polygon) representation and metadata.

This module defines the area domain model, which represents a single closed,
labeled region of the floor plan, together with the annotation entity that
displays its label on the canvas.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from floorsketch.domain.point import PIXELS_PER_FOOT, Point


class AreaType(str, Enum):
    """Category of an area.

    Each category has a display name used for generated labels and a default
    gross living area (GLA) flag.
    """

    LIVING = "living"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    ADDITION = "addition"
    GARAGE = "garage"
    PORCH = "porch"
    DECK = "deck"
    PATIO = "patio"
    BASEMENT = "basement"
    STORAGE = "storage"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. "Living Room"."""
        return _DISPLAY_NAMES[self]

    @property
    def default_gla(self) -> bool:
        """Whether areas of this type count toward GLA by default."""
        return self in _GLA_TYPES


_DISPLAY_NAMES: dict[AreaType, str] = {
    AreaType.LIVING: "Living Room",
    AreaType.BEDROOM: "Bedroom",
    AreaType.KITCHEN: "Kitchen",
    AreaType.BATHROOM: "Bathroom",
    AreaType.ADDITION: "Addition",
    AreaType.GARAGE: "Garage",
    AreaType.PORCH: "Porch",
    AreaType.DECK: "Deck",
    AreaType.PATIO: "Patio",
    AreaType.BASEMENT: "Basement",
    AreaType.STORAGE: "Storage",
    AreaType.OTHER: "Area",
}

_GLA_TYPES = frozenset(
    {AreaType.LIVING, AreaType.BEDROOM, AreaType.KITCHEN, AreaType.BATHROOM, AreaType.ADDITION}
)


@dataclass
class Area:
    """A closed, labeled region of the floor plan.

    The boundary is implicitly closed: the last point connects back to the
    first. Square footage and centroid are derived from the path on every
    access, so they always reflect the current geometry.

    Attributes:
        id: Unique area id
        path: Boundary vertices (at least 3 for a committed area)
        label: Display label (e.g. "Living Room 1")
        area_type: Category of the area
        is_gla: True if the area counts toward gross living area
    """

    id: int
    path: list[Point]
    label: str = ""
    area_type: AreaType = AreaType.LIVING
    is_gla: bool = True

    def signed_area(self) -> float:
        """Calculate signed area in square pixels using the shoelace formula.

        Returns:
            Signed area, 0.0 for degenerate paths
        """
        n = len(self.path)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.path[i].x * self.path[j].y
            area -= self.path[j].x * self.path[i].y

        return area / 2.0

    @property
    def area_sq_ft(self) -> float:
        """Unsigned area in square feet."""
        return abs(self.signed_area()) / (PIXELS_PER_FOOT * PIXELS_PER_FOOT)

    @property
    def centroid(self) -> Point:
        """Vertex mean of the boundary."""
        if not self.path:
            return Point(0.0, 0.0)
        n = len(self.path)
        return Point(
            sum(p.x for p in self.path) / n,
            sum(p.y for p in self.path) / n,
        )

    @property
    def gla_type(self) -> int:
        """Persisted GLA flag: 1 if the area counts toward GLA, else 0."""
        return 1 if self.is_gla else 0

    def translate(self, dx: float, dy: float) -> None:
        """Move every boundary vertex by (dx, dy)."""
        self.path = [p.translated(dx, dy) for p in self.path]

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted area record shape.

        Returns:
            Dictionary with id, path, label, type, glaType, area and centroid
        """
        centroid = self.centroid
        return {
            "id": self.id,
            "path": [p.to_dict() for p in self.path],
            "label": self.label,
            "type": self.area_type.value,
            "glaType": self.gla_type,
            "area": self.area_sq_ft,
            "centroid": {"x": centroid.x, "y": centroid.y},
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Area":
        """Deserialize from a persisted area record.

        The stored ``area`` and ``centroid`` are ignored: both are derived from
        the path.

        Args:
            data: Persisted area record

        Returns:
            Area instance
        """
        return cls(
            id=int(data["id"]),
            path=[Point.from_dict(p) for p in data["path"]],
            label=str(data.get("label", "")),
            area_type=AreaType(data.get("type", AreaType.LIVING.value)),
            is_gla=int(data.get("glaType", 1)) == 1,
        )


@dataclass
class AreaLabel:
    """Canvas annotation bound to an area.

    Removed together with its area and regenerated whenever the area is
    committed.

    Attributes:
        area_id: Id of the area this label belongs to
        text: Area label text
        sq_ft_text: Formatted square footage (e.g. "200.0 sq ft")
        x: Anchor x (area centroid)
        y: Anchor y (area centroid)
    """

    area_id: int
    text: str
    sq_ft_text: str
    x: float
    y: float
    width: float = field(default=80.0)

    @property
    def id(self) -> str:
        """Entity id derived from the owning area."""
        return f"area_label_{self.area_id}"

    @classmethod
    def for_area(cls, area: Area) -> "AreaLabel":
        """Create the label entity for an area."""
        centroid = area.centroid
        return cls(
            area_id=area.id,
            text=area.label,
            sq_ft_text=f"{area.area_sq_ft:.1f} sq ft",
            x=centroid.x,
            y=centroid.y,
            width=max(80.0, len(area.label) * 8.0 + 16.0),
        )
