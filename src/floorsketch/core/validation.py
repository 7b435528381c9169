"""Validation of vertex placement and closed paths.

Validation failures are ordinary outcomes of user input, so the validator
returns a ValidationResult instead of raising.
"""

import math
from dataclasses import dataclass
from enum import Enum

from floorsketch.config import DrawingConfig
from floorsketch.core.geometry import area_sq_ft, distance, segment_intersection
from floorsketch.domain import PIXELS_PER_FOOT, Point

# Closing edges longer than this are accepted but flagged.
LONG_CLOSING_EDGE_FEET = 50.0


class ValidationCode(str, Enum):
    """Reason a vertex or path was rejected."""

    OK = "ok"
    NOT_FINITE = "not_finite"
    OUT_OF_BOUNDS = "out_of_bounds"
    TOO_CLOSE = "too_close"
    EDGE_TOO_SHORT = "edge_too_short"
    EDGE_TOO_LONG = "edge_too_long"
    TOO_FEW_VERTICES = "too_few_vertices"
    TOO_MANY_VERTICES = "too_many_vertices"
    SELF_INTERSECTING = "self_intersecting"
    AREA_TOO_SMALL = "area_too_small"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a validation check.

    Attributes:
        valid: True if the input was accepted
        code: Machine readable reason
        reason: Human readable explanation (empty when valid)
    """

    valid: bool
    code: ValidationCode = ValidationCode.OK
    reason: str = ""

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def reject(cls, code: ValidationCode, reason: str) -> "ValidationResult":
        return cls(False, code, reason)


class PathValidator:
    """Checks vertices and cycles against the drawing limits."""

    def __init__(self, config: DrawingConfig | None = None) -> None:
        self.config = config or DrawingConfig()

    def validate_vertex(self, point: Point, path: list[Point]) -> ValidationResult:
        """Check that a point may be appended to an open path.

        Args:
            point: Candidate vertex
            path: Current open path

        Returns:
            ValidationResult
        """
        if not (math.isfinite(point.x) and math.isfinite(point.y)):
            return ValidationResult.reject(ValidationCode.NOT_FINITE, "Coordinates must be finite")

        limit = self.config.max_coordinate
        if abs(point.x) > limit or abs(point.y) > limit:
            return ValidationResult.reject(
                ValidationCode.OUT_OF_BOUNDS, f"Coordinates must be within ±{limit:g} px"
            )

        spacing = self.config.min_vertex_spacing
        for existing in path:
            if distance(point, existing) < spacing:
                return ValidationResult.reject(
                    ValidationCode.TOO_CLOSE, f"Vertex is within {spacing:g} px of an existing vertex"
                )

        if path:
            return self._check_edge(path[-1], point)

        return ValidationResult.ok()

    def validate_cycle(self, path: list[Point]) -> ValidationResult:
        """Check that a path may be closed into an area.

        Args:
            path: Closed path (last vertex connects back to the first)

        Returns:
            ValidationResult
        """
        n = len(path)
        if n < self.config.min_vertices:
            return ValidationResult.reject(
                ValidationCode.TOO_FEW_VERTICES, f"An area needs at least {self.config.min_vertices} vertices"
            )
        if n > self.config.max_vertices:
            return ValidationResult.reject(
                ValidationCode.TOO_MANY_VERTICES, f"An area allows at most {self.config.max_vertices} vertices"
            )

        for i in range(n):
            result = self._check_edge(path[i], path[(i + 1) % n])
            if not result.valid:
                return result

        if self._self_intersects(path):
            return ValidationResult.reject(ValidationCode.SELF_INTERSECTING, "Path crosses itself")

        if area_sq_ft(path) < self.config.min_area_sq_ft:
            return ValidationResult.reject(
                ValidationCode.AREA_TOO_SMALL, f"Area is smaller than {self.config.min_area_sq_ft:g} sq ft"
            )

        return ValidationResult.ok()

    def closing_edge_warning(self, path: list[Point]) -> str | None:
        """Warning text when the edge closing the path is unusually long."""
        if len(path) < 3:
            return None
        length_ft = distance(path[-1], path[0]) / PIXELS_PER_FOOT
        if length_ft > LONG_CLOSING_EDGE_FEET:
            return f"Closing edge is {length_ft:.1f} ft long"
        return None

    def _check_edge(self, start: Point, end: Point) -> ValidationResult:
        length_ft = distance(start, end) / PIXELS_PER_FOOT
        if length_ft < self.config.min_edge_feet:
            return ValidationResult.reject(
                ValidationCode.EDGE_TOO_SHORT, f"Edge is shorter than {self.config.min_edge_feet:g} ft"
            )
        if length_ft > self.config.max_edge_feet:
            return ValidationResult.reject(
                ValidationCode.EDGE_TOO_LONG, f"Edge is longer than {self.config.max_edge_feet:g} ft"
            )
        return ValidationResult.ok()

    @staticmethod
    def _self_intersects(path: list[Point]) -> bool:
        n = len(path)
        for i in range(n):
            a1, a2 = path[i], path[(i + 1) % n]
            for j in range(i + 1, n):
                # Adjacent edges share an endpoint
                if j == i + 1 or (i == 0 and j == n - 1):
                    continue
                if segment_intersection(a1, a2, path[j], path[(j + 1) % n]) is not None:
                    return True
        return False
