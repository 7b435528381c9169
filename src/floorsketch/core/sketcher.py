"""Drawing session orchestration.

The Sketcher turns pointer input into areas:

    pointer -> snap -> helpers -> path update -> closure -> split engine
            -> classification -> commit -> redraw / checkpoint

It owns the snap, helper, validation, split and classification components and
wires them to an injected store and observer. Everything runs synchronously
inside the calling event handler.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import structlog

from floorsketch.config import SketchSettings, get_default_settings
from floorsketch.core.classification import (
    ClassificationRequest,
    ClassificationResult,
    ClassificationWorkflow,
    Classifier,
    WorkflowState,
)
from floorsketch.core.geometry import (
    area_sq_ft,
    boundary_arcs,
    covers_polygon,
    distance,
    insert_on_boundary,
    locate_on_boundary,
    offset_point,
)
from floorsketch.core.helpers import HelperPointSystem
from floorsketch.core.snap import SnapSystem
from floorsketch.core.splitter import AreaSplitter, SplitPlan
from floorsketch.core.store import NullObserver, SketchObserver, SketchStore
from floorsketch.core.validation import PathValidator, ValidationResult
from floorsketch.domain import (
    Area,
    EdgeSnap,
    GridSnap,
    HelperPoint,
    PermanentOrigin,
    Point,
    SnapKind,
    VertexSnap,
    name_path,
)
from floorsketch.exceptions import (
    GeometryError,
    MalformedPathError,
    PathError,
    SplitInProgressError,
    SplitInvariantError,
)
from floorsketch.utils.logging import SessionLogger

logger = structlog.get_logger(__name__)


class PointStatus(str, Enum):
    """What happened to a placed point."""

    APPENDED = "appended"
    CLOSED = "closed"
    REJECTED = "rejected"


class CloseStatus(str, Enum):
    """What happened when the path was closed."""

    AWAITING_CLASSIFICATION = "awaiting_classification"
    REJECTED = "rejected"
    ABORTED = "aborted"


@dataclass
class CloseOutcome:
    """Result of closing the current path.

    Attributes:
        status: Outcome kind
        plan: Plan being classified (AWAITING_CLASSIFICATION)
        request: First classification prompt (AWAITING_CLASSIFICATION)
        validation: Failed validation (REJECTED)
        error: Diagnostic of the aborted split (ABORTED)
    """

    status: CloseStatus
    plan: SplitPlan | None = None
    request: ClassificationRequest | None = None
    validation: ValidationResult | None = None
    error: str | None = None


@dataclass
class PointOutcome:
    """Result of placing a point.

    Attributes:
        status: Outcome kind
        point: Resolved point (None when rejected)
        validation: Failed validation (REJECTED)
        close: Close outcome when the point closed the path
    """

    status: PointStatus
    point: Point | None = None
    validation: ValidationResult | None = None
    close: CloseOutcome | None = None


class Sketcher:
    """One drawing session over a store.

    Example:
        >>> sketcher = Sketcher(SketchStore())
        >>> for x, y in [(0, 0), (160, 0), (160, 80), (0, 80)]:
        ...     sketcher.add_point(x, y)
        >>> outcome = sketcher.close_path()
        >>> sketcher.classify(ClassificationResult("", AreaType.LIVING))
        <WorkflowState.COMMITTED: 'committed'>
    """

    def __init__(
        self,
        store: SketchStore | None = None,
        settings: SketchSettings | None = None,
        observer: SketchObserver | None = None,
        session_logger: SessionLogger | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store if store is not None else SketchStore()
        self.settings = settings or get_default_settings()
        self.observer = observer or NullObserver()
        self.session = session_logger or SessionLogger()
        self._clock = clock

        self.snap = SnapSystem(self.settings.snap)
        self.helpers = HelperPointSystem(self.settings.helpers)
        self.validator = PathValidator(self.settings.drawing)
        self.splitter = AreaSplitter(self.settings.split)
        self.workflow = ClassificationWorkflow(self.store, self.observer, clock)

        self._refresh()

    @property
    def current_path(self) -> list[Point]:
        return self.store.get_current_path()

    @property
    def areas(self) -> list[Area]:
        return self.store.get_areas()

    @property
    def helper_points(self) -> list[HelperPoint]:
        return self.helpers.helper_points

    def _refresh(self) -> None:
        areas = self.store.get_areas()
        permanent = self.store.get_permanent_points()
        self.snap.set_areas(areas)
        self.snap.set_permanent_points(permanent)
        self.helpers.set_permanent_points(permanent)
        self.helpers.update_helper_points(self.store.get_current_path(), areas)

    def _redraw(self) -> None:
        self.observer.request_redraw(self._clock())

    def _ensure_idle(self) -> None:
        if self.workflow.is_awaiting:
            raise SplitInProgressError()

    def resolve_point(self, x: float, y: float) -> Point:
        """Resolve a cursor position to the point that would be placed.

        Priority: vertex/edge snap, then the nearest helper point, then grid
        snap, then the raw position.
        """
        path = self.store.get_current_path()
        snap = self.snap.find_snap_point(x, y)

        if isinstance(snap, (VertexSnap, EdgeSnap)) and self.snap.is_valid_snap(snap, path):
            return snap.to_point()

        helper = self.helpers.find_nearest_helper(x, y)
        if helper is not None:
            return helper

        if isinstance(snap, GridSnap):
            return snap.to_point()

        return Point(x, y)

    def add_point(self, x: float, y: float) -> PointOutcome:
        """Place a point at a cursor position.

        The point closes the path when it lands within the close radius of
        the first vertex, or when it attaches to the same area as the first
        vertex (the path is then closed along the shorter arc of that area's
        boundary). Otherwise it is appended.

        Args:
            x: Cursor x coordinate
            y: Cursor y coordinate

        Returns:
            PointOutcome

        Raises:
            SplitInProgressError: If a classification is pending
        """
        self._ensure_idle()

        path = self.store.get_current_path()
        point = self.resolve_point(x, y)

        if len(path) >= self.settings.drawing.min_vertices:
            radius = self.settings.drawing.close_radius
            first = path[0]
            if distance(point, first) <= radius or distance(Point(x, y), first) <= radius:
                return PointOutcome(PointStatus.CLOSED, point=first, close=self.close_path())

        validation = self.validator.validate_vertex(point, path)
        if not validation.valid:
            self.session.log_point_rejected(point.x, point.y, validation.code.value, validation.reason)
            return PointOutcome(PointStatus.REJECTED, validation=validation)

        if path:
            arc = self._adjacent_closure(path, point)
            if arc is not None:
                self.store.set_current_path(name_path(path + [point] + arc))
                close = self.close_path()
                if close.status != CloseStatus.REJECTED:
                    self._remember_snap(point)
                    self.session.log_point_placed(point.x, point.y, self._snap_name(point))
                    return PointOutcome(PointStatus.CLOSED, point=point, close=close)
                # Invalid closed shape: keep drawing from the point instead

        self.store.set_current_path(name_path(path + [point]))
        self._remember_snap(point)
        self.helpers.update_helper_points(self.store.get_current_path(), self.store.get_areas())
        self.session.log_point_placed(point.x, point.y, self._snap_name(point))
        self._redraw()
        return PointOutcome(PointStatus.APPENDED, point=self.store.get_current_path()[-1])

    @staticmethod
    def _snap_name(point: Point) -> str | None:
        return point.snap_info.kind.value if point.snap_info is not None else None

    def _remember_snap(self, point: Point) -> None:
        # Confirmed vertex and edge snaps become permanent alignment aids
        if point.snap_info is None or point.snap_info.kind not in (SnapKind.VERTEX, SnapKind.EDGE):
            return
        if self.snap.add_permanent_snap_point(point.x, point.y):
            permanent = self.snap.permanent_points
            self.store.set_permanent_points(permanent)
            self.helpers.set_permanent_points(permanent)

    def _adjacent_closure(self, path: list[Point], end: Point) -> list[Point] | None:
        """Boundary vertices that close a path running between two points of one area.

        Both ways round the area are tried, shorter first. A way is skipped
        when it runs back over a vertex the path already placed, or when the
        closed cycle would enclose the whole area. Between two equally long
        ways, the one that does not touch another area's boundary wins, then
        the forward one.

        Returns:
            Vertices to append after ``end`` (possibly empty), or None when the
            path should stay open
        """
        tolerance = self.settings.split.merge_tolerance
        start = path[0]
        areas = self.store.get_areas()

        for area in areas:
            with_start = insert_on_boundary(area.path, start, tolerance)
            if with_start is None:
                continue
            boundary, start_index = with_start

            with_end = insert_on_boundary(boundary, end, tolerance)
            if with_end is None:
                continue
            augmented, end_index = with_end
            if len(augmented) > len(boundary) and end_index <= start_index:
                start_index += 1
            if end_index == start_index:
                continue

            others = [other for other in areas if other.id != area.id]
            candidates = []
            for arc in boundary_arcs(augmented, end_index, start_index):
                if any(distance(vertex, placed) < tolerance for vertex in arc.points for placed in path):
                    continue
                cycle = path + [end] + arc.points
                if len(cycle) < self.settings.drawing.min_vertices:
                    continue
                if area_sq_ft(cycle) < self.settings.drawing.min_area_sq_ft:
                    continue
                if covers_polygon(cycle, augmented, tolerance):
                    continue
                touches_other = any(
                    locate_on_boundary(vertex, other.path, tolerance) is not None
                    for vertex in arc.points
                    for other in others
                )
                candidates.append((round(arc.length, 6), touches_other, arc))

            if candidates:
                # min keeps the first of equal keys, so the forward way wins exact ties
                _, _, arc = min(candidates, key=lambda candidate: candidate[:2])
                logger.debug(
                    "Closing along area boundary",
                    area=area.id,
                    arc_points=len(arc.points),
                    forward=arc.forward,
                )
                return arc.points

        return None

    def place_vertex(self, distance_ft: float, angle_deg: float) -> PointOutcome:
        """Place a point at a distance and direction from the last point (keypad entry).

        Args:
            distance_ft: Distance in feet
            angle_deg: Direction in degrees (0 = right, 90 = up)

        Raises:
            PathError: If the path has no starting point
        """
        path = self.store.get_current_path()
        if not path:
            raise PathError("Keypad entry needs a starting point")
        target = offset_point(path[-1], distance_ft, angle_deg)
        return self.add_point(target.x, target.y)

    def close_path(self) -> CloseOutcome:
        """Close the current path and start classifying the result.

        Returns:
            CloseOutcome: AWAITING_CLASSIFICATION with the first prompt,
            REJECTED when the cycle fails validation (the path stays open),
            or ABORTED when the split engine hit an invariant violation (the
            path is discarded and existing areas are untouched)

        Raises:
            SplitInProgressError: If a classification is already pending
        """
        self._ensure_idle()

        path = self.store.get_current_path()
        validation = self.validator.validate_cycle(path)
        if not validation.valid:
            last = path[-1] if path else Point(0.0, 0.0)
            self.session.log_point_rejected(last.x, last.y, validation.code.value, validation.reason)
            return CloseOutcome(CloseStatus.REJECTED, validation=validation)

        warning = self.validator.closing_edge_warning(path)
        if warning is not None:
            logger.warning("Long closing edge", detail=warning)

        try:
            plan = self.splitter.analyze(path, self.store.get_areas())
        except (MalformedPathError, SplitInvariantError) as e:
            self.session.log_split_aborted(e)
            self.store.set_current_path([])
            self.helpers.clear()
            self._redraw()
            return CloseOutcome(CloseStatus.ABORTED, error=str(e))

        if plan is None:
            plan = SplitPlan.new_area(path)
        else:
            self.session.log_split_detected(
                plan.kind.value,
                plan.removed_ids,
                [candidate.area_sq_ft for candidate in plan.candidates],
            )

        request = self.workflow.begin(plan)
        return CloseOutcome(CloseStatus.AWAITING_CLASSIFICATION, plan=plan, request=request)

    def classify(self, result: ClassificationResult) -> WorkflowState:
        """Answer the pending classification prompt."""
        state = self.workflow.submit(result)
        if state == WorkflowState.COMMITTED:
            self._after_commit()
        return state

    def cancel_classification(self) -> None:
        """Cancel the pending classification; existing areas stay as they were."""
        plan = self.workflow.plan
        self.workflow.cancel()
        self._after_cancel(plan)

    def run_classification(self, classifier: Classifier) -> WorkflowState:
        """Answer every pending prompt through a classifier."""
        plan = self.workflow.plan
        state = self.workflow.run(classifier)
        if state == WorkflowState.COMMITTED:
            self._after_commit()
        elif state == WorkflowState.CANCELLED:
            self._after_cancel(plan)
        return state

    def _after_commit(self) -> None:
        committed = self.workflow.committed_areas
        self.session.log_areas_committed([(area.id, area.label, area.area_sq_ft) for area in committed])
        self._refresh()

    def _after_cancel(self, plan: SplitPlan | None) -> None:
        if plan is not None and plan.is_split:
            self.session.log_split_cancelled()
        self._refresh()

    def delete_edge(self, area_id: int, edge_index: int) -> list[Point]:
        """Delete one edge of an area, reopening the rest as the current path.

        The area and its labels are removed in one step. The remaining
        boundary becomes the open path, starting at the deleted edge's end
        vertex and finishing at its start vertex; its vertices are kept as
        permanent points.

        Args:
            area_id: Area to open
            edge_index: Index of the edge's start vertex

        Returns:
            The reopened path

        Raises:
            AreaNotFoundError: If the area does not exist
            GeometryError: If the edge index is out of range
            PathError: If another path is being drawn
        """
        self._ensure_idle()
        area = self.store.get_area(area_id)
        n = len(area.path)
        if not 0 <= edge_index < n:
            raise GeometryError(f"Area {area_id} has no edge {edge_index}")
        if self.store.get_current_path():
            raise PathError("Finish or clear the current path before deleting an edge")

        start = (edge_index + 1) % n
        remaining = [area.path[(start + k) % n] for k in range(n)]
        reopened = name_path(remaining)

        self.store.replace_areas([area_id], [])
        self.store.set_current_path(reopened)
        self.helpers.add_permanent_points(remaining, origin=PermanentOrigin.EDGE_DELETION, group_id=area_id)
        self.store.set_permanent_points(self.helpers.permanent_points)
        self._refresh()

        self.session.log_edge_deleted(area_id, edge_index, len(reopened))
        self.observer.save_checkpoint()
        self._redraw()
        return reopened

    def translate_area(self, area_id: int, dx: float, dy: float) -> Area:
        """Move an area and its label by (dx, dy)."""
        self._ensure_idle()
        area = self.store.get_area(area_id)
        area.translate(dx, dy)
        self.store.set_labels_for(area)
        self._refresh()
        self.observer.save_checkpoint()
        self._redraw()
        return area

    def delete_area(self, area_id: int) -> None:
        """Remove an area together with its labels."""
        self._ensure_idle()
        self.store.remove_area(area_id)
        self._refresh()
        self.observer.save_checkpoint()
        self._redraw()

    def undo_last_point(self) -> Point | None:
        """Remove the last point of the open path."""
        self._ensure_idle()
        path = self.store.get_current_path()
        if not path:
            return None
        removed = path.pop()
        self.store.set_current_path(path)
        self.helpers.update_helper_points(path, self.store.get_areas())
        self._redraw()
        return removed

    def clear_path(self) -> None:
        """Discard the open path."""
        self._ensure_idle()
        self.store.set_current_path([])
        self.helpers.clear()
        self._redraw()
