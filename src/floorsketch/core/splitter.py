"""Area split engine.

When a newly closed path touches existing areas, the engine decides whether
the new path bisects one of them and, if so, reconstructs the two resulting
regions from a merged planar graph.

Process:
1. Find connected areas: areas sharing a vertex with the new path, or whose
   boundary passes through a new path vertex. Such vertices are inserted into
   a working copy of the boundary (the augmented boundary).
2. Build a planar graph from the augmented boundaries and the new path.
3. Gate on the two-cycle topology (E == V + 1, exactly two degree-3 vertices,
   all others degree 2). Anything else falls through to a plain new area.
4. Enumerate the simple paths between the two junctions (exactly three).
5. Combine the paths pairwise into three cycles, discard the largest (the
   full perimeter) and keep the other two.
6. Compare canonical ids of the two results with the connected areas. Exactly
   one match means the matched area is kept and only the other cycle is new;
   otherwise both cycles are new.

Canonical ids on both sides are computed from graph-resolved coordinates, so
a single merge/quantization step decides coincidence for the topology and for
the match test alike.

The engine never mutates the store; it returns a SplitPlan that the
classification workflow commits or discards.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum

import structlog

from floorsketch.config import SplitConfig
from floorsketch.core.geometry import area_sq_ft, canonical_path_id, insert_on_boundary
from floorsketch.core.graph import PlanarGraph, VertexKey
from floorsketch.domain import Area, Point, name_path
from floorsketch.exceptions import MalformedPathError, SplitInvariantError

logger = structlog.get_logger(__name__)


class SplitKind(str, Enum):
    """How a closed path turns into areas."""

    NEW_AREA = "new_area"
    SINGLE_NEW = "single_new"
    TWO_NEW = "two_new"


@dataclass(frozen=True, slots=True)
class SplitCandidate:
    """A region waiting for classification.

    Attributes:
        path: Boundary vertices named p0..pn
        area_sq_ft: Area of the region in square feet
    """

    path: list[Point]
    area_sq_ft: float


@dataclass
class SplitPlan:
    """Everything needed to commit (or discard) the result of a closed path.

    Attributes:
        kind: NEW_AREA, SINGLE_NEW or TWO_NEW
        candidates: Regions to classify, in prompt order (larger first)
        removed_ids: Areas replaced on commit
        kept_ids: Connected areas that stay unmodified
        originals: Connected areas as they were when the plan was made
    """

    kind: SplitKind
    candidates: list[SplitCandidate]
    removed_ids: list[int] = field(default_factory=list)
    kept_ids: list[int] = field(default_factory=list)
    originals: list[Area] = field(default_factory=list)

    @classmethod
    def new_area(cls, path: list[Point]) -> "SplitPlan":
        """Plan for an ordinary area that splits nothing."""
        candidate = SplitCandidate(path=name_path(path), area_sq_ft=area_sq_ft(path))
        return cls(kind=SplitKind.NEW_AREA, candidates=[candidate])

    @property
    def is_split(self) -> bool:
        return self.kind != SplitKind.NEW_AREA


@dataclass
class ConnectedArea:
    """An existing area touched by the new path.

    Attributes:
        area: The area, unmodified
        boundary: The area's boundary with touching path vertices inserted
    """

    area: Area
    boundary: list[Point]


class AreaSplitter:
    """Detects and resolves splits of existing areas by a new closed path."""

    def __init__(self, config: SplitConfig | None = None) -> None:
        self.config = config or SplitConfig()

    def find_connected_areas(self, path: list[Point], areas: list[Area]) -> list[ConnectedArea]:
        """Find areas the new path touches.

        Args:
            path: Closed new path
            areas: Existing areas

        Returns:
            Connected areas with their augmented boundaries, in store order
        """
        tolerance = self.config.merge_tolerance
        connected: list[ConnectedArea] = []

        for area in areas:
            boundary = list(area.path)
            touched = False
            for point in path:
                inserted = insert_on_boundary(boundary, point, tolerance)
                if inserted is not None:
                    boundary = inserted[0]
                    touched = True
            if touched:
                connected.append(ConnectedArea(area=area, boundary=boundary))

        return connected

    def build_graph(self, path: list[Point], connected: list[ConnectedArea]) -> PlanarGraph:
        """Merge connected boundaries and the new path into one planar graph.

        Boundaries are added first so their coordinates win vertex merges.
        """
        graph = PlanarGraph(self.config.merge_tolerance, self.config.coordinate_quantum)
        for item in connected:
            graph.add_cycle(item.boundary)
        graph.add_cycle(path)
        return graph

    def analyze(self, path: list[Point], areas: list[Area]) -> SplitPlan | None:
        """Decide whether a closed path splits an existing area.

        Args:
            path: Closed new path
            areas: Existing areas (read only)

        Returns:
            SplitPlan for a split, or None when the path is an ordinary new
            area (no connected areas, or the topology is not a two-cycle)

        Raises:
            MalformedPathError: If the path has fewer than 3 points
            SplitInvariantError: If the graph passes the two-cycle gate but
                cannot be decomposed into two regions
        """
        if len(path) < 3:
            raise MalformedPathError(len(path), "a closed path needs at least 3 points")

        connected = self.find_connected_areas(path, areas)
        if not connected:
            logger.debug("No connected areas", path_points=len(path))
            return None

        graph = self.build_graph(path, connected)
        logger.debug(
            "Split graph built",
            connected=[item.area.id for item in connected],
            vertices=graph.vertex_count,
            edges=graph.edge_count,
            degrees=graph.degree_histogram(),
        )

        if not graph.is_two_cycle():
            logger.debug("Not a two-cycle graph")
            return None

        junctions = graph.junctions()
        if len(junctions) != 2:
            raise SplitInvariantError("expected 2 junctions", junctions=len(junctions))

        paths = graph.simple_paths(junctions[0], junctions[1])
        if len(paths) != 3:
            raise SplitInvariantError("expected 3 junction paths", paths=len(paths))

        cycles = [self._construct_cycle(graph, a, b) for a, b in itertools.combinations(paths, 2)]
        cycles.sort(key=lambda cycle: cycle[1], reverse=True)
        results = cycles[1:]
        for points, size in results:
            if len(points) < 3 or size <= 0:
                raise SplitInvariantError("degenerate split cycle", points=len(points), area=size)

        return self._classify(graph, connected, results)

    @staticmethod
    def _construct_cycle(
        graph: PlanarGraph, first: list[VertexKey], second: list[VertexKey]
    ) -> tuple[list[Point], float]:
        # first runs j1 -> j2, second reversed runs j2 -> j1; drop its shared endpoints
        keys = first + list(reversed(second))[1:-1]
        points = [graph.coordinates(key) for key in keys]
        return points, area_sq_ft(points)

    def _classify(
        self,
        graph: PlanarGraph,
        connected: list[ConnectedArea],
        results: list[tuple[list[Point], float]],
    ) -> SplitPlan:
        original_ids: dict[str, int] = {}
        for item in connected:
            keys = [graph.resolve(point) for point in item.boundary]
            resolved = [graph.coordinates(key) for key in dict.fromkeys(keys) if key is not None]
            original_ids[canonical_path_id(resolved)] = item.area.id

        matches = [original_ids.get(canonical_path_id(points)) for points, _ in results]
        matched = [area_id for area_id in matches if area_id is not None]
        originals = [item.area for item in connected]
        connected_ids = [item.area.id for item in connected]

        if len(matched) == 1:
            kept_id = matched[0]
            points, size = next(r for r, m in zip(results, matches, strict=True) if m is None)
            logger.debug("Single new area split", kept=kept_id, new_area=round(size, 1))
            return SplitPlan(
                kind=SplitKind.SINGLE_NEW,
                candidates=[SplitCandidate(path=name_path(points), area_sq_ft=size)],
                removed_ids=[area_id for area_id in connected_ids if area_id != kept_id],
                kept_ids=[kept_id],
                originals=originals,
            )

        logger.debug(
            "Two new area split",
            removed=connected_ids,
            areas=[round(size, 1) for _, size in results],
        )
        return SplitPlan(
            kind=SplitKind.TWO_NEW,
            candidates=[SplitCandidate(path=name_path(points), area_sq_ft=size) for points, size in results],
            removed_ids=connected_ids,
            kept_ids=[],
            originals=originals,
        )
