"""Core sketching algorithms for floorsketch.

This module contains the core algorithms for:

- Geometry operations (shoelace area, point-in-polygon, segment projection)
- Snapping cursor positions to vertices, edges and the grid
- Alignment helper point generation
- Split detection and region reconstruction on a merged planar graph
- Classification of new areas and atomic commit to the store

Key functions:
- signed_area / area_sq_ft: Polygon area using the shoelace formula
- point_in_polygon: Test if point is inside polygon
- project_onto_segment: Find closest point on line segment
- canonical_path_id: Order-independent path identity
- summarize: GLA / non-GLA totals

Key classes:
- SnapSystem: Resolves cursor positions to snap targets
- HelperPointSystem: Generates alignment helper points
- PlanarGraph: Merged boundary graph with two-cycle detection
- AreaSplitter: Decides whether a closed path splits an existing area
- ClassificationWorkflow: Labels new areas and commits them
- SketchStore: In-memory area store
- Sketcher: Drawing session orchestration
"""

from floorsketch.core.classification import (
    ClassificationRequest,
    ClassificationResult,
    ClassificationWorkflow,
    Classifier,
    WorkflowState,
    generate_area_label,
)
from floorsketch.core.geometry import (
    area_sq_ft,
    canonical_path_id,
    centroid,
    point_in_polygon,
    project_onto_segment,
    segment_intersection,
    signed_area,
)
from floorsketch.core.graph import PlanarGraph
from floorsketch.core.helpers import HelperPointSystem
from floorsketch.core.sketcher import CloseOutcome, CloseStatus, PointOutcome, PointStatus, Sketcher
from floorsketch.core.snap import SnapSystem
from floorsketch.core.splitter import AreaSplitter, SplitCandidate, SplitKind, SplitPlan
from floorsketch.core.store import AreaStore, NullObserver, SketchObserver, SketchStore
from floorsketch.core.summary import AreaSummary, summarize
from floorsketch.core.validation import PathValidator, ValidationCode, ValidationResult

__all__ = [
    # Split engine
    "AreaSplitter",
    # Store
    "AreaStore",
    "AreaSummary",
    # Classification
    "ClassificationRequest",
    "ClassificationResult",
    "ClassificationWorkflow",
    "Classifier",
    # Session
    "CloseOutcome",
    "CloseStatus",
    "HelperPointSystem",
    "NullObserver",
    # Validation
    "PathValidator",
    "PlanarGraph",
    "PointOutcome",
    "PointStatus",
    "SketchObserver",
    "SketchStore",
    "Sketcher",
    "SnapSystem",
    "SplitCandidate",
    "SplitKind",
    "SplitPlan",
    "ValidationCode",
    "ValidationResult",
    "WorkflowState",
    # Geometry functions
    "area_sq_ft",
    "canonical_path_id",
    "centroid",
    "generate_area_label",
    "point_in_polygon",
    "project_onto_segment",
    "segment_intersection",
    "signed_area",
    "summarize",
]
