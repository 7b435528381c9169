"""Classification workflow for newly produced areas.

A short state machine that collects a label and category for each candidate
of a SplitPlan before committing the plan to the store:

    IDLE -> AWAITING_FIRST_LABEL -> [AWAITING_SECOND_LABEL] -> COMMITTED

CANCELLED is reachable from either awaiting state. Areas in the store are not
touched until the last label arrives, so cancelling leaves them exactly as they
were. The commit itself is one ``replace_areas`` call followed by a redraw
request and an undo checkpoint.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import structlog

from floorsketch.core.splitter import SplitKind, SplitPlan
from floorsketch.core.store import AreaStore, NullObserver, SketchObserver
from floorsketch.domain import Area, AreaType
from floorsketch.exceptions import NoPendingClassificationError, SplitInProgressError

logger = structlog.get_logger(__name__)


class WorkflowState(str, Enum):
    """Classification workflow states."""

    IDLE = "idle"
    AWAITING_FIRST_LABEL = "awaiting_first_label"
    AWAITING_SECOND_LABEL = "awaiting_second_label"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class ClassificationRequest:
    """Prompt for one candidate area.

    Attributes:
        area_sq_ft: Size of the candidate
        suggested_type: Default category
        suggested_label: Default label, e.g. "Garage 2"
        step: 1-based position of this prompt
        total: Number of prompts in the workflow
    """

    area_sq_ft: float
    suggested_type: AreaType
    suggested_label: str
    step: int
    total: int


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """User's answer to a ClassificationRequest.

    Attributes:
        label: Area label; blank falls back to a generated label
        area_type: Chosen category
        is_gla: GLA flag; None uses the category default
    """

    label: str
    area_type: AreaType
    is_gla: bool | None = None


class Classifier(Protocol):
    """Answers classification prompts; returning None cancels the workflow."""

    def classify(self, request: ClassificationRequest) -> ClassificationResult | None: ...


def generate_area_label(area_type: AreaType, areas: list[Area]) -> str:
    """Label "<display name> <n>" where n counts existing areas of the type.

    Examples:
        >>> generate_area_label(AreaType.GARAGE, [])
        'Garage 1'
    """
    count = sum(1 for area in areas if area.area_type == area_type)
    return f"{area_type.display_name} {count + 1}"


def suggested_types(kind: SplitKind) -> list[AreaType]:
    """Default category for each prompt of a plan kind."""
    if kind == SplitKind.TWO_NEW:
        return [AreaType.LIVING, AreaType.GARAGE]
    if kind == SplitKind.SINGLE_NEW:
        return [AreaType.GARAGE]
    return [AreaType.LIVING]


class ClassificationWorkflow:
    """Drives one SplitPlan from proposal to commit or cancellation.

    The workflow doubles as the re-entrancy guard of the split engine: a new
    plan cannot begin while another one is awaiting input.
    """

    def __init__(
        self,
        store: AreaStore,
        observer: SketchObserver | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.observer = observer or NullObserver()
        self._clock = clock
        self._state = WorkflowState.IDLE
        self._plan: SplitPlan | None = None
        self._classified: list[Area] = []
        self._committed: list[Area] = []

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def plan(self) -> SplitPlan | None:
        return self._plan

    @property
    def is_awaiting(self) -> bool:
        return self._state in (WorkflowState.AWAITING_FIRST_LABEL, WorkflowState.AWAITING_SECOND_LABEL)

    @property
    def committed_areas(self) -> list[Area]:
        """Areas added by the last commit."""
        return list(self._committed)

    @property
    def pending_request(self) -> ClassificationRequest | None:
        """Prompt for the candidate currently awaiting a label."""
        if not self.is_awaiting or self._plan is None:
            return None

        step = len(self._classified)
        candidate = self._plan.candidates[step]
        suggested_type = suggested_types(self._plan.kind)[step]
        return ClassificationRequest(
            area_sq_ft=candidate.area_sq_ft,
            suggested_type=suggested_type,
            suggested_label=generate_area_label(suggested_type, self._label_context()),
            step=step + 1,
            total=len(self._plan.candidates),
        )

    def begin(self, plan: SplitPlan) -> ClassificationRequest:
        """Start classifying a plan.

        Args:
            plan: Plan produced by the split engine (or a plain new area plan)

        Returns:
            The first prompt

        Raises:
            SplitInProgressError: If another plan is still awaiting input
        """
        if self.is_awaiting:
            raise SplitInProgressError()

        self._plan = plan
        self._classified = []
        self._committed = []
        self._state = WorkflowState.AWAITING_FIRST_LABEL
        logger.debug(
            "Classification started",
            kind=plan.kind.value,
            candidates=len(plan.candidates),
            removed=plan.removed_ids,
        )

        request = self.pending_request
        assert request is not None
        return request

    def submit(self, result: ClassificationResult) -> WorkflowState:
        """Answer the pending prompt.

        Args:
            result: Label, category and GLA flag for the pending candidate

        Returns:
            State after the answer (AWAITING_SECOND_LABEL or COMMITTED)

        Raises:
            NoPendingClassificationError: If nothing is awaiting a label
        """
        if not self.is_awaiting or self._plan is None:
            raise NoPendingClassificationError(self._state.value)

        candidate = self._plan.candidates[len(self._classified)]
        label = result.label.strip() or generate_area_label(result.area_type, self._label_context())
        is_gla = result.is_gla if result.is_gla is not None else result.area_type.default_gla

        self._classified.append(
            Area(
                id=0,
                path=list(candidate.path),
                label=label,
                area_type=result.area_type,
                is_gla=is_gla,
            )
        )

        if len(self._classified) < len(self._plan.candidates):
            self._state = WorkflowState.AWAITING_SECOND_LABEL
            return self._state

        self._commit()
        return self._state

    def cancel(self) -> None:
        """Abandon the pending plan.

        Committed areas are left untouched; the closed path is discarded.

        Raises:
            NoPendingClassificationError: If nothing is awaiting a label
        """
        if not self.is_awaiting or self._plan is None:
            raise NoPendingClassificationError(self._state.value)

        logger.debug("Classification cancelled", kind=self._plan.kind.value, step=len(self._classified) + 1)
        self._plan = None
        self._classified = []
        self.store.set_current_path([])
        self._state = WorkflowState.CANCELLED
        self.observer.request_redraw(self._clock())

    def run(self, classifier: Classifier) -> WorkflowState:
        """Answer every pending prompt through a classifier.

        Returns:
            COMMITTED, or CANCELLED if the classifier returned None
        """
        while self.is_awaiting:
            request = self.pending_request
            assert request is not None
            result = classifier.classify(request)
            if result is None:
                self.cancel()
            else:
                self.submit(result)
        return self._state

    def _label_context(self) -> list[Area]:
        # Areas that will exist once the plan commits, for label numbering
        assert self._plan is not None
        removed = set(self._plan.removed_ids)
        remaining = [area for area in self.store.get_areas() if area.id not in removed]
        return remaining + self._classified

    def _commit(self) -> None:
        assert self._plan is not None
        first_id = self.store.next_area_id()
        added = []
        for offset, area in enumerate(self._classified):
            area.id = first_id + offset
            added.append(area)

        self.store.replace_areas(self._plan.removed_ids, added)
        self.store.set_current_path([])

        self._committed = added
        self._plan = None
        self._classified = []
        self._state = WorkflowState.COMMITTED
        logger.debug(
            "Areas committed",
            areas=[(area.id, area.label, round(area.area_sq_ft, 1)) for area in added],
        )

        self.observer.request_redraw(self._clock())
        self.observer.save_checkpoint()
