"""Unit tests for the classification workflow.

Tests cover:
- Label suggestions and generated labels
- One-step (new area, SINGLE_NEW) and two-step (TWO_NEW) workflows
- Atomic commit with redraw and checkpoint notifications
- Cancellation leaving the store untouched
- Re-entrancy guard
"""

import pytest

from floorsketch.core.classification import (
    ClassificationResult,
    ClassificationWorkflow,
    WorkflowState,
    generate_area_label,
    suggested_types,
)
from floorsketch.core.splitter import AreaSplitter, SplitKind, SplitPlan
from floorsketch.core.store import SketchStore
from floorsketch.domain import Area, AreaType, Point, name_path
from floorsketch.exceptions import NoPendingClassificationError, SplitInProgressError

RECT = [Point(0, 0), Point(160, 0), Point(160, 80), Point(0, 80)]
LEFT_HALF = [Point(80, 0), Point(80, 80), Point(0, 80), Point(0, 0)]


class RecordingObserver:
    """Collects notifications for assertions."""

    def __init__(self):
        self.redraws: list[float] = []
        self.checkpoints = 0

    def request_redraw(self, timestamp: float) -> None:
        self.redraws.append(timestamp)

    def save_checkpoint(self) -> None:
        self.checkpoints += 1


class ScriptedClassifier:
    """Answers prompts from a list; None cancels."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.requests = []

    def classify(self, request):
        self.requests.append(request)
        return self.answers.pop(0)


def make_workflow(*areas: Area):
    store = SketchStore(areas)
    observer = RecordingObserver()
    return store, observer, ClassificationWorkflow(store, observer, clock=lambda: 42.0)


def living_room() -> Area:
    return Area(1, name_path(RECT), "Living Room 1")


class TestLabels:
    """Tests for label generation."""

    def test_first_label_of_type(self):
        assert generate_area_label(AreaType.GARAGE, []) == "Garage 1"

    def test_counts_existing_areas_of_type(self):
        areas = [living_room(), Area(2, RECT, "Garage 1", AreaType.GARAGE, False)]
        assert generate_area_label(AreaType.LIVING, areas) == "Living Room 2"
        assert generate_area_label(AreaType.BEDROOM, areas) == "Bedroom 1"

    def test_suggested_types(self):
        assert suggested_types(SplitKind.NEW_AREA) == [AreaType.LIVING]
        assert suggested_types(SplitKind.SINGLE_NEW) == [AreaType.GARAGE]
        assert suggested_types(SplitKind.TWO_NEW) == [AreaType.LIVING, AreaType.GARAGE]


class TestNewAreaWorkflow:
    """Tests for a one-step workflow."""

    def test_begin_prompts_for_living_room(self):
        _, _, workflow = make_workflow()
        request = workflow.begin(SplitPlan.new_area(RECT))

        assert workflow.state == WorkflowState.AWAITING_FIRST_LABEL
        assert request.suggested_type == AreaType.LIVING
        assert request.suggested_label == "Living Room 1"
        assert request.area_sq_ft == pytest.approx(200.0)
        assert (request.step, request.total) == (1, 1)

    def test_submit_commits(self):
        store, observer, workflow = make_workflow()
        store.set_current_path(RECT)
        workflow.begin(SplitPlan.new_area(RECT))
        state = workflow.submit(ClassificationResult("", AreaType.LIVING))

        assert state == WorkflowState.COMMITTED
        areas = store.get_areas()
        assert len(areas) == 1
        assert areas[0].id == 1
        assert areas[0].label == "Living Room 1"
        assert areas[0].is_gla
        assert areas[0].area_sq_ft == pytest.approx(200.0)
        assert store.get_current_path() == []
        assert observer.redraws == [42.0]
        assert observer.checkpoints == 1
        assert workflow.committed_areas == areas

    def test_explicit_label_and_gla_flag(self):
        store, _, workflow = make_workflow()
        workflow.begin(SplitPlan.new_area(RECT))
        workflow.submit(ClassificationResult("  Family Room ", AreaType.LIVING, is_gla=False))

        area = store.get_areas()[0]
        assert area.label == "Family Room"
        assert not area.is_gla

    def test_gla_defaults_to_type(self):
        store, _, workflow = make_workflow()
        workflow.begin(SplitPlan.new_area(RECT))
        workflow.submit(ClassificationResult("", AreaType.GARAGE))

        area = store.get_areas()[0]
        assert area.label == "Garage 1"
        assert not area.is_gla

    def test_ids_follow_existing_areas(self):
        store, _, workflow = make_workflow(living_room())
        far = [Point(400, 0), Point(480, 0), Point(480, 80)]
        workflow.begin(SplitPlan.new_area(far))
        workflow.submit(ClassificationResult("", AreaType.LIVING))

        assert [a.id for a in store.get_areas()] == [1, 2]
        assert store.get_area(2).label == "Living Room 2"


class TestSplitWorkflow:
    """Tests for two-step classification of a TWO_NEW plan."""

    def two_new_plan(self, store: SketchStore) -> SplitPlan:
        plan = AreaSplitter().analyze(LEFT_HALF, store.get_areas())
        assert plan is not None
        assert plan.kind == SplitKind.TWO_NEW
        return plan

    def test_two_prompts(self):
        store, _, workflow = make_workflow(living_room())
        first = workflow.begin(self.two_new_plan(store))

        assert first.suggested_type == AreaType.LIVING
        # The bisected living room is removed on commit, so numbering restarts
        assert first.suggested_label == "Living Room 1"
        assert (first.step, first.total) == (1, 2)

        state = workflow.submit(ClassificationResult("", AreaType.LIVING))
        assert state == WorkflowState.AWAITING_SECOND_LABEL

        second = workflow.pending_request
        assert second is not None
        assert second.suggested_type == AreaType.GARAGE
        assert second.suggested_label == "Garage 1"
        assert second.step == 2

    def test_commit_replaces_original(self):
        store, observer, workflow = make_workflow(living_room())
        workflow.begin(self.two_new_plan(store))
        workflow.submit(ClassificationResult("", AreaType.LIVING))
        workflow.submit(ClassificationResult("", AreaType.GARAGE))

        areas = store.get_areas()
        assert [a.id for a in areas] == [2, 3]
        assert [a.label for a in areas] == ["Living Room 1", "Garage 1"]
        assert sum(a.area_sq_ft for a in areas) == pytest.approx(200.0)
        assert store.labels_for(1) == []
        assert observer.checkpoints == 1

    def test_same_type_numbers_sequentially(self):
        store, _, workflow = make_workflow(living_room())
        workflow.begin(self.two_new_plan(store))
        workflow.submit(ClassificationResult("", AreaType.BEDROOM))
        workflow.submit(ClassificationResult("", AreaType.BEDROOM))

        assert [a.label for a in store.get_areas()] == ["Bedroom 1", "Bedroom 2"]


class TestCancellation:
    """Tests for abandoning a pending plan."""

    def test_cancel_at_first_prompt(self):
        original = living_room()
        store, observer, workflow = make_workflow(original)
        before = [a.to_record() for a in store.get_areas()]
        store.set_current_path(LEFT_HALF)

        workflow.begin(AreaSplitter().analyze(LEFT_HALF, store.get_areas()))
        workflow.cancel()

        assert workflow.state == WorkflowState.CANCELLED
        assert [a.to_record() for a in store.get_areas()] == before
        assert store.get_current_path() == []
        assert observer.redraws == [42.0]
        assert observer.checkpoints == 0

    def test_cancel_at_second_prompt(self):
        store, _, workflow = make_workflow(living_room())
        before = [a.to_record() for a in store.get_areas()]

        workflow.begin(AreaSplitter().analyze(LEFT_HALF, store.get_areas()))
        workflow.submit(ClassificationResult("Den", AreaType.LIVING))
        workflow.cancel()

        assert [a.to_record() for a in store.get_areas()] == before
        assert workflow.plan is None

    def test_cancel_without_pending(self):
        _, _, workflow = make_workflow()
        with pytest.raises(NoPendingClassificationError):
            workflow.cancel()


class TestGuards:
    """Tests for workflow state guards."""

    def test_second_plan_rejected_while_awaiting(self):
        _, _, workflow = make_workflow()
        workflow.begin(SplitPlan.new_area(RECT))
        with pytest.raises(SplitInProgressError):
            workflow.begin(SplitPlan.new_area(RECT))

    def test_submit_without_pending(self):
        _, _, workflow = make_workflow()
        with pytest.raises(NoPendingClassificationError) as excinfo:
            workflow.submit(ClassificationResult("", AreaType.LIVING))
        assert excinfo.value.state == "idle"

    def test_new_plan_after_commit(self):
        _, _, workflow = make_workflow()
        workflow.begin(SplitPlan.new_area(RECT))
        workflow.submit(ClassificationResult("", AreaType.LIVING))
        workflow.begin(SplitPlan.new_area([Point(400, 0), Point(480, 0), Point(480, 80)]))
        assert workflow.is_awaiting

    def test_no_pending_request_when_idle(self):
        _, _, workflow = make_workflow()
        assert workflow.pending_request is None


class TestRun:
    """Tests for driving a workflow through a classifier."""

    def test_run_commits(self):
        store, _, workflow = make_workflow(living_room())
        workflow.begin(AreaSplitter().analyze(LEFT_HALF, store.get_areas()))
        classifier = ScriptedClassifier(
            [ClassificationResult("", AreaType.LIVING), ClassificationResult("", AreaType.GARAGE)]
        )

        assert workflow.run(classifier) == WorkflowState.COMMITTED
        assert [r.step for r in classifier.requests] == [1, 2]
        assert len(store.get_areas()) == 2

    def test_run_cancels(self):
        store, _, workflow = make_workflow(living_room())
        workflow.begin(AreaSplitter().analyze(LEFT_HALF, store.get_areas()))
        classifier = ScriptedClassifier([ClassificationResult("", AreaType.LIVING), None])

        assert workflow.run(classifier) == WorkflowState.CANCELLED
        assert [a.id for a in store.get_areas()] == [1]
