"""Area store and change notification interfaces.

The sketching core never reaches for global state: it is handed an AreaStore
to read and write areas and the open path, and a SketchObserver to notify
about finished mutations.

SketchStore is the in-memory implementation. Its ``replace_areas`` validates
the whole change before touching anything and then swaps the area list in a
single assignment, so observers never see originals removed without their
replacements present.
"""

import copy
from collections.abc import Iterable
from typing import Any, Protocol

import structlog

from floorsketch.domain import Area, AreaLabel, PermanentPoint, Point
from floorsketch.exceptions import AreaNotFoundError, DuplicateAreaError

logger = structlog.get_logger(__name__)


class AreaStore(Protocol):
    """Read/write access to committed areas and the open path."""

    def get_areas(self) -> list[Area]: ...

    def replace_areas(self, removed_ids: Iterable[int], added: Iterable[Area]) -> None: ...

    def get_current_path(self) -> list[Point]: ...

    def set_current_path(self, points: list[Point]) -> None: ...

    def next_area_id(self) -> int: ...


class SketchObserver(Protocol):
    """Receives notifications after the sketch changed."""

    def request_redraw(self, timestamp: float) -> None: ...

    def save_checkpoint(self) -> None: ...


class NullObserver:
    """Observer that ignores every notification."""

    def request_redraw(self, timestamp: float) -> None:
        pass

    def save_checkpoint(self) -> None:
        pass


class SketchStore:
    """In-memory owner of areas, area labels, the open path and permanent points."""

    def __init__(
        self,
        areas: Iterable[Area] = (),
        permanent_points: Iterable[PermanentPoint] = (),
    ) -> None:
        self._areas: list[Area] = []
        self._labels: dict[int, AreaLabel] = {}
        self._current_path: list[Point] = []
        self._permanent: list[PermanentPoint] = list(permanent_points)
        self.replace_areas([], areas)

    def get_areas(self) -> list[Area]:
        return list(self._areas)

    def get_area(self, area_id: int) -> Area:
        """Look up an area by id.

        Raises:
            AreaNotFoundError: If no area has this id
        """
        for area in self._areas:
            if area.id == area_id:
                return area
        raise AreaNotFoundError(area_id)

    def replace_areas(self, removed_ids: Iterable[int], added: Iterable[Area]) -> None:
        """Atomically remove some areas and add others.

        Labels bound to removed areas are dropped and labels for added areas
        are generated in the same step.

        Args:
            removed_ids: Ids of areas to remove
            added: New areas

        Raises:
            AreaNotFoundError: If a removed id does not exist
            DuplicateAreaError: If an added id collides with a remaining area
                or with another added area
        """
        removed = list(removed_ids)
        new_areas = list(added)

        existing_ids = {area.id for area in self._areas}
        for area_id in removed:
            if area_id not in existing_ids:
                raise AreaNotFoundError(area_id)

        taken = existing_ids - set(removed)
        for area in new_areas:
            if area.id in taken:
                raise DuplicateAreaError(area.id)
            taken.add(area.id)

        removed_set = set(removed)
        labels = {area_id: label for area_id, label in self._labels.items() if area_id not in removed_set}
        for area in new_areas:
            labels[area.id] = AreaLabel.for_area(area)

        self._areas, self._labels = (
            [area for area in self._areas if area.id not in removed_set] + new_areas,
            labels,
        )

        if removed or new_areas:
            logger.debug(
                "Areas replaced",
                removed=removed,
                added=[area.id for area in new_areas],
                total=len(self._areas),
            )

    def add_area(self, area: Area) -> None:
        self.replace_areas([], [area])

    def remove_area(self, area_id: int) -> None:
        self.replace_areas([area_id], [])

    def next_area_id(self) -> int:
        """Smallest id greater than every existing area id."""
        return max((area.id for area in self._areas), default=0) + 1

    def get_current_path(self) -> list[Point]:
        return list(self._current_path)

    def set_current_path(self, points: list[Point]) -> None:
        self._current_path = list(points)

    def labels_for(self, area_id: int) -> list[AreaLabel]:
        """Label entities bound to an area."""
        label = self._labels.get(area_id)
        return [label] if label is not None else []

    def set_labels_for(self, area: Area) -> AreaLabel:
        """Regenerate the label entity of an area from its current geometry."""
        label = AreaLabel.for_area(area)
        self._labels[area.id] = label
        return label

    @property
    def labels(self) -> list[AreaLabel]:
        return list(self._labels.values())

    def get_permanent_points(self) -> list[PermanentPoint]:
        return list(self._permanent)

    def set_permanent_points(self, points: list[PermanentPoint]) -> None:
        self._permanent = list(points)

    def snapshot(self) -> dict[str, Any]:
        """Plain data copy of the store for history collaborators."""
        return {
            "areas": [area.to_record() for area in self._areas],
            "current_path": [p.to_dict() for p in self._current_path],
            "permanent_points": [p.to_dict() for p in self._permanent],
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Replace the whole store content with a snapshot."""
        data = copy.deepcopy(snapshot)
        areas = [Area.from_record(record) for record in data.get("areas", [])]
        self._areas = []
        self._labels = {}
        self.replace_areas([], areas)
        self._current_path = [Point.from_dict(p) for p in data.get("current_path", [])]
        self._permanent = [PermanentPoint.from_dict(p) for p in data.get("permanent_points", [])]
