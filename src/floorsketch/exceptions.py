"""Exception hierarchy for Floorsketch."""


class FloorSketchError(Exception):
    """Base exception for all Floorsketch errors."""

    pass


class GeometryError(FloorSketchError):
    """Errors in geometric calculations."""

    pass


class PathError(FloorSketchError):
    """Errors related to drawing paths."""

    pass


class MalformedPathError(PathError):
    """A path that cannot form an area reached an operation requiring one."""

    def __init__(self, point_count: int, reason: str) -> None:
        self.point_count = point_count
        self.reason = reason
        super().__init__(f"Malformed path with {point_count} points: {reason}")


class SplitError(FloorSketchError):
    """Errors related to area splitting."""

    pass


class SplitInvariantError(SplitError):
    """Internal invariant of the split engine was violated.

    These indicate a bug or an unexpected graph, never a user mistake. The
    split is aborted and the pre-split areas stay in place.
    """

    def __init__(self, reason: str, **details: object) -> None:
        self.reason = reason
        self.details = details
        super().__init__(f"Split invariant violated: {reason}")


class SplitInProgressError(SplitError):
    """A second split was attempted while classification is still pending."""

    def __init__(self) -> None:
        super().__init__("A split is already awaiting classification")


class WorkflowError(FloorSketchError):
    """Errors related to the classification workflow."""

    pass


class NoPendingClassificationError(WorkflowError):
    """Classification input arrived while nothing was awaiting it."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"No classification pending (workflow state: {state})")


class StoreError(FloorSketchError):
    """Errors related to the area store."""

    pass


class AreaNotFoundError(StoreError):
    """Requested area does not exist in the store."""

    def __init__(self, area_id: int) -> None:
        self.area_id = area_id
        super().__init__(f"Area {area_id} not found")


class DuplicateAreaError(StoreError):
    """An area with the same id already exists in the store."""

    def __init__(self, area_id: int) -> None:
        self.area_id = area_id
        super().__init__(f"Area {area_id} already exists")


class SketchIOError(FloorSketchError):
    """Errors related to sketch loading or saving."""

    pass


class SketchLoadError(SketchIOError):
    """Error loading a sketch file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load sketch '{path}': {reason}")


class SketchSaveError(SketchIOError):
    """Error saving a sketch file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save sketch '{path}': {reason}")


class SketchFormatError(SketchIOError):
    """Invalid persisted area record or sketch document."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid sketch data: {details}")
