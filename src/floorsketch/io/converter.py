"""Conversion between persisted records and domain models.

The persisted area record shape is fixed:

    {id, path: [{x, y, name?}], label, type, glaType: 0|1, area, centroid: {x, y}}

``area`` and ``centroid`` are derived values. They are written on export and
recomputed from the path on import.
"""

from typing import Any

import structlog

from floorsketch.domain import Area, AreaType, PermanentPoint
from floorsketch.exceptions import SketchFormatError

logger = structlog.get_logger(__name__)

# Stored area values further than this from the recomputed value are reported.
AREA_MISMATCH_TOLERANCE = 0.5

_REQUIRED_FIELDS = ("id", "path")


def area_to_record(area: Area) -> dict[str, Any]:
    """Convert an area to its persisted record."""
    return area.to_record()


def area_from_record(record: Any) -> Area:
    """Convert a persisted record to an area.

    Args:
        record: Decoded JSON object

    Returns:
        Area with derived values recomputed from its path

    Raises:
        SketchFormatError: If the record is not a valid area record
    """
    if not isinstance(record, dict):
        raise SketchFormatError(f"area record must be an object, got {type(record).__name__}")

    for name in _REQUIRED_FIELDS:
        if name not in record:
            raise SketchFormatError(f"area record is missing '{name}'")

    if not isinstance(record["path"], list):
        raise SketchFormatError(f"area {record['id']}: 'path' must be a list")

    area_type = record.get("type", AreaType.LIVING.value)
    if area_type not in {t.value for t in AreaType}:
        raise SketchFormatError(f"area {record['id']}: unknown type '{area_type}'")

    if record.get("glaType", 1) not in (0, 1):
        raise SketchFormatError(f"area {record['id']}: glaType must be 0 or 1")

    try:
        area = Area.from_record(record)
    except (KeyError, TypeError, ValueError) as e:
        raise SketchFormatError(f"area {record.get('id')}: {e}") from e

    stored = record.get("area")
    if isinstance(stored, (int, float)) and abs(stored - area.area_sq_ft) > AREA_MISMATCH_TOLERANCE:
        logger.warning(
            "Stored area differs from path",
            area_id=area.id,
            stored=stored,
            computed=round(area.area_sq_ft, 2),
        )

    return area


def permanent_point_from_record(record: Any) -> PermanentPoint:
    """Convert a persisted permanent helper point.

    Raises:
        SketchFormatError: If the record is malformed
    """
    if not isinstance(record, dict):
        raise SketchFormatError("permanent helper point must be an object")
    try:
        return PermanentPoint.from_dict(record)
    except (KeyError, TypeError, ValueError) as e:
        raise SketchFormatError(f"permanent helper point: {e}") from e
