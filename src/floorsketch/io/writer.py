"""Sketch writer for saving sketch files.

This module provides the SketchWriter class for writing areas and permanent
helper points as a versioned sketch export.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from floorsketch.domain import Area, PermanentPoint
from floorsketch.exceptions import SketchSaveError
from floorsketch.io.converter import area_to_record

EXPORT_VERSION = "2.0"
APPLICATION_NAME = "Floor Plan Sketcher"


def build_document(
    areas: list[Area],
    permanent_points: list[PermanentPoint],
    name: str,
    created_at: datetime | None = None,
) -> dict[str, Any]:
    """Assemble the export document.

    Args:
        areas: Areas to export
        permanent_points: Permanent helper points to export
        name: Sketch name stored in the metadata
        created_at: Export timestamp (now if None)

    Returns:
        JSON-serializable export document
    """
    timestamp = (created_at or datetime.now()).isoformat()
    return {
        "version": EXPORT_VERSION,
        "createdAt": timestamp,
        "application": APPLICATION_NAME,
        "data": {
            "drawnPolygons": [area_to_record(area) for area in areas],
            "permanentHelperPoints": [point.to_dict() for point in permanent_points],
        },
        "metadata": {
            "name": name,
            "areaCount": len(areas),
        },
    }


class SketchWriter:
    """Writes sketches as versioned JSON exports.

    Example:
        writer = SketchWriter(Path("house.json"))
        writer.save(store.get_areas(), store.get_permanent_points())
    """

    def __init__(self, output_path: Path, name: str | None = None) -> None:
        """Initialize the sketch writer.

        Args:
            output_path: Path where the sketch will be saved
            name: Sketch name (defaults to the file stem)
        """
        self._output_path = output_path
        self._name = name or output_path.stem

    def save(self, areas: list[Area], permanent_points: list[PermanentPoint] | None = None) -> None:
        """Save the sketch file to the output path.

        Raises:
            SketchSaveError: If the file cannot be written
        """
        document = build_document(areas, permanent_points or [], self._name)
        try:
            self._output_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            raise SketchSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_updated_path(input_path: Path) -> Path:
        """Generate the default output path for an edited sketch.

        Converts: house.json -> house-edited.json
        """
        return input_path.parent / f"{input_path.stem}-edited{input_path.suffix}"
