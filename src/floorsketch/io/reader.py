"""Sketch reader for loading exported sketch files.

This module provides the SketchReader class for loading sketch JSON files
and converting their area records into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from floorsketch.domain import Area, PermanentPoint
from floorsketch.exceptions import SketchFormatError, SketchLoadError
from floorsketch.io.converter import area_from_record, permanent_point_from_record


class SketchReader:
    """Loads sketch files and extracts areas.

    Three document shapes are accepted:
    - a full export: {"version", "data": {"drawnPolygons": [...], ...}}
    - the bare data object: {"drawnPolygons": [...], ...}
    - a bare list of area records

    Example:
        with SketchReader(Path("house.json")) as reader:
            for area in reader.iter_areas():
                print(area.label, area.area_sq_ft)
    """

    def __init__(self, sketch_path: Path) -> None:
        """Initialize the sketch reader.

        Args:
            sketch_path: Path to the sketch JSON file
        """
        self._sketch_path = sketch_path
        self._data: dict[str, Any] | None = None

    def load(self) -> None:
        """Load and decode the sketch file.

        Raises:
            SketchLoadError: If the file is missing or not valid JSON
            SketchFormatError: If the document has an unexpected shape
        """
        if not self._sketch_path.exists():
            raise SketchLoadError(str(self._sketch_path), "file not found")

        try:
            document = json.loads(self._sketch_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise SketchLoadError(str(self._sketch_path), str(e)) from e
        except json.JSONDecodeError as e:
            raise SketchLoadError(str(self._sketch_path), f"invalid JSON: {e}") from e

        self._data = self._extract_data(document)

    @staticmethod
    def _extract_data(document: Any) -> dict[str, Any]:
        if isinstance(document, list):
            return {"drawnPolygons": document}
        if not isinstance(document, dict):
            raise SketchFormatError("sketch must be a JSON object or list")

        data = document.get("data", document)
        if not isinstance(data, dict):
            raise SketchFormatError("'data' must be an object")
        if not isinstance(data.get("drawnPolygons", []), list):
            raise SketchFormatError("'drawnPolygons' must be a list")
        return data

    def _require_loaded(self) -> dict[str, Any]:
        if self._data is None:
            raise RuntimeError("Sketch not loaded. Call load() first.")
        return self._data

    @property
    def area_count(self) -> int:
        """Number of area records in the sketch."""
        return len(self._require_loaded().get("drawnPolygons", []))

    def iter_areas(self) -> Iterator[Area]:
        """Iterate over the sketch's areas in stored order.

        Raises:
            SketchFormatError: If a record is malformed
        """
        for record in self._require_loaded().get("drawnPolygons", []):
            yield area_from_record(record)

    def get_areas(self) -> list[Area]:
        return list(self.iter_areas())

    def get_permanent_points(self) -> list[PermanentPoint]:
        """Permanent helper points stored with the sketch."""
        records = self._require_loaded().get("permanentHelperPoints", [])
        if not isinstance(records, list):
            raise SketchFormatError("'permanentHelperPoints' must be a list")
        return [permanent_point_from_record(record) for record in records]

    def close(self) -> None:
        """Drop the loaded document."""
        self._data = None

    def __enter__(self) -> "SketchReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
