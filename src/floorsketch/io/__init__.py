"""Sketch I/O layer for floorsketch.

This module handles reading and writing sketch JSON exports. It provides a
clean abstraction layer between the persisted record shape and the domain
models.

Key responsibilities:
- Load sketch exports (full export, bare data object, or bare record list)
- Convert persisted area records to domain models, recomputing derived values
- Write versioned sketch exports

Key classes:
- SketchReader: Load sketches and extract areas
- SketchWriter: Save sketches
"""

from floorsketch.io.converter import area_from_record, area_to_record
from floorsketch.io.reader import SketchReader
from floorsketch.io.writer import SketchWriter

__all__ = [
    "SketchReader",
    "SketchWriter",
    "area_from_record",
    "area_to_record",
]
