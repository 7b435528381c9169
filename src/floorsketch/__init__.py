"""Floorsketch - Interactive 2D floor-plan sketching engine.

Floorsketch turns user-placed points into closed, labeled areas. It snaps new
points onto existing geometry, generates alignment helper points while a path
is being drawn, and detects when a newly closed path subdivides an existing
area so the two resulting regions can be classified separately.

Example:
    $ floorsketch summary house.json

This prints the gross living area (GLA) and non-GLA totals for the sketch.
"""

__version__ = "0.1.0"
__author__ = "Floorsketch Developers"

__all__ = ["__author__", "__version__"]
