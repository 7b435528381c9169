"""Command-line interface for floorsketch.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Area table and GLA / non-GLA totals for a sketch file
- Replaying pointer input to draw and split areas
- Interactive or suggestion-accepting classification
- Detailed error reporting
"""

from floorsketch.cli.app import cli, main

__all__ = ["cli", "main"]
