"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from floorsketch.core import AreaSummary
from floorsketch.domain import Area

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Floorsketch[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_sketch_info(sketch_path: str, area_count: int, permanent_count: int) -> None:
    """Print sketch information.

    Args:
        sketch_path: Path to the sketch file
        area_count: Number of areas in the sketch
        permanent_count: Number of permanent helper points
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(sketch_path)
    console.print(line)
    console.print(f"  {area_count} areas {SYM_DOT} {permanent_count} permanent points")


def print_area_table(areas: list[Area]) -> None:
    """Print one row per area."""
    table = Table(show_edge=False, pad_edge=False, box=None)
    table.add_column("ID", justify="right")
    table.add_column("Label")
    table.add_column("Type")
    table.add_column("GLA", justify="center")
    table.add_column("Sq Ft", justify="right")

    for area in areas:
        table.add_row(
            str(area.id),
            area.label,
            area.area_type.value,
            SYM_OK if area.is_gla else "",
            f"{area.area_sq_ft:,.1f}",
        )
    console.print(table)


def print_summary(summary: AreaSummary) -> None:
    """Print GLA / non-GLA totals with per-label breakdowns.

    Args:
        summary: Totals to print
    """
    console.print(f"\n[bold]GLA[/bold]       {summary.gla_sq_ft:,.1f} sq ft")
    for label, size in summary.gla_breakdown.items():
        console.print(f"  {label} {SYM_DOT} {size:,.1f} sq ft")

    console.print(f"[bold]Non-GLA[/bold]   {summary.non_gla_sq_ft:,.1f} sq ft")
    for label, size in summary.non_gla_breakdown.items():
        console.print(f"  {label} {SYM_DOT} {size:,.1f} sq ft")

    console.print(f"[bold]Total[/bold]     {summary.total_sq_ft:,.1f} sq ft")


def print_committed(areas: list[Area]) -> None:
    """Print areas added by a commit."""
    for area in areas:
        console.print(f"  [green]{SYM_OK}[/green] {area.label} {SYM_DOT} {area.area_sq_ft:,.1f} sq ft")


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    console.print(f"  [yellow]{SYM_WARN}[/yellow] {message}")


def print_saved(output_path: str, area_count: int) -> None:
    """Print save confirmation.

    Args:
        output_path: Path to output file
        area_count: Number of areas written
    """
    console.print(f"\n[bold green]{SYM_OK} Saved[/bold green] {area_count} areas")
    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
