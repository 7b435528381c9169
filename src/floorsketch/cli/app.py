"""CLI application entry point for floorsketch.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from floorsketch import __version__
from floorsketch.cli.output import (
    console,
    print_area_table,
    print_committed,
    print_error,
    print_header,
    print_saved,
    print_sketch_info,
    print_step,
    print_summary,
    print_warning,
)
from floorsketch.config import LoggingConfig, SketchSettings
from floorsketch.core import (
    ClassificationRequest,
    ClassificationResult,
    CloseOutcome,
    CloseStatus,
    PointStatus,
    Sketcher,
    SketchStore,
    WorkflowState,
    summarize,
)
from floorsketch.domain import AreaType
from floorsketch.exceptions import FloorSketchError, SketchLoadError, SketchSaveError
from floorsketch.io import SketchReader, SketchWriter
from floorsketch.utils import SessionLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="floorsketch",
    help="Sketch floor plans: snap points into areas, split areas and total GLA.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Floorsketch[/bold blue] v{__version__}")
        raise typer.Exit()


class PromptClassifier:
    """Answers classification prompts on the terminal."""

    def __init__(self, accept_suggestions: bool = False) -> None:
        self.accept_suggestions = accept_suggestions

    def classify(self, request: ClassificationRequest) -> ClassificationResult | None:
        console.print(
            f"  Area {request.step}/{request.total}: {request.area_sq_ft:,.1f} sq ft"
        )
        if self.accept_suggestions:
            return ClassificationResult(request.suggested_label, request.suggested_type)

        try:
            area_type = self._prompt_type(request.suggested_type)
            suggested_label = (
                request.suggested_label if area_type == request.suggested_type else ""
            )
            label = typer.prompt("  Label", default=suggested_label, show_default=bool(suggested_label))
            is_gla = typer.confirm("  Counts toward GLA?", default=area_type.default_gla)
        except typer.Abort:
            return None

        return ClassificationResult(label, area_type, is_gla)

    @staticmethod
    def _prompt_type(suggested: AreaType) -> AreaType:
        choices = ", ".join(t.value for t in AreaType)
        while True:
            value = typer.prompt(f"  Type ({choices})", default=suggested.value)
            try:
                return AreaType(value.strip().lower())
            except ValueError:
                print_warning(f"Unknown type: {value}")


def _parse_point(value: str) -> tuple[float, float]:
    """Parse "X,Y" into a coordinate pair."""
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"expected X,Y but got '{value}'", param_hint="--point")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not a pair of numbers", param_hint="--point") from None


def _load_store(sketch: Path) -> SketchStore:
    with SketchReader(sketch) as reader:
        return SketchStore(reader.get_areas(), reader.get_permanent_points())


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Sketch floor plans from the command line."""
    settings = SketchSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"settings": settings, "quiet": quiet}


@app.command()
def summary(
    ctx: typer.Context,
    sketch: Annotated[
        Path,
        typer.Argument(
            help="Path to a sketch JSON file",
            show_default=False,
        ),
    ],
) -> None:
    """Print the areas of a sketch with GLA and non-GLA totals.

    Example:
        floorsketch summary house.json
    """
    quiet = ctx.obj["quiet"]

    try:
        store = _load_store(sketch)
    except SketchLoadError as e:
        print_error(f"Could not load sketch: {e.reason}")
        raise typer.Exit(code=1)
    except FloorSketchError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    areas = store.get_areas()
    if not quiet:
        print_header(__version__)
        print_sketch_info(str(sketch), len(areas), len(store.get_permanent_points()))
        print_step("Areas")
        print_area_table(areas)
    print_summary(summarize(areas))


@app.command()
def draw(
    ctx: typer.Context,
    sketch: Annotated[
        Path,
        typer.Argument(
            help="Sketch JSON file to add to (created if missing)",
            show_default=False,
        ),
    ],
    points: Annotated[
        list[str],
        typer.Option(
            "--point",
            "-p",
            help="Cursor position X,Y in pixels (8 px = 1 ft); repeat for each click",
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-edited.json, or SKETCH if it is new)",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Accept the suggested label and type for every new area",
        ),
    ] = False,
) -> None:
    """Replay clicks through the sketcher, classify new areas and save the sketch.

    A path closes when a click lands near its first point, or when it ends on
    the area it started from. A path still open after the last click is
    closed automatically.

    Example:
        floorsketch draw house.json -p 0,0 -p 160,0 -p 160,80 -p 0,80 --yes
    """
    settings: SketchSettings = ctx.obj["settings"]
    quiet: bool = ctx.obj["quiet"]

    coordinates = [_parse_point(value) for value in points]

    try:
        store = _load_store(sketch) if sketch.exists() else SketchStore()
    except SketchLoadError as e:
        print_error(f"Could not load sketch: {e.reason}")
        raise typer.Exit(code=1)
    except FloorSketchError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_sketch_info(str(sketch), len(store.get_areas()), len(store.get_permanent_points()))
        print_step("Drawing")

    sketcher = Sketcher(store, settings, session_logger=SessionLogger())
    classifier = PromptClassifier(accept_suggestions=yes)

    try:
        for x, y in coordinates:
            outcome = sketcher.add_point(x, y)
            if outcome.status == PointStatus.REJECTED and outcome.validation is not None:
                print_warning(f"Point {x:g},{y:g} rejected: {outcome.validation.reason}")
            elif outcome.status == PointStatus.CLOSED and outcome.close is not None:
                _finish_close(sketcher, outcome.close, classifier, quiet)

        if len(sketcher.current_path) >= settings.drawing.min_vertices:
            _finish_close(sketcher, sketcher.close_path(), classifier, quiet)
        elif sketcher.current_path:
            print_warning(f"Discarding open path with {len(sketcher.current_path)} points")

        destination = output or (SketchWriter.get_updated_path(sketch) if sketch.exists() else sketch)
        SketchWriter(destination).save(store.get_areas(), store.get_permanent_points())
    except SketchSaveError as e:
        print_error(f"Could not save sketch: {e.reason}")
        raise typer.Exit(code=1)
    except FloorSketchError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_saved(str(destination), len(store.get_areas()))
    print_summary(summarize(store.get_areas()))


def _finish_close(
    sketcher: Sketcher,
    close: CloseOutcome,
    classifier: PromptClassifier,
    quiet: bool,
) -> None:
    """Classify the result of a closed path."""
    if close.status == CloseStatus.REJECTED and close.validation is not None:
        print_warning(f"Path not closed: {close.validation.reason}")
        return
    if close.status == CloseStatus.ABORTED:
        print_warning(f"Split aborted, existing areas unchanged: {close.error}")
        return

    if not quiet and close.plan is not None and close.plan.is_split:
        print_step(f"Split detected ({close.plan.kind.value.replace('_', ' ')})")

    state = sketcher.run_classification(classifier)
    if state == WorkflowState.COMMITTED:
        print_committed(sketcher.workflow.committed_areas)
    else:
        print_warning("Classification cancelled, existing areas unchanged")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
