"""CLI application entry point for contourlab.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from contourlab import __version__
from contourlab.cli.output import (
    console,
    create_progress,
    print_batch_info,
    print_cancellation_notice,
    print_cancellation_summary,
    print_ellipses,
    print_error,
    print_errors,
    print_header,
    print_intersections,
    print_processing_info,
    print_step,
    print_success,
)
from contourlab.config import (
    ContourLabSettings,
    FourierConfig,
    LoggingConfig,
    ProcessingConfig,
    SimplificationConfig,
)
from contourlab.core import ContourProcessor, conic_from_ellipse, intersection_ellipses
from contourlab.domain import EllipseParams
from contourlab.exceptions import (
    ContourLabError,
    PolylineLoadError,
    ProcessingCancelledError,
    ResultSaveError,
)
from contourlab.io import PolylineReader, ResultWriter

# Create the Typer app
app = typer.Typer(
    name="contourlab",
    help="Geometric descriptors for polylines and contours.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Contourlab[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Geometric descriptors for polylines and contours."""


@app.command()
def analyze(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to input JSON batch file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-descriptors.json)",
        ),
    ] = None,
    epsilon: Annotated[
        float,
        typer.Option(
            "--epsilon",
            "-e",
            help="Douglas-Peucker tolerance in input units",
            min=0.0,
        ),
    ] = 1.0,
    sides: Annotated[
        int | None,
        typer.Option(
            "--sides",
            "-s",
            help="Reduce closed contours to polygons with this many sides",
            min=3,
            max=64,
        ),
    ] = None,
    area_tolerance: Annotated[
        float,
        typer.Option(
            "--area-tol",
            help="Relative area tolerance for polygon reduction",
            min=0.0,
            max=1.0,
        ),
    ] = 0.1,
    ellipse_tolerance: Annotated[
        float,
        typer.Option(
            "--ellipse-tol",
            help="Ellipse test tolerance (per mille)",
            min=0.0,
            max=1000.0,
        ),
    ] = 10.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Compute shape descriptors for every polyline in a JSON batch file.

    The input file holds {"polylines": [{"name", "kind", "points"}, ...]}.

    Example:
        contourlab analyze contours.json --sides 4

    This will create contours-descriptors.json with one descriptor record per
    polyline.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to a JSON batch file.",
        )
        raise typer.Exit(code=1)

    if ellipse_tolerance <= 0.0:
        print_error("Ellipse tolerance must be positive")
        raise typer.Exit(code=1)

    if area_tolerance <= 0.0:
        print_error("Area tolerance must be positive")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = ContourLabSettings(
        simplification=SimplificationConfig(
            epsilon=epsilon,
            polygon_sides=sides,
            area_tolerance=area_tolerance,
        ),
        fourier=FourierConfig(
            ellipse_tolerance_per_mille=ellipse_tolerance,
        ),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    actual_output_path = output if output is not None else ResultWriter.get_default_path(input_file)

    try:
        if not quiet:
            print_step("Loading polylines")

        reader = PolylineReader(input_file)
        reader.load()
        records = list(reader.iter_records())
        closed_count = sum(1 for r in records if r.get("kind", "closed") == "closed")

        if not quiet:
            print_batch_info(str(input_file), len(records), closed_count)

        if not records:
            if not quiet:
                console.print("\nNo polylines found. Nothing to process.")
            raise typer.Exit(code=0)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Processing")
            print_processing_info(actual_workers, is_auto=(workers is None))

        processor = ContourProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Processing {len(records)} polylines",
                        total=len(records),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        input_path=input_file,
                        output_path=actual_output_path,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    input_path=input_file,
                    output_path=actual_output_path,
                    max_workers=workers,
                )
        except ProcessingCancelledError as e:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=e.processed_count,
                    cancelled=e.pending_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_polyline_ms,
                min_time_ms=stats.min_polyline_ms,
                max_time_ms=stats.max_polyline_ms,
            )
            if verbose and stats.errors:
                print_errors(stats.errors)

    except PolylineLoadError as e:
        print_error(f"Could not load polylines: {e.reason}")
        raise typer.Exit(code=1)
    except ResultSaveError as e:
        print_error(f"Could not save results: {e.reason}")
        raise typer.Exit(code=1)
    except ContourLabError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def parse_ellipse(value: str) -> EllipseParams:
    """Parse "cx,cy,a,b,angle" into ellipse parameters.

    Args:
        value: Comma-separated center, semi-axes and angle (radians)

    Returns:
        EllipseParams

    Raises:
        typer.BadParameter: If the value is malformed
    """
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 5:
        raise typer.BadParameter(f"Expected cx,cy,a,b,angle, got '{value}'")
    try:
        cx, cy, a, b, angle = (float(p) for p in parts)
    except ValueError:
        raise typer.BadParameter(f"Non-numeric ellipse parameter in '{value}'") from None
    if a <= 0.0 or b <= 0.0:
        raise typer.BadParameter(f"Semi-axes must be positive in '{value}'")
    return EllipseParams(center_x=cx, center_y=cy, major=a, minor=b, angle=angle)


@app.command()
def intersect(
    first: Annotated[
        str,
        typer.Option(
            "--first",
            help="First ellipse as cx,cy,a,b,angle (angle in radians)",
            show_default=False,
        ),
    ],
    second: Annotated[
        str,
        typer.Option(
            "--second",
            help="Second ellipse as cx,cy,a,b,angle (angle in radians)",
            show_default=False,
        ),
    ],
) -> None:
    """Print the real intersection points of two ellipses.

    Example:
        contourlab intersect --first 0,0,2,2,0 --second 2,0,2,2,0
    """
    try:
        e1 = parse_ellipse(first)
        e2 = parse_ellipse(second)
    except typer.BadParameter as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_ellipses(e1, e2)

    try:
        points = intersection_ellipses(conic_from_ellipse(e1), conic_from_ellipse(e2))
    except ContourLabError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_intersections(points)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
