"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from contourlab.domain import EllipseParams, Point

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for polyline processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Contourlab[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_batch_info(batch_path: str, polyline_count: int, closed_count: int) -> None:
    """Print batch file information.

    Args:
        batch_path: Path to the batch file
        polyline_count: Number of polylines in the batch
        closed_count: Number of closed polylines
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(batch_path)
    console.print(line)
    console.print(
        f"  {polyline_count:,} polylines {SYM_DOT} {closed_count:,} closed "
        f"{SYM_DOT} {polyline_count - closed_count:,} open"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    skipped: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        processed: Number of polylines processed
        skipped: Number of polylines skipped
        errors: Number of errors encountered
        avg_time_ms: Average processing time per polyline in milliseconds
        min_time_ms: Minimum processing time per polyline in milliseconds
        max_time_ms: Maximum processing time per polyline in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} polylines {SYM_DOT} {skipped} skipped {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_errors(errors: list[tuple[str, str]], limit: int = 10) -> None:
    """Print per-polyline errors.

    Args:
        errors: (name, message) pairs
        limit: Maximum number of errors shown
    """
    for name, message in errors[:limit]:
        console.print(f"  [red]{SYM_ERR}[/red] {name}: {message}")
    if len(errors) > limit:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(errors) - limit} more)")


def print_ellipses(first: EllipseParams, second: EllipseParams) -> None:
    """Print the two input ellipses of an intersection query."""
    for label, params in (("first", first), ("second", second)):
        console.print(
            f"  {label:<7} center ({params.center_x:g}, {params.center_y:g}) "
            f"{SYM_DOT} axes {params.major:g} x {params.minor:g} "
            f"{SYM_DOT} angle {params.angle:g}"
        )


def print_intersections(points: list[Point]) -> None:
    """Print intersection points as a table.

    Args:
        points: Intersection points
    """
    if not points:
        console.print("\n  No real intersection points")
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for i, p in enumerate(points, start=1):
        table.add_row(str(i), f"{p.x:.6f}", f"{p.y:.6f}")

    console.print(f"\n  [green]{len(points)}[/green] intersection points")
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress polylines")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of polylines successfully processed before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} polylines completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
