"""Rich console output helpers for the CLI.

This module provides user-friendly console output using the Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sketchmesh.core.analyzer import ShapeReport
from sketchmesh.domain import Point

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Sketchmesh[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_drawing_info(drawing_path: str, stroke_count: int, point_count: int) -> None:
    """Print drawing information.

    Args:
        drawing_path: Path to the drawing file
        stroke_count: Number of strokes loaded
        point_count: Total sample points across strokes
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(drawing_path)
    console.print(line)
    console.print(f"  {stroke_count:,} strokes {SYM_DOT} {point_count:,} points")


def print_shape_report(report: ShapeReport, verbose: bool = False) -> None:
    """Print the open/closed classification of a drawing.

    Args:
        report: Analysis result
        verbose: Whether to list every analyzed shape
    """
    if not report.ok:
        console.print(f"  [yellow]{report.summary()}[/yellow]")
        return

    for index, shape in enumerate(report.shapes, start=1):
        state = "[green]closed[/green]" if shape.is_closed else "[yellow]open[/yellow]"
        if verbose:
            console.print(
                f"  Shape {index}: {state} {SYM_DOT} {len(shape)} nodes "
                f"{SYM_DOT} {shape.endpoint_count} endpoints"
            )
        else:
            console.print(f"  Shape {index}: {state}")

    console.print(
        f"\n  [bold]{report.closed_count}[/bold] closed of "
        f"[bold]{report.analyzed_count}[/bold] analyzed shapes"
    )
    if report.excluded_open_count:
        console.print(
            f"  {report.excluded_open_count} open shapes inside closed shapes skipped"
        )


def print_centroids(centroids: list[Point]) -> None:
    """Print a table of centroids."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for index, point in enumerate(centroids, start=1):
        table.add_row(str(index), f"{point.x:.2f}", f"{point.y:.2f}")
    console.print(table)


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


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    details: str | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        details: Optional one-line summary of the result
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    if details:
        console.print(f"  {details}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
