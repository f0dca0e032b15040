"""CLI application entry point for sketchmesh.

This module provides the main CLI interface using Typer. Every command
loads a JSON drawing, runs one engine operation and reports the outcome.
"""

import time
from enum import Enum
from pathlib import Path
from typing import Annotated

import numpy as np
import typer

from sketchmesh import __version__
from sketchmesh.cli.output import (
    SYM_DOT,
    console,
    print_centroids,
    print_drawing_info,
    print_error,
    print_header,
    print_shape_report,
    print_step,
    print_success,
)
from sketchmesh.config import (
    GradientConfig,
    GraphConfig,
    LoggingConfig,
    MeshConfig,
    RepairConfig,
    SketchmeshSettings,
)
from sketchmesh.core import (
    MeshExporter,
    analyze_shapes,
    apply_edge_gradient,
    apply_global_gradient,
    apply_shape_gradients,
    drawing_centroid,
    flood_fill,
    repair_drawing,
    shape_centroids,
)
from sketchmesh.domain import Color, Stroke
from sketchmesh.exceptions import (
    BufferSaveError,
    ColorError,
    DrawingLoadError,
    MeshSaveError,
    SketchmeshError,
)
from sketchmesh.io import BufferWriter, DrawingReader, DrawingWriter, MeshWriter
from sketchmesh.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="sketchmesh",
    help="Analyze, repair and extrude free-drawn polyline sketches.",
    add_completion=False,
    no_args_is_help=True,
)

DrawingArg = Annotated[
    Path,
    typer.Argument(help="Path to a JSON drawing", show_default=False),
]
ToleranceOpt = Annotated[
    float,
    typer.Option("--tolerance", "-t", help="Point merge tolerance", min=0.01),
]
QuietOpt = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Minimal console output"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Sketchmesh[/bold blue] v{__version__}")
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
    """Analyze, repair and extrude free-drawn polyline sketches."""


def _load_drawing(drawing: Path, quiet: bool) -> list[Stroke]:
    """Load a drawing, printing its summary unless quiet.

    Raises:
        typer.Exit: If the drawing cannot be loaded
    """
    if not drawing.exists():
        print_error(
            f"Input file not found: {drawing}",
            details=f"The file '{drawing}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        reader = DrawingReader(drawing)
        strokes = reader.load()
    except DrawingLoadError as e:
        print_error(f"Could not load drawing: {e.reason}")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step("Loading drawing")
        print_drawing_info(
            drawing_path=str(drawing),
            stroke_count=len(strokes),
            point_count=sum(len(s) for s in strokes),
        )
    return strokes


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.0f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
    except OSError:
        return "unknown"


@app.command()
def analyze(
    drawing: DrawingArg,
    tolerance: ToleranceOpt = 1.0,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show nodes and endpoints per shape"),
    ] = False,
    quiet: QuietOpt = False,
) -> None:
    """Classify the drawing's line-work into open and closed shapes."""
    strokes = _load_drawing(drawing, quiet)

    report = analyze_shapes(strokes, tolerance=tolerance)
    if not quiet:
        print_step("Shapes")
        print_shape_report(report, verbose=verbose)
    else:
        console.print(report.summary())

    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def repair(
    drawing: DrawingArg,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-repaired.json)",
        ),
    ] = None,
    width: Annotated[
        float,
        typer.Option("--width", "-w", help="Brush width of closing strokes", min=0.1),
    ] = 10.0,
    color: Annotated[
        str,
        typer.Option("--color", "-c", help="Color of closing strokes (#rrggbb)"),
    ] = "#000000",
    step: Annotated[
        float,
        typer.Option("--step", help="Sample spacing of closing strokes"),
    ] = 5.0,
    tolerance: ToleranceOpt = 1.0,
    quiet: QuietOpt = False,
) -> None:
    """Close open outlines by connecting their two loose ends."""
    try:
        stroke_color = Color.from_hex(color)
        config = RepairConfig(subdivision_step=step)
    except ColorError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ValueError as e:
        print_error("Invalid repair settings", details=str(e))
        raise typer.Exit(code=1)

    strokes = _load_drawing(drawing, quiet)
    start_time = time.time()

    repaired = repair_drawing(
        strokes,
        width,
        stroke_color,
        tolerance=tolerance,
        step=config.subdivision_step,
    )
    if repaired is strokes:
        if not quiet:
            console.print("\nNo shapes could be repaired. Nothing to write.")
        raise typer.Exit(code=0)

    output_path = output or DrawingWriter.get_repaired_path(drawing)
    try:
        DrawingWriter().save(repaired, output_path)
    except OSError as e:
        print_error(f"Could not save drawing: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_success(
            output_path=str(output_path),
            file_size=_format_file_size(output_path),
            total_time_s=time.time() - start_time,
            details=f"{len(repaired) - len(strokes)} closing strokes added",
        )


@app.command()
def centroid(
    drawing: DrawingArg,
    per_shape: Annotated[
        bool,
        typer.Option("--per-shape", "-s", help="One centroid per closed shape"),
    ] = False,
    tolerance: ToleranceOpt = 1.0,
    quiet: QuietOpt = False,
) -> None:
    """Print the centroid of the drawing or of each closed shape."""
    strokes = _load_drawing(drawing, quiet)

    if per_shape:
        centroids = shape_centroids(strokes, tolerance=tolerance)
    else:
        center = drawing_centroid(strokes)
        centroids = [center] if center is not None else []

    if not centroids:
        print_error("No shapes to analyze")
        raise typer.Exit(code=1)

    if not quiet:
        print_step("Centroids")
    print_centroids(centroids)


class ShadeMode(str, Enum):
    """Gradient variant used by the shade command."""

    GLOBAL = "global"
    SHAPES = "shapes"
    EDGE = "edge"


def _parse_pair(value: str, separator: str, label: str) -> tuple[int, int]:
    """Parse "AxB" or "A,B" into two integers.

    Raises:
        typer.Exit: If the value is malformed
    """
    parts = value.lower().split(separator)
    try:
        if len(parts) != 2:
            raise ValueError(value)
        return int(parts[0]), int(parts[1])
    except ValueError:
        print_error(f"Invalid {label}: {value}")
        raise typer.Exit(code=1)


@app.command()
def shade(
    drawing: DrawingArg,
    size: Annotated[
        str,
        typer.Option("--size", "-s", help="Buffer size as WIDTHxHEIGHT"),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-shaded.npy)",
        ),
    ] = None,
    mode: Annotated[
        ShadeMode,
        typer.Option("--mode", "-m", help="Gradient variant", case_sensitive=False),
    ] = ShadeMode.SHAPES,
    min_value: Annotated[
        float,
        typer.Option("--min", help="Gray level at the outline (0-1)"),
    ] = 0.0,
    max_value: Annotated[
        float,
        typer.Option("--max", help="Gray level at the center (0-1)"),
    ] = 1.0,
    threshold: Annotated[
        float,
        typer.Option("--threshold", help="Edge mode saturation threshold (0-1]"),
    ] = 1.0,
    fill: Annotated[
        str | None,
        typer.Option("--fill", help="Flood-fill seed as X,Y after shading"),
    ] = None,
    fill_color: Annotated[
        str,
        typer.Option("--fill-color", help="Flood-fill color (#rrggbb)"),
    ] = "#ff0000",
    tolerance: ToleranceOpt = 1.0,
    quiet: QuietOpt = False,
) -> None:
    """Shade enclosed regions into a white RGBA buffer saved as .npy."""
    width, height = _parse_pair(size, "x", "size")
    if width <= 0 or height <= 0:
        print_error(f"Invalid size: {size}")
        raise typer.Exit(code=1)
    seed = _parse_pair(fill, ",", "fill seed") if fill is not None else None

    try:
        config = GradientConfig(
            min_value=min_value, max_value=max_value, edge_threshold=threshold
        )
        seed_color = Color.from_hex(fill_color)
    except ColorError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except ValueError as e:
        print_error("Invalid gradient settings", details=str(e))
        raise typer.Exit(code=1)

    strokes = _load_drawing(drawing, quiet)
    output_path = output or BufferWriter.get_output_path(drawing)
    start_time = time.time()

    buffer = np.full((height, width, 4), 255, dtype=np.uint8)
    lo, hi = config.min_value, config.max_value
    if mode is ShadeMode.GLOBAL:
        written = apply_global_gradient(buffer, strokes, lo, hi)
    elif mode is ShadeMode.SHAPES:
        written = apply_shape_gradients(buffer, strokes, lo, hi, tolerance)
    else:
        written = apply_edge_gradient(
            buffer, strokes, config.edge_threshold, lo, hi, tolerance
        )

    filled = flood_fill(buffer, seed[0], seed[1], seed_color) if seed else 0

    try:
        BufferWriter().save(buffer, output_path)
    except BufferSaveError as e:
        print_error(f"Could not save buffer: {e.reason}")
        raise typer.Exit(code=1)

    if not quiet:
        print_success(
            output_path=str(output_path),
            file_size=_format_file_size(output_path),
            total_time_s=time.time() - start_time,
            details=f"{written:,} pixels shaded {SYM_DOT} {filled:,} pixels filled",
        )


@app.command()
def export(
    drawing: DrawingArg,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-model.glb)",
        ),
    ] = None,
    min_thickness: Annotated[
        float,
        typer.Option("--min-thickness", help="Thickness at the outline's far points"),
    ] = 15.0,
    max_thickness: Annotated[
        float,
        typer.Option("--max-thickness", help="Thickness near the outline's centroid"),
    ] = 15.0,
    decimate: Annotated[
        float | None,
        typer.Option(
            "--decimate",
            "-d",
            help="Keep this fraction of triangles (0-1]",
            min=0.01,
            max=1.0,
        ),
    ] = None,
    scale: Annotated[
        float,
        typer.Option("--scale", help="Uniform export scale", min=0.0001),
    ] = 1.0,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Reject branching outlines instead of truncating"),
    ] = False,
    tolerance: ToleranceOpt = 1.0,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: QuietOpt = False,
) -> None:
    """Extrude the largest closed outline into a solid and save it as GLB."""
    try:
        settings = SketchmeshSettings(
            graph=GraphConfig(merge_tolerance=tolerance),
            mesh=MeshConfig(
                min_thickness=min_thickness,
                max_thickness=max_thickness,
                strict_ring=strict,
                decimate=decimate is not None,
                decimate_ratio=decimate if decimate is not None else 0.5,
                export_scale=scale,
            ),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValueError as e:
        print_error("Invalid export settings", details=str(e))
        raise typer.Exit(code=1)

    strokes = _load_drawing(drawing, quiet)
    output_path = output or MeshWriter.get_output_path(drawing)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if not quiet:
        print_step("Extruding")

    start_time = time.time()
    try:
        result = MeshExporter(settings, logger=logger).export(strokes)
        if not result.ok:
            print_error(result.message)
            raise typer.Exit(code=1)

        MeshWriter().save(result.data, output_path)
    except MeshSaveError as e:
        print_error(f"Could not save mesh: {e.reason}")
        raise typer.Exit(code=1)
    except SketchmeshError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_success(
            output_path=str(output_path),
            file_size=_format_file_size(output_path),
            total_time_s=time.time() - start_time,
            details=(
                f"{result.vertex_count} vertices {SYM_DOT} {result.triangle_count} triangles"
            ),
        )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
