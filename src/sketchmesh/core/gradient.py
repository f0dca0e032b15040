"""Distance-based grayscale shading of enclosed regions.

Three variants share one gray ramp:

    gray = round((lo + (hi - lo) * color_pos) * 255)

written to R, G and B with alpha forced to 255.

- Global: one centroid and one outline for the whole drawing, with
  ``color_pos = d_edge / (d_edge + d_center)``.
- Per shape: the same ratio, computed per closed shape against its own
  centroid and its own strokes.
- Edge threshold: per closed shape, ``color_pos`` is the edge distance
  relative to the widest interior point, scaled by a threshold.

Every variant scans its bounding box row-major and measures each pixel
against every segment. The buffer is a caller-owned ``(H, W, 4)`` uint8
array mutated in place.
"""

import logging
import math
from collections.abc import Iterator, Sequence

import numpy as np

from sketchmesh.core.analyzer import ShapeAnalyzer
from sketchmesh.core.geometry import (
    Segment,
    all_points,
    bounding_box,
    centroid,
    contains_point,
    distance_to_edges,
    stroke_segments,
)
from sketchmesh.core.graph import build_graph
from sketchmesh.domain import Point, Stroke
from sketchmesh.exceptions import GradientError

logger = logging.getLogger(__name__)


def _check_buffer(buffer: np.ndarray) -> None:
    if buffer.ndim != 3 or buffer.shape[2] != 4 or buffer.dtype != np.uint8:
        raise GradientError(
            f"expected (H, W, 4) uint8 buffer, got {buffer.shape} {buffer.dtype}"
        )


def _check_range(lo: float, hi: float) -> None:
    for name, value in (("min", lo), ("max", hi)):
        if not 0.0 <= value <= 1.0:
            raise GradientError(f"{name} must be within [0, 1], got {value}")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def gray_level(color_pos: float, lo: float, hi: float) -> int:
    """Map a ramp position to an 8-bit gray value.

    Halves round up, so 2.5 becomes 3.
    """
    value = _round_half_up((lo + (hi - lo) * color_pos) * 255)
    return max(0, min(255, value))


def _write_gray(buffer: np.ndarray, x: int, y: int, gray: int) -> None:
    buffer[y, x, 0] = gray
    buffer[y, x, 1] = gray
    buffer[y, x, 2] = gray
    buffer[y, x, 3] = 255


def _center_ratio(d_edge: float, d_center: float) -> float:
    total = d_edge + d_center
    if total == 0:
        return 0.0
    return d_edge / total


def _pixel_box(
    points: Sequence[Point], width: int, height: int
) -> tuple[int, int, int, int]:
    """Integer bounding box of the points, clipped to the buffer.

    Returns:
        (x0, y0, x1, y1) with inclusive start and exclusive end
    """
    min_x, min_y, max_x, max_y = bounding_box(points)
    x0 = max(0, math.floor(min_x))
    y0 = max(0, math.floor(min_y))
    x1 = min(width, math.ceil(max_x) + 1)
    y1 = min(height, math.ceil(max_y) + 1)
    return x0, y0, x1, y1


def _interior_pixels(
    box: tuple[int, int, int, int], segments: Sequence[Segment]
) -> Iterator[tuple[int, int, Point]]:
    x0, y0, x1, y1 = box
    for y in range(y0, y1):
        for x in range(x0, x1):
            pixel = Point(float(x), float(y))
            if contains_point(pixel, segments):
                yield x, y, pixel


def _shade_toward_center(
    buffer: np.ndarray,
    box: tuple[int, int, int, int],
    segments: Sequence[Segment],
    center: Point,
    lo: float,
    hi: float,
) -> int:
    written = 0
    for x, y, pixel in _interior_pixels(box, segments):
        d_edge = distance_to_edges(pixel, segments)
        d_center = math.hypot(pixel.x - center.x, pixel.y - center.y)
        _write_gray(buffer, x, y, gray_level(_center_ratio(d_edge, d_center), lo, hi))
        written += 1
    return written


def apply_global_gradient(
    buffer: np.ndarray,
    strokes: Sequence[Stroke],
    lo: float = 0.0,
    hi: float = 1.0,
) -> int:
    """Shade the inside of the whole drawing toward its global centroid.

    Containment and edge distance use the union of every stroke segment, not
    individual shapes.

    Args:
        buffer: RGBA pixel buffer, mutated in place
        strokes: Drawing strokes
        lo: Gray level at the outline (0-1)
        hi: Gray level at the centroid (0-1)

    Returns:
        Number of pixels written

    Raises:
        GradientError: If the buffer or ramp values are invalid
    """
    _check_buffer(buffer)
    _check_range(lo, hi)

    points = all_points(strokes)
    center = centroid(points)
    if center is None:
        return 0

    height, width = buffer.shape[:2]
    segments = stroke_segments(strokes)
    written = _shade_toward_center(
        buffer, _pixel_box(points, width, height), segments, center, lo, hi
    )

    logger.debug("Global gradient wrote %d pixels", written)
    return written


def apply_shape_gradients(
    buffer: np.ndarray,
    strokes: Sequence[Stroke],
    lo: float = 0.0,
    hi: float = 1.0,
    tolerance: float = 1.0,
) -> int:
    """Shade each closed shape toward its own centroid.

    A shape's strokes are the ones whose samples built its nodes, taken from
    the graph's node membership rather than by matching coordinates.

    Args:
        buffer: RGBA pixel buffer, mutated in place
        strokes: Drawing strokes
        lo: Gray level at the outline (0-1)
        hi: Gray level at the centroid (0-1)
        tolerance: Node merge tolerance

    Returns:
        Number of pixels written
    """
    _check_buffer(buffer)
    _check_range(lo, hi)
    if not strokes:
        return 0

    height, width = buffer.shape[:2]
    graph = build_graph(strokes, tolerance)

    written = 0
    for shape in ShapeAnalyzer().find_shapes(graph):
        if not shape.is_closed:
            continue

        node_points = [graph.points[n] for n in shape.nodes]
        center = centroid(node_points)
        if center is None:
            continue

        members = [strokes[i] for i in sorted(shape.stroke_indices)]
        segments = stroke_segments(members)
        written += _shade_toward_center(
            buffer, _pixel_box(node_points, width, height), segments, center, lo, hi
        )

    logger.debug("Shape gradients wrote %d pixels", written)
    return written


def apply_edge_gradient(
    buffer: np.ndarray,
    strokes: Sequence[Stroke],
    threshold: float = 1.0,
    lo: float = 0.0,
    hi: float = 1.0,
    tolerance: float = 1.0,
) -> int:
    """Shade each closed shape by distance from its outline.

    A first pass finds the widest interior point of the shape; the second
    writes ``min(1, (d_edge / max_d) / threshold)``. Lower thresholds
    saturate more of the interior to ``hi``.

    Args:
        buffer: RGBA pixel buffer, mutated in place
        strokes: Drawing strokes
        threshold: Saturation threshold in (0, 1]
        lo: Gray level at the outline (0-1)
        hi: Gray level at the widest interior point (0-1)
        tolerance: Node merge tolerance

    Returns:
        Number of pixels written
    """
    _check_buffer(buffer)
    _check_range(lo, hi)
    if not 0.0 < threshold <= 1.0:
        raise GradientError(f"threshold must be within (0, 1], got {threshold}")
    if not strokes:
        return 0

    height, width = buffer.shape[:2]
    graph = build_graph(strokes, tolerance)
    analyzer = ShapeAnalyzer()

    written = 0
    for shape in analyzer.find_shapes(graph):
        if not shape.is_closed:
            continue

        segments = analyzer.polygon_segments(graph, shape)
        box = _pixel_box([graph.points[n] for n in shape.nodes], width, height)

        distances: list[tuple[int, int, float]] = []
        max_distance = 0.0
        for x, y, pixel in _interior_pixels(box, segments):
            d_edge = distance_to_edges(pixel, segments)
            distances.append((x, y, d_edge))
            max_distance = max(max_distance, d_edge)

        if max_distance == 0:
            continue

        for x, y, d_edge in distances:
            color_pos = min(1.0, (d_edge / max_distance) / threshold)
            _write_gray(buffer, x, y, gray_level(color_pos, lo, hi))
        written += len(distances)

    logger.debug("Edge gradient wrote %d pixels", written)
    return written
