"""Closing of accidentally unclosed outlines.

An open shape with exactly two loose ends that is not drawn inside a closed
outline is most likely an outline the user failed to close. The repairer
appends a straight connecting stroke between the two ends. Branching shapes
(more than two ends) are never touched.
"""

import logging
import math
from collections.abc import Sequence

from sketchmesh.core.analyzer import ShapeAnalyzer
from sketchmesh.core.graph import build_graph
from sketchmesh.domain import Color, Point, Stroke

logger = logging.getLogger(__name__)


def subdivide_line(start: Point, end: Point, step: float = 5.0) -> tuple[Point, ...]:
    """Sample a straight line roughly every ``step`` units.

    At least one intermediate sample is always produced, so a connecting
    stroke has three or more points.

    Args:
        start: First endpoint
        end: Last endpoint
        step: Target spacing between samples

    Returns:
        Points from start to end inclusive
    """
    length = math.hypot(end.x - start.x, end.y - start.y)
    count = max(2, math.floor(length / step))

    path = [start]
    for i in range(1, count):
        t = i / count
        path.append(
            Point(start.x + t * (end.x - start.x), start.y + t * (end.y - start.y))
        )
    path.append(end)
    return tuple(path)


def repair_drawing(
    strokes: list[Stroke],
    width: float,
    color: Color,
    tolerance: float = 1.0,
    step: float = 5.0,
) -> list[Stroke]:
    """Close every repairable open outline of a drawing.

    Args:
        strokes: Drawing strokes
        width: Brush width of synthesized strokes
        color: Color of synthesized strokes
        tolerance: Node merge tolerance
        step: Sample spacing of synthesized strokes

    Returns:
        The very same list when nothing was repaired, otherwise a new list
        with the original strokes followed by the synthesized ones
    """
    if not strokes:
        return strokes

    graph = build_graph(strokes, tolerance)
    if len(graph) < 2:
        return strokes

    analyzer = ShapeAnalyzer()
    shapes = analyzer.find_shapes(graph)
    polygons = analyzer.closed_polygons(graph, shapes)

    added: list[Stroke] = []
    for shape in shapes:
        if shape.endpoint_count != 2:
            continue
        start, end = shape.endpoints
        if analyzer.is_enclosed(graph.points[start], polygons):
            continue
        path = subdivide_line(graph.points[start], graph.points[end], step)
        added.append(Stroke(path=path, width=width, color=color))

    if not added:
        logger.debug("No repairable shapes found")
        return strokes

    logger.debug("Closed %d open shapes", len(added))
    return [*strokes, *added]
