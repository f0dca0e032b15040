"""Shape analysis engine for classifying drawn line-work.

This module groups the stroke graph into connected components ("shapes")
and classifies each as:
- Closed: every node has at least two neighbours (no loose ends)
- Open: at least one degree-1 node (an endpoint)

Open shapes lying inside a closed outline are treated as detail of that
outline and excluded from the report. The analysis is stateless: the graph
is rebuilt from the strokes on every call.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from sketchmesh.core.geometry import Segment, all_points, centroid, contains_point
from sketchmesh.core.graph import StrokeGraph, build_graph
from sketchmesh.domain import Point, Stroke

logger = logging.getLogger(__name__)


class AnalysisFailure(str, Enum):
    """Reason an analysis produced nothing."""

    EMPTY_DRAWING = "empty_drawing"
    TOO_FEW_POINTS = "too_few_points"


@dataclass(frozen=True)
class Shape:
    """A connected component of the stroke graph.

    Attributes:
        nodes: Node indices of the component, ascending
        endpoints: Degree-1 node indices, ascending
        stroke_indices: Strokes contributing at least one sample
    """

    nodes: tuple[int, ...]
    endpoints: tuple[int, ...]
    stroke_indices: frozenset[int] = frozenset()

    @property
    def is_closed(self) -> bool:
        return len(self.endpoints) == 0

    @property
    def endpoint_count(self) -> int:
        return len(self.endpoints)

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass
class ShapeReport:
    """Outcome of classifying a drawing.

    Attributes:
        shapes: Shapes that were analyzed (open shapes first, then closed)
        closed_count: Closed shapes among the analyzed ones
        open_count: Open shapes among the analyzed ones
        excluded_open_count: Open shapes skipped because they lie inside a
            closed shape
        failure: Why nothing could be analyzed, or None
    """

    shapes: list[Shape] = field(default_factory=list)
    closed_count: int = 0
    open_count: int = 0
    excluded_open_count: int = 0
    failure: AnalysisFailure | None = None

    @property
    def analyzed_count(self) -> int:
        return self.closed_count + self.open_count

    @property
    def ok(self) -> bool:
        return self.failure is None

    def summary(self) -> str:
        """One-line human-readable description."""
        if self.failure is AnalysisFailure.EMPTY_DRAWING:
            return "Drawing is empty."
        if self.failure is AnalysisFailure.TOO_FEW_POINTS:
            return "Not enough points to analyze."
        return f"{self.closed_count} closed of {self.analyzed_count} analyzed shapes."


class ShapeAnalyzer:
    """Finds and classifies the shapes of a stroke graph.

    The analyzer holds no per-drawing state and can be reused.
    """

    def find_shapes(self, graph: StrokeGraph) -> list[Shape]:
        """Split the graph into shapes and count their endpoints.

        Args:
            graph: The stroke graph

        Returns:
            One Shape per connected component
        """
        shapes: list[Shape] = []
        for component in graph.components():
            nodes = tuple(sorted(component))
            endpoints = tuple(n for n in nodes if graph.degree(n) == 1)
            strokes: set[int] = set()
            for n in nodes:
                strokes.update(graph.node_strokes[n])
            shapes.append(
                Shape(nodes=nodes, endpoints=endpoints, stroke_indices=frozenset(strokes))
            )
        return shapes

    def polygon_segments(self, graph: StrokeGraph, shape: Shape) -> list[Segment]:
        """Edges of a shape as segments, each undirected edge listed once."""
        segments: list[Segment] = []
        for u in shape.nodes:
            for v in sorted(graph.adjacency[u]):
                if u < v:
                    segments.append(Segment(graph.points[u], graph.points[v]))
        return segments

    def closed_polygons(
        self, graph: StrokeGraph, shapes: Sequence[Shape]
    ) -> list[list[Segment]]:
        """Segment lists of every closed shape."""
        return [self.polygon_segments(graph, s) for s in shapes if s.is_closed]

    def is_enclosed(
        self, point: Point, polygons: Sequence[Sequence[Segment]]
    ) -> bool:
        """Check whether a point lies inside any of the polygons."""
        return any(contains_point(point, polygon) for polygon in polygons)

    def analyze(self, graph: StrokeGraph) -> ShapeReport:
        """Classify the shapes of a graph.

        An open shape is analyzable only if none of its nodes lies inside a
        closed shape. Closed shapes are always counted.
        """
        if len(graph) < 2:
            return ShapeReport(failure=AnalysisFailure.TOO_FEW_POINTS)

        shapes = self.find_shapes(graph)
        closed = [s for s in shapes if s.is_closed]
        polygons = self.closed_polygons(graph, shapes)

        analyzed: list[Shape] = []
        excluded = 0
        for shape in shapes:
            if shape.is_closed:
                continue
            if any(self.is_enclosed(graph.points[n], polygons) for n in shape.nodes):
                excluded += 1
                continue
            analyzed.append(shape)

        open_count = len(analyzed)
        analyzed.extend(closed)

        report = ShapeReport(
            shapes=analyzed,
            closed_count=len(closed),
            open_count=open_count,
            excluded_open_count=excluded,
        )

        logger.debug(
            "Shape analysis: %d closed, %d open, %d excluded",
            report.closed_count,
            report.open_count,
            excluded,
        )
        return report


def analyze_shapes(strokes: Sequence[Stroke], tolerance: float = 1.0) -> ShapeReport:
    """Classify a drawing's line-work into open and closed shapes.

    Args:
        strokes: Drawing strokes
        tolerance: Node merge tolerance

    Returns:
        ShapeReport with counts, or a failure reason
    """
    if not strokes:
        return ShapeReport(failure=AnalysisFailure.EMPTY_DRAWING)

    graph = build_graph(strokes, tolerance)
    return ShapeAnalyzer().analyze(graph)


def drawing_centroid(strokes: Sequence[Stroke]) -> Point | None:
    """Mean of every sample point in the drawing.

    Returns:
        The centroid, or None when there is nothing to analyze
    """
    if not strokes:
        return None
    return centroid(all_points(strokes))


def shape_centroids(strokes: Sequence[Stroke], tolerance: float = 1.0) -> list[Point]:
    """Centroid of each closed shape.

    Each centroid is the mean of the shape's node coordinates.

    Returns:
        One centroid per closed shape; empty when there are none
    """
    if not strokes:
        return []

    graph = build_graph(strokes, tolerance)
    result: list[Point] = []
    for shape in ShapeAnalyzer().find_shapes(graph):
        if not shape.is_closed:
            continue
        center = centroid(graph.points[n] for n in shape.nodes)
        if center is not None:
            result.append(center)
    return result
