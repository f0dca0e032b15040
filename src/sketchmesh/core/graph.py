"""Stroke graph construction.

Raw strokes are turned into an undirected graph: samples that fall within
the merge tolerance of an earlier sample collapse into the same node, and
consecutive samples of a stroke become edges. The graph is rebuilt from
scratch for every operation and never updated incrementally.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from sketchmesh.domain import Point, Stroke

logger = logging.getLogger(__name__)


class _SpatialIndex:
    """Grid of tolerance-sized cells mapping to node indices.

    Any point within ``tolerance`` of a query lies in the query's cell or one
    of its eight neighbours, so a 3x3 probe finds every candidate.
    """

    def __init__(self, tolerance: float) -> None:
        self._tolerance = tolerance
        self._cells: dict[tuple[int, int], list[int]] = {}

    def _cell(self, point: Point) -> tuple[int, int]:
        return (
            math.floor(point.x / self._tolerance),
            math.floor(point.y / self._tolerance),
        )

    def find(self, point: Point, points: list[Point]) -> int | None:
        """Return the earliest-inserted node within tolerance, if any."""
        cx, cy = self._cell(point)
        best: int | None = None
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for index in self._cells.get((cx + dx, cy + dy), ()):
                    if best is not None and index >= best:
                        continue
                    other = points[index]
                    if math.hypot(other.x - point.x, other.y - point.y) < self._tolerance:
                        best = index
        return best

    def add(self, point: Point, index: int) -> None:
        self._cells.setdefault(self._cell(point), []).append(index)


@dataclass
class StrokeGraph:
    """Deduplicated point graph of a drawing.

    Attributes:
        points: Node coordinates, one per merged sample neighbourhood. A node
            keeps the coordinate of the first sample that created it.
        adjacency: Neighbour index sets, one per node
        node_strokes: Indices of the strokes whose samples resolved to each node
    """

    points: list[Point] = field(default_factory=list)
    adjacency: list[set[int]] = field(default_factory=list)
    node_strokes: list[set[int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def degree(self, index: int) -> int:
        return len(self.adjacency[index])

    @property
    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self.adjacency) // 2

    def components(self) -> list[list[int]]:
        """Find connected components with an explicit stack.

        Returns:
            Node index lists, ordered by each component's lowest node index.
            Within a component nodes appear in visit order.
        """
        visited: set[int] = set()
        components: list[list[int]] = []

        for start in range(len(self.points)):
            if start in visited:
                continue

            component: list[int] = []
            stack = [start]
            visited.add(start)
            while stack:
                node = stack.pop()
                component.append(node)
                for neighbor in sorted(self.adjacency[node]):
                    if neighbor not in visited:
                        visited.add(neighbor)
                        stack.append(neighbor)

            components.append(component)

        return components


def build_graph(strokes: Sequence[Stroke], tolerance: float = 1.0) -> StrokeGraph:
    """Build the undirected point graph of a drawing.

    Every sample resolves to the earliest node closer than ``tolerance`` or
    creates a new node. Consecutive samples of a stroke are joined by an edge
    unless both resolve to the same node.

    Args:
        strokes: Drawing strokes in paint order
        tolerance: Merge distance between samples

    Returns:
        The stroke graph

    Raises:
        ValueError: If tolerance is not positive
    """
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")

    graph = StrokeGraph()
    index = _SpatialIndex(tolerance)

    for stroke_idx, stroke in enumerate(strokes):
        previous: int | None = None
        for point in stroke.path:
            node = index.find(point, graph.points)
            if node is None:
                node = len(graph.points)
                graph.points.append(point)
                graph.adjacency.append(set())
                graph.node_strokes.append(set())
                index.add(point, node)
            graph.node_strokes[node].add(stroke_idx)

            if previous is not None and previous != node:
                graph.adjacency[previous].add(node)
                graph.adjacency[node].add(previous)
            previous = node

    logger.debug(
        "Built stroke graph: %d strokes, %d nodes, %d edges",
        len(strokes),
        len(graph.points),
        graph.edge_count,
    )
    return graph
