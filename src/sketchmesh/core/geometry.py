"""Geometric operations for stroke analysis and shading.

This module provides core mathematical utilities for:
- Point-in-polygon testing over an unordered segment list (ray casting)
- Point-to-segment and point-to-outline distances
- Centroid and bounding box calculation

All functions are pure and stateless.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sketchmesh.domain import Point, Stroke


@dataclass(frozen=True, slots=True)
class Segment:
    """An undirected line segment between two points."""

    p1: Point
    p2: Point


def contains_point(point: Point, segments: Sequence[Segment]) -> bool:
    """Determine if a point is inside the region bounded by segments.

    Casts a horizontal ray from the point to the right and counts crossings
    with the segments (even-odd rule). The segments need not be ordered, so
    this works directly on a graph's edge set.

    Segments entirely above or below the ray, or entirely left of the point,
    are skipped. The remaining ones count only when they straddle the ray
    half-open (one end at or below it, the other strictly above). A
    horizontal segment lying on the ray therefore never counts and never
    reaches the interpolation.

    Args:
        point: The point to test
        segments: Boundary segments

    Returns:
        True if an odd number of crossings lie strictly right of the point

    Examples:
        >>> square = [
        ...     Segment(Point(0, 0), Point(2, 0)),
        ...     Segment(Point(2, 0), Point(2, 2)),
        ...     Segment(Point(2, 2), Point(0, 2)),
        ...     Segment(Point(0, 2), Point(0, 0)),
        ... ]
        >>> contains_point(Point(1, 1), square)
        True
        >>> contains_point(Point(3, 3), square)
        False
    """
    px, py = point.x, point.y
    crossings = 0

    for segment in segments:
        p1, p2 = segment.p1, segment.p2
        if (p1.y > py and p2.y > py) or (p1.y < py and p2.y < py):
            continue
        if max(p1.x, p2.x) < px:
            continue
        if (p1.y <= py < p2.y) or (p2.y <= py < p1.y):
            t = (py - p1.y) / (p2.y - p1.y)
            x_cross = p1.x + t * (p2.x - p1.x)
            if x_cross > px:
                crossings += 1

    return crossings % 2 == 1


def point_to_segment_distance(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to the closest point of a line segment.

    Projects the point onto the infinite line, then clamps to the segment
    endpoints.

    Args:
        point: The point to measure from
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Euclidean distance to the segment

    Examples:
        >>> point_to_segment_distance(Point(1, 1), Point(0, 0), Point(2, 0))
        1.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Zero-length segment
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    nearest_x = seg_start.x + t * dx
    nearest_y = seg_start.y + t * dy
    return math.hypot(point.x - nearest_x, point.y - nearest_y)


def distance_to_edges(point: Point, segments: Iterable[Segment]) -> float:
    """Minimum distance from a point to any of the segments.

    Returns:
        The smallest distance, or ``math.inf`` when there are no segments
    """
    best = math.inf
    for segment in segments:
        distance = point_to_segment_distance(point, segment.p1, segment.p2)
        if distance < best:
            best = distance
    return best


def centroid(points: Iterable[Point]) -> Point | None:
    """Arithmetic mean of a point set.

    Returns:
        The mean point, or None if there are no points
    """
    total_x = 0.0
    total_y = 0.0
    count = 0
    for point in points:
        total_x += point.x
        total_y += point.y
        count += 1

    if count == 0:
        return None
    return Point(total_x / count, total_y / count)


def bounding_box(points: Iterable[Point]) -> tuple[float, float, float, float]:
    """Calculate the bounding box of a point set.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y); all zeros for no points
    """
    xs: list[float] = []
    ys: list[float] = []
    for point in points:
        xs.append(point.x)
        ys.append(point.y)

    if not xs:
        return (0.0, 0.0, 0.0, 0.0)
    return (min(xs), min(ys), max(xs), max(ys))


def stroke_segments(strokes: Iterable[Stroke]) -> list[Segment]:
    """Consecutive raw sample pairs of every stroke."""
    segments: list[Segment] = []
    for stroke in strokes:
        path = stroke.path
        for i in range(len(path) - 1):
            segments.append(Segment(path[i], path[i + 1]))
    return segments


def all_points(strokes: Iterable[Stroke]) -> list[Point]:
    """Every sample point of every stroke, in drawing order."""
    return [point for stroke in strokes for point in stroke.path]
