"""Unit tests for geometry utilities."""

import math

import pytest

from sketchmesh.core.geometry import (
    Segment,
    all_points,
    bounding_box,
    centroid,
    contains_point,
    distance_to_edges,
    point_to_segment_distance,
    stroke_segments,
)
from sketchmesh.domain import Point, Stroke


def square_segments(size: float = 10.0) -> list[Segment]:
    """Create an axis-aligned square as an unordered segment list."""
    a, b, c, d = Point(0, 0), Point(size, 0), Point(size, size), Point(0, size)
    return [Segment(c, d), Segment(a, b), Segment(d, a), Segment(b, c)]


class TestContainsPoint:
    """Tests for the ray-casting point-in-polygon test."""

    def test_point_inside(self):
        """Test a point inside a square."""
        assert contains_point(Point(5, 5), square_segments())

    def test_point_outside(self):
        """Test points outside a square on every side."""
        segments = square_segments()
        for p in (Point(-1, 5), Point(11, 5), Point(5, -1), Point(5, 11)):
            assert not contains_point(p, segments)

    def test_segment_order_irrelevant(self):
        """Test segments need not form an ordered ring."""
        segments = square_segments()
        assert contains_point(Point(2, 7), list(reversed(segments)))

    def test_horizontal_segment_on_ray(self):
        """Test a horizontal segment on the ray line is never counted."""
        segments = [Segment(Point(0, 5), Point(10, 5))]
        assert not contains_point(Point(2, 5), segments)

    def test_ray_through_vertex_counts_once(self):
        """Test a ray through a shared vertex is not double counted."""
        triangle = [
            Segment(Point(0, 0), Point(10, 5)),
            Segment(Point(10, 5), Point(0, 10)),
            Segment(Point(0, 10), Point(0, 0)),
        ]
        assert contains_point(Point(2, 5), triangle)

    def test_concave_polygon(self):
        """Test the notch of a U-shaped polygon is outside."""
        pts = [
            Point(0, 0),
            Point(30, 0),
            Point(30, 30),
            Point(20, 30),
            Point(20, 10),
            Point(10, 10),
            Point(10, 30),
            Point(0, 30),
        ]
        segments = [Segment(pts[i], pts[(i + 1) % len(pts)]) for i in range(len(pts))]
        assert not contains_point(Point(15, 20), segments)
        assert contains_point(Point(5, 20), segments)
        assert contains_point(Point(25, 20), segments)

    def test_empty_segments(self):
        """Test nothing is inside an empty outline."""
        assert not contains_point(Point(0, 0), [])


class TestPointToSegmentDistance:
    """Tests for point-to-segment distance."""

    def test_perpendicular_projection(self):
        """Test distance to the segment interior."""
        assert point_to_segment_distance(Point(1, 1), Point(0, 0), Point(2, 0)) == 1.0

    def test_clamped_to_end(self):
        """Test projection beyond the segment clamps to the endpoint."""
        assert point_to_segment_distance(Point(5, 0), Point(0, 0), Point(2, 0)) == 3.0

    def test_clamped_to_start(self):
        """Test projection before the segment clamps to the start point."""
        d = point_to_segment_distance(Point(-3, 4), Point(0, 0), Point(2, 0))
        assert d == pytest.approx(5.0)

    def test_degenerate_segment(self):
        """Test a zero-length segment falls back to point distance."""
        assert point_to_segment_distance(Point(3, 4), Point(0, 0), Point(0, 0)) == 5.0

    def test_distance_to_edges(self):
        """Test the minimum over all segments is returned."""
        assert distance_to_edges(Point(2, 5), square_segments()) == pytest.approx(2.0)

    def test_distance_to_no_edges(self):
        """Test an empty outline is infinitely far away."""
        assert math.isinf(distance_to_edges(Point(0, 0), []))


class TestCentroidAndBounds:
    """Tests for centroid and bounding box helpers."""

    def test_centroid(self):
        """Test the centroid of four square corners."""
        pts = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        assert centroid(pts) == Point(5.0, 5.0)

    def test_centroid_accepts_generator(self):
        """Test any iterable of points is accepted."""
        assert centroid(Point(x, 0) for x in (0, 2, 4)) == Point(2.0, 0.0)

    def test_centroid_empty(self):
        """Test the centroid of nothing is None."""
        assert centroid([]) is None

    def test_bounding_box(self):
        """Test bounding box of scattered points."""
        pts = [Point(3, -1), Point(-2, 4), Point(7, 2)]
        assert bounding_box(pts) == (-2, -1, 7, 4)


class TestStrokeHelpers:
    """Tests for stroke flattening helpers."""

    def test_stroke_segments(self):
        """Test consecutive samples become segments."""
        strokes = [
            Stroke.from_points([(0, 0), (1, 0), (2, 0)]),
            Stroke.from_points([(5, 5), (6, 6)]),
        ]
        segments = stroke_segments(strokes)
        assert len(segments) == 3
        assert segments[0] == Segment(Point(0, 0), Point(1, 0))
        assert segments[2] == Segment(Point(5, 5), Point(6, 6))

    def test_all_points(self):
        """Test samples are flattened in paint order."""
        strokes = [
            Stroke.from_points([(0, 0), (1, 0)]),
            Stroke.from_points([(2, 2), (3, 3)]),
        ]
        assert all_points(strokes) == [Point(0, 0), Point(1, 0), Point(2, 2), Point(3, 3)]
