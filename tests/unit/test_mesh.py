"""Unit tests for outline extrusion."""

import math

import numpy as np
import pytest

from sketchmesh.core.graph import build_graph
from sketchmesh.core.mesh import (
    build_outline_mesh,
    canonical_ring,
    extrude_ring,
    order_boundary,
    ring_signed_area,
    ring_thickness,
    select_outline,
    triangulate_ring,
)
from sketchmesh.domain import Point, Stroke
from sketchmesh.exceptions import (
    BranchedOutlineError,
    RingOrderError,
    ShapeValidationError,
    TriangulationError,
)


def closed_square(x: float = 0.0, y: float = 0.0, size: float = 10.0) -> Stroke:
    """Create a square stroke that returns to its start point."""
    return Stroke.from_points(
        [(x, y), (x + size, y), (x + size, y + size), (x, y + size), (x, y)]
    )


def regular_polygon(sides: int, radius: float = 50.0) -> Stroke:
    """Create a closed regular polygon stroke centered at (100, 100)."""
    coords = [
        (
            100 + radius * math.cos(2 * math.pi * i / sides),
            100 + radius * math.sin(2 * math.pi * i / sides),
        )
        for i in range(sides)
    ]
    return Stroke.from_points([*coords, coords[0]])


def bowtie() -> list[Stroke]:
    """Create two triangles sharing one vertex."""
    return [
        Stroke.from_points([(0, 0), (10, 5), (10, -5), (0, 0)]),
        Stroke.from_points([(0, 0), (-10, 5), (-10, -5), (0, 0)]),
    ]


class TestSelectOutline:
    """Tests for select_outline."""

    def test_largest_closed_component(self):
        """Test the closed component with the most nodes is chosen."""
        graph = build_graph([closed_square(), regular_polygon(8)])
        assert select_outline(graph) == [4, 5, 6, 7, 8, 9, 10, 11]

    def test_open_components_skipped(self):
        """Test a longer open line does not win over a closed square."""
        coords = [(float(x), 100.0) for x in range(0, 200, 5)]
        graph = build_graph([Stroke.from_points(coords), closed_square()])
        assert len(select_outline(graph)) == 4

    def test_no_closed_component(self):
        """Test an open line has no outline."""
        graph = build_graph([Stroke.from_points([(0, 0), (10, 0), (20, 5)])])
        with pytest.raises(ShapeValidationError, match="No valid closed shape found"):
            select_outline(graph)


class TestOrderBoundary:
    """Tests for order_boundary."""

    def test_square_ring_order(self):
        """Test consecutive ring points are graph neighbours."""
        graph = build_graph([closed_square()])
        ring = order_boundary(graph, select_outline(graph))
        assert ring == [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]

    def test_branching_outline_truncated(self):
        """Test the walk stops early on a branching component."""
        graph = build_graph(bowtie())
        ring = order_boundary(graph, select_outline(graph))
        assert ring == [Point(0, 0), Point(10, 5), Point(10, -5)]

    def test_branching_outline_strict(self):
        """Test strict mode rejects a branching component."""
        graph = build_graph(bowtie())
        with pytest.raises(BranchedOutlineError) as exc_info:
            order_boundary(graph, select_outline(graph), strict=True)
        assert exc_info.value.branch_count == 1

    def test_empty_nodes(self):
        """Test an empty node list cannot be ordered."""
        graph = build_graph([closed_square()])
        with pytest.raises(RingOrderError):
            order_boundary(graph, [])


class TestRingHelpers:
    """Tests for ring orientation and triangulation."""

    def test_canonical_ring_is_counter_clockwise(self):
        """Test the flipped ring has positive area whatever the input winding."""
        square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        assert ring_signed_area(canonical_ring(square)) > 0
        assert ring_signed_area(canonical_ring(square[::-1])) > 0

    def test_canonical_ring_flips_y(self):
        """Test drawing y is negated."""
        ring = canonical_ring([Point(0, 0), Point(10, 0), Point(10, 10)])
        assert set(ring[:, 1].tolist()) == {0.0, -10.0}

    def test_triangulate_square(self):
        """Test a square becomes two counter-clockwise triangles."""
        ring = canonical_ring([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)])
        triangles = triangulate_ring(ring)
        assert triangles.shape == (2, 3)

        a, b, c = ring[triangles[:, 0]], ring[triangles[:, 1]], ring[triangles[:, 2]]
        cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (
            b[:, 1] - a[:, 1]
        ) * (c[:, 0] - a[:, 0])
        assert (cross > 0).all()

    def test_triangulate_concave(self):
        """Test a concave ring yields R - 2 triangles."""
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
        assert len(triangulate_ring(canonical_ring(pts))) == 6

    def test_triangulate_collinear_ring(self):
        """Test a ring with no area produces no triangles."""
        ring = canonical_ring([Point(0, 0), Point(10, 0), Point(20, 0)])
        with pytest.raises(TriangulationError):
            triangulate_ring(ring)

    def test_collinear_outline(self):
        """Test a closed but flat loop cannot be extruded."""
        graph = build_graph([Stroke.from_points([(0, 0), (10, 0), (20, 0), (0, 0)])])
        with pytest.raises(TriangulationError):
            build_outline_mesh(graph, min_thickness=5, max_thickness=5)

    def test_uniform_thickness(self):
        """Test equal bounds give a flat slab."""
        ring = np.array([[0, 0], [10, 0], [10, 10], [-20, 5]], dtype=np.float64)
        assert (ring_thickness(ring, 15.0, 15.0) == 15.0).all()

    def test_variable_thickness(self):
        """Test thickness falls from the centroid outward."""
        ring = np.array(
            [[0, 0], [10, 0], [10, 10], [0, 10], [-20, 5]], dtype=np.float64
        )
        thickness = ring_thickness(ring, 5.0, 15.0)
        assert thickness[0] == pytest.approx(15.0)
        assert thickness[3] == pytest.approx(15.0)
        assert thickness[4] == pytest.approx(5.0)
        assert 5.0 < thickness[1] < 15.0


class TestExtrusion:
    """Tests for extrude_ring and build_outline_mesh."""

    def test_extrude_counts(self):
        """Test a ring of R points gives 2R vertices and 4R - 4 faces."""
        ring = canonical_ring(
            [Point(0, 0), Point(10, 0), Point(12, 5), Point(10, 10), Point(0, 10)]
        )
        mesh = extrude_ring(ring, triangulate_ring(ring), 15.0, 15.0)
        assert mesh.vertex_count == 10
        assert mesh.triangle_count == 16

    def test_extrude_caps(self):
        """Test top and bottom caps sit at plus and minus half thickness."""
        ring = canonical_ring([Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)])
        mesh = extrude_ring(ring, triangulate_ring(ring), 15.0, 15.0)
        assert (mesh.vertices[:4, 2] == 7.5).all()
        assert (mesh.vertices[4:, 2] == -7.5).all()

    def test_square_solid(self):
        """Test a square becomes a closed, outward-facing box."""
        mesh = build_outline_mesh(build_graph([closed_square()]), 15.0, 15.0)
        assert mesh.vertex_count == 8
        assert mesh.triangle_count == 12

        solid = mesh.to_trimesh()
        assert solid.is_watertight
        assert solid.is_winding_consistent
        assert solid.volume == pytest.approx(1500.0)

    def test_recentered(self):
        """Test the mesh bounding box is centered at the origin."""
        mesh = build_outline_mesh(build_graph([closed_square(40, 70)]))
        lower = mesh.vertices.min(axis=0)
        upper = mesh.vertices.max(axis=0)
        np.testing.assert_allclose(lower + upper, 0.0, atol=1e-9)
        np.testing.assert_allclose(upper, [5.0, 5.0, 7.5])

    def test_normals_computed(self):
        """Test every vertex gets a unit normal."""
        mesh = build_outline_mesh(build_graph([regular_polygon(12)]))
        assert mesh.normals is not None
        assert mesh.normals.shape == (24, 3)
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0)

    def test_polygon_counts(self):
        """Test an octagon extrudes to 16 vertices and 28 faces."""
        mesh = build_outline_mesh(build_graph([regular_polygon(8)]))
        assert mesh.vertex_count == 16
        assert mesh.triangle_count == 28

    def test_no_closed_shape(self):
        """Test an open drawing cannot be extruded."""
        graph = build_graph([Stroke.from_points([(0, 0), (10, 0), (20, 5)])])
        with pytest.raises(ShapeValidationError):
            build_outline_mesh(graph)
