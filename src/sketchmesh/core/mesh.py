"""Outline to solid mesh geometry.

This module turns the largest closed shape of a drawing into an extruded
solid:

1. Select the closed component with the most nodes
2. Walk it into an ordered ring of boundary points
3. Triangulate the ring as a simple polygon (ear clipping)
4. Extrude: top and bottom caps plus side walls
5. Recenter and compute smooth vertex normals

Drawing space has y growing downwards; the ring is flipped to y-up and
wound counter-clockwise so the top cap faces +z.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import mapbox_earcut as earcut
import numpy as np
import trimesh

from sketchmesh.core.graph import StrokeGraph
from sketchmesh.domain import Point
from sketchmesh.exceptions import (
    BranchedOutlineError,
    RingOrderError,
    ShapeValidationError,
    TriangulationError,
)

logger = logging.getLogger(__name__)


@dataclass
class MeshData:
    """Triangle mesh produced by the extrusion.

    Attributes:
        vertices: (N, 3) float array of positions
        faces: (M, 3) int array of vertex indices, counter-clockwise outward
        normals: (N, 3) float array of unit vertex normals, once computed
    """

    vertices: np.ndarray
    faces: np.ndarray
    normals: np.ndarray | None = None

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.faces)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Wrap in a trimesh object without merging or reordering vertices."""
        return trimesh.Trimesh(
            vertices=self.vertices,
            faces=self.faces,
            vertex_normals=self.normals,
            process=False,
        )


def select_outline(graph: StrokeGraph) -> list[int]:
    """Pick the closed component with the most nodes.

    A component qualifies when every node has degree 2 or more. Ties go to
    the component found first.

    Raises:
        ShapeValidationError: If no qualifying component has 3 or more nodes
    """
    best: list[int] = []
    for component in graph.components():
        if all(graph.degree(n) >= 2 for n in component) and len(component) > len(best):
            best = component

    if len(best) < 3:
        raise ShapeValidationError("No valid closed shape found")
    return sorted(best)


def order_boundary(
    graph: StrokeGraph, nodes: Sequence[int], strict: bool = False
) -> list[Point]:
    """Walk a closed component into an ordered ring.

    Starting from the lowest node, each step moves to the lowest unvisited
    neighbour inside the component and stops when none is left. This
    assumes a simple cycle: on a branching component the walk ends early and
    the ring is truncated.

    Args:
        graph: The stroke graph
        nodes: Node indices of the component
        strict: Reject components with any node not of degree exactly 2

    Returns:
        Ring points in walk order

    Raises:
        BranchedOutlineError: If strict and the component branches
        RingOrderError: If the ring has fewer than 3 points
    """
    if not nodes:
        raise RingOrderError("Closed shape cannot be rendered")

    members = set(nodes)
    if strict:
        branching = [n for n in nodes if graph.degree(n) != 2]
        if branching:
            raise BranchedOutlineError(len(branching))

    ring: list[Point] = []
    visited: set[int] = set()
    current: int | None = min(nodes)
    while current is not None and len(ring) < len(nodes):
        ring.append(graph.points[current])
        visited.add(current)
        current = next(
            (
                n
                for n in sorted(graph.adjacency[current])
                if n in members and n not in visited
            ),
            None,
        )

    if len(ring) < 3:
        raise RingOrderError("Closed shape cannot be rendered")

    logger.debug("Ordered ring of %d points from %d nodes", len(ring), len(nodes))
    return ring


def ring_signed_area(ring: np.ndarray) -> float:
    """Shoelace area of an (N, 2) ring; positive when counter-clockwise."""
    x = ring[:, 0]
    y = ring[:, 1]
    return float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y) / 2.0)


def canonical_ring(ring: Sequence[Point]) -> np.ndarray:
    """Flip a drawing-space ring to y-up and wind it counter-clockwise."""
    coords = np.array([(p.x, -p.y) for p in ring], dtype=np.float64)
    if ring_signed_area(coords) < 0:
        coords = coords[::-1].copy()
    return coords


def triangulate_ring(ring: np.ndarray) -> np.ndarray:
    """Ear-clip a simple polygon.

    Args:
        ring: (N, 2) counter-clockwise ring without a repeated closing point

    Returns:
        (N - 2, 3) triangle indices, each wound counter-clockwise

    Raises:
        TriangulationError: If no triangles are produced
    """
    ends = np.array([len(ring)], dtype=np.uint32)
    indices = earcut.triangulate_float64(ring, ends)
    if len(indices) == 0:
        raise TriangulationError("no triangles produced")

    triangles = np.asarray(indices, dtype=np.int64).reshape(-1, 3)

    # Earcut's output winding is not guaranteed; normalize to counter-clockwise
    a = ring[triangles[:, 0]]
    b = ring[triangles[:, 1]]
    c = ring[triangles[:, 2]]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    flip = cross < 0
    triangles[flip] = triangles[flip][:, [0, 2, 1]]
    return triangles


def ring_thickness(
    ring: np.ndarray, min_thickness: float, max_thickness: float
) -> np.ndarray:
    """Per-point thickness of the extrusion.

    Equal bounds give a uniform slab. Otherwise thickness falls linearly from
    ``max_thickness`` at the point nearest the ring centroid to
    ``min_thickness`` at the farthest.
    """
    count = len(ring)
    if math.isclose(min_thickness, max_thickness):
        return np.full(count, max_thickness, dtype=np.float64)

    center = ring.mean(axis=0)
    distances = np.linalg.norm(ring - center, axis=1)
    near, far = distances.min(), distances.max()
    if far - near == 0:
        return np.full(count, max_thickness, dtype=np.float64)

    t = (distances - near) / (far - near)
    return max_thickness + (min_thickness - max_thickness) * t


def extrude_ring(
    ring: np.ndarray,
    triangles: np.ndarray,
    min_thickness: float,
    max_thickness: float,
) -> MeshData:
    """Build a closed solid from a triangulated ring.

    Vertices ``0..R-1`` form the top cap at ``+thickness/2`` and ``R..2R-1``
    the bottom cap at ``-thickness/2``. The bottom cap reuses the top
    triangles with reversed winding; each consecutive ring pair adds two
    side triangles.

    Returns:
        MeshData with 2R vertices and 2(R-2) + 2R faces for a simple R-gon
    """
    count = len(ring)
    half = ring_thickness(ring, min_thickness, max_thickness) / 2.0

    top = np.column_stack([ring, half])
    bottom = np.column_stack([ring, -half])
    vertices = np.vstack([top, bottom])

    top_faces = triangles
    bottom_faces = triangles[:, [0, 2, 1]] + count

    i = np.arange(count)
    j = (i + 1) % count
    sides = np.vstack(
        [
            np.column_stack([i, i + count, j]),
            np.column_stack([i + count, j + count, j]),
        ]
    )

    faces = np.vstack([top_faces, bottom_faces, sides]).astype(np.int64)
    return MeshData(vertices=vertices, faces=faces)


def finalize_mesh(mesh: MeshData) -> MeshData:
    """Recenter at the bounding-box center and compute smooth normals."""
    lower = mesh.vertices.min(axis=0)
    upper = mesh.vertices.max(axis=0)
    vertices = mesh.vertices - (lower + upper) / 2.0

    centered = MeshData(vertices=vertices, faces=mesh.faces)
    normals = centered.to_trimesh().vertex_normals
    centered.normals = np.array(normals, dtype=np.float64)
    return centered


def build_outline_mesh(
    graph: StrokeGraph,
    min_thickness: float = 15.0,
    max_thickness: float = 15.0,
    strict: bool = False,
) -> MeshData:
    """Run selection, ordering, triangulation and extrusion.

    Raises:
        ShapeValidationError: If no usable closed outline exists
        RingOrderError: If the outline cannot be walked into a ring
        TriangulationError: If the outline cannot be triangulated
    """
    nodes = select_outline(graph)
    ring = canonical_ring(order_boundary(graph, nodes, strict=strict))
    triangles = triangulate_ring(ring)
    mesh = extrude_ring(ring, triangles, min_thickness, max_thickness)

    logger.debug(
        "Extruded ring of %d points into %d vertices, %d faces",
        len(ring),
        mesh.vertex_count,
        mesh.triangle_count,
    )
    return finalize_mesh(mesh)
