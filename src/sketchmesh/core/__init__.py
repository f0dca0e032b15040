"""Core processing algorithms for sketchmesh.

This module contains the core algorithms for:

- Graph construction (sample deduplication, stroke connectivity)
- Geometry operations (point-in-polygon, point-to-segment distance)
- Shape analysis (open/closed classification, centroids)
- Shape repair (closing stray open outlines)
- Gradient shading and flood fill over RGBA pixel buffers
- Mesh generation (ring ordering, triangulation, extrusion, GLB export)

All services are designed to be:
- Stateless (the graph is rebuilt from the strokes on every call)
- Pure, except for in-place writes to caller-owned pixel buffers

Key functions:
- build_graph: Build the deduplicated stroke graph
- contains_point: Test if a point is inside a segment outline
- point_to_segment_distance: Distance from a point to a segment
- analyze_shapes: Count open and closed shapes
- repair_drawing: Close open outlines
- apply_global_gradient / apply_shape_gradients / apply_edge_gradient
- flood_fill: Replace a bounded pixel region

Key classes:
- ShapeAnalyzer: Finds and classifies shapes
- MeshExporter: Converts the largest closed outline to GLB
"""

from sketchmesh.core.analyzer import (
    AnalysisFailure,
    Shape,
    ShapeAnalyzer,
    ShapeReport,
    analyze_shapes,
    drawing_centroid,
    shape_centroids,
)
from sketchmesh.core.fill import flood_fill
from sketchmesh.core.geometry import (
    Segment,
    centroid,
    contains_point,
    distance_to_edges,
    point_to_segment_distance,
)
from sketchmesh.core.gradient import (
    apply_edge_gradient,
    apply_global_gradient,
    apply_shape_gradients,
)
from sketchmesh.core.graph import StrokeGraph, build_graph
from sketchmesh.core.mesh import MeshData, build_outline_mesh
from sketchmesh.core.processor import ExportFailure, ExportResult, MeshExporter, export_glb
from sketchmesh.core.repair import repair_drawing, subdivide_line

__all__ = [
    # Graph
    "StrokeGraph",
    "build_graph",
    # Geometry
    "Segment",
    "centroid",
    "contains_point",
    "distance_to_edges",
    "point_to_segment_distance",
    # Analyzer
    "AnalysisFailure",
    "Shape",
    "ShapeAnalyzer",
    "ShapeReport",
    "analyze_shapes",
    "drawing_centroid",
    "shape_centroids",
    # Repair
    "repair_drawing",
    "subdivide_line",
    # Shading
    "apply_edge_gradient",
    "apply_global_gradient",
    "apply_shape_gradients",
    "flood_fill",
    # Mesh
    "ExportFailure",
    "ExportResult",
    "MeshData",
    "MeshExporter",
    "build_outline_mesh",
    "export_glb",
]
