"""Mesh export orchestration.

This module coordinates the full drawing-to-GLB workflow:

- MeshExporter: runs selection, ordering, triangulation, extrusion,
  optional decimation, scaling and GLB encoding
- ExportResult: the outcome, carrying either the GLB bytes or a failure
  reason

Validation and geometry failures never escape as exceptions; they are
reported through ExportResult so the caller can decide how to present them.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from sketchmesh.config import SketchmeshSettings, get_default_settings
from sketchmesh.core._gltf import encode_glb
from sketchmesh.core.graph import build_graph
from sketchmesh.core.mesh import build_outline_mesh
from sketchmesh.domain import Stroke
from sketchmesh.exceptions import (
    BranchedOutlineError,
    RingOrderError,
    ShapeValidationError,
    TriangulationError,
)
from sketchmesh.utils import OperationLogger


class ExportFailure(str, Enum):
    """Reason an export produced no file."""

    EMPTY_DRAWING = "empty_drawing"
    NO_CLOSED_SHAPE = "no_closed_shape"
    BRANCHED_OUTLINE = "branched_outline"
    TRIANGULATION_FAILED = "triangulation_failed"


@dataclass
class ExportResult:
    """Outcome of a mesh export.

    Attributes:
        data: GLB bytes, or None on failure
        failure: Failure reason, or None on success
        message: Human-readable failure description
        vertex_count: Vertices in the exported mesh
        triangle_count: Triangles in the exported mesh
    """

    data: bytes | None = None
    failure: ExportFailure | None = None
    message: str = ""
    vertex_count: int = 0
    triangle_count: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None and self.data is not None


class MeshExporter:
    """Turns the largest closed outline of a drawing into a GLB solid.

    Example:
        exporter = MeshExporter(get_default_settings())
        result = exporter.export(strokes)
        if result.ok:
            Path("model-3d.glb").write_bytes(result.data)
    """

    def __init__(
        self,
        settings: SketchmeshSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the exporter.

        Args:
            settings: Sketchmesh settings (defaults if None)
            logger: Structured logger (module logger if None)
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger("sketchmesh")
        self.operation_logger = OperationLogger(self.logger)

    def _fail(self, failure: ExportFailure, message: str) -> ExportResult:
        self.operation_logger.log_failure("export", failure.value, message)
        return ExportResult(failure=failure, message=message)

    def export(self, strokes: Sequence[Stroke]) -> ExportResult:
        """Export the drawing's largest closed outline as GLB.

        Args:
            strokes: Drawing strokes

        Returns:
            ExportResult with GLB bytes, or a failure reason and no bytes
        """
        start_time = time.time()
        config = self.settings.mesh

        if not strokes:
            return self._fail(ExportFailure.EMPTY_DRAWING, "Nothing to convert")

        self.operation_logger.log_start("export", len(strokes))
        graph = build_graph(strokes, self.settings.graph.merge_tolerance)
        if len(graph) < 3:
            return self._fail(ExportFailure.NO_CLOSED_SHAPE, "No valid closed shape found")

        try:
            mesh = build_outline_mesh(
                graph,
                min_thickness=config.min_thickness,
                max_thickness=config.max_thickness,
                strict=config.strict_ring,
            )
        except ShapeValidationError as e:
            return self._fail(ExportFailure.NO_CLOSED_SHAPE, str(e))
        except BranchedOutlineError as e:
            return self._fail(ExportFailure.BRANCHED_OUTLINE, str(e))
        except RingOrderError as e:
            return self._fail(ExportFailure.NO_CLOSED_SHAPE, str(e))
        except TriangulationError as e:
            return self._fail(ExportFailure.TRIANGULATION_FAILED, str(e))

        solid = mesh.to_trimesh()
        original_faces = len(solid.faces)

        if config.decimate:
            target = max(4, int(original_faces * config.decimate_ratio))
            if target < original_faces:
                solid = solid.simplify_quadric_decimation(face_count=target)
                self.logger.debug(
                    "Mesh decimated",
                    faces_before=original_faces,
                    faces_after=len(solid.faces),
                )

        if config.export_scale != 1.0:
            solid.apply_scale(config.export_scale)

        data = encode_glb(solid, config)

        duration_ms = (time.time() - start_time) * 1000
        self.operation_logger.log_success(
            "export",
            duration_ms,
            vertices=len(solid.vertices),
            triangles=len(solid.faces),
            size_bytes=len(data),
        )
        return ExportResult(
            data=data,
            vertex_count=len(solid.vertices),
            triangle_count=len(solid.faces),
        )


def export_glb(
    strokes: Sequence[Stroke], settings: SketchmeshSettings | None = None
) -> ExportResult:
    """Export a drawing with a one-off MeshExporter."""
    return MeshExporter(settings).export(strokes)
