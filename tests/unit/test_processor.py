"""Unit tests for MeshExporter."""

import json
import math
import struct

import numpy as np

from sketchmesh.config import MeshConfig, SketchmeshSettings
from sketchmesh.core import processor
from sketchmesh.core.processor import ExportFailure, MeshExporter, export_glb
from sketchmesh.domain import Stroke
from sketchmesh.exceptions import RingOrderError


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


def glb_json(data: bytes) -> dict:
    """Extract the JSON chunk of a GLB file."""
    magic, version, length = struct.unpack_from("<4sII", data, 0)
    assert magic == b"glTF"
    assert version == 2
    assert length == len(data)
    chunk_length, chunk_type = struct.unpack_from("<II", data, 12)
    assert chunk_type == 0x4E4F534A
    return json.loads(data[20 : 20 + chunk_length].decode("utf-8"))


def glb_positions(data: bytes) -> np.ndarray:
    """Read the POSITION accessor of the first primitive from a GLB file."""
    gltf = glb_json(data)
    json_length = struct.unpack_from("<I", data, 12)[0]
    bin_start = 20 + json_length + 8

    accessor = gltf["accessors"][
        gltf["meshes"][0]["primitives"][0]["attributes"]["POSITION"]
    ]
    view = gltf["bufferViews"][accessor["bufferView"]]
    offset = bin_start + view.get("byteOffset", 0) + accessor.get("byteOffset", 0)
    values = np.frombuffer(data, dtype="<f4", count=accessor["count"] * 3, offset=offset)
    return values.reshape(-1, 3)


def settings_with(**mesh_options) -> SketchmeshSettings:
    """Create settings with overridden mesh options."""
    return SketchmeshSettings(mesh=MeshConfig(**mesh_options))


class TestMeshExporter:
    """Tests for MeshExporter.export."""

    def test_empty_drawing(self):
        """Test an empty drawing exports nothing."""
        result = MeshExporter().export([])
        assert not result.ok
        assert result.failure is ExportFailure.EMPTY_DRAWING
        assert result.data is None
        assert result.message == "Nothing to convert"

    def test_open_line(self):
        """Test an open drawing has no outline to extrude."""
        result = MeshExporter().export([Stroke.from_points([(0, 0), (50, 0), (50, 50)])])
        assert result.failure is ExportFailure.NO_CLOSED_SHAPE
        assert result.data is None

    def test_too_few_nodes(self):
        """Test a drawing collapsing to two nodes cannot be extruded."""
        result = MeshExporter().export([Stroke.from_points([(0, 0), (10, 0)])])
        assert result.failure is ExportFailure.NO_CLOSED_SHAPE

    def test_square_export(self):
        """Test a closed square exports as a GLB box."""
        result = MeshExporter().export([closed_square()])
        assert result.ok
        assert result.failure is None
        assert result.vertex_count == 8
        assert result.triangle_count == 12

        gltf = glb_json(result.data)
        assert len(gltf["meshes"]) == 1
        attributes = gltf["meshes"][0]["primitives"][0]["attributes"]
        assert "POSITION" in attributes
        assert "NORMAL" in attributes
        assert gltf["accessors"][attributes["POSITION"]]["count"] == 8

    def test_branching_outline_truncated(self):
        """Test a bowtie extrudes the ring its walk could reach."""
        result = MeshExporter().export(bowtie())
        assert result.ok
        assert result.vertex_count == 6
        assert result.triangle_count == 8

    def test_branching_outline_strict(self):
        """Test strict mode refuses a bowtie."""
        result = MeshExporter(settings_with(strict_ring=True)).export(bowtie())
        assert result.failure is ExportFailure.BRANCHED_OUTLINE
        assert result.data is None

    def test_export_scale(self):
        """Test the export scale multiplies positions."""
        result = MeshExporter(settings_with(export_scale=2.0)).export([closed_square()])
        positions = glb_positions(result.data)
        np.testing.assert_allclose(positions.max(axis=0), [10.0, 10.0, 15.0])
        np.testing.assert_allclose(positions.min(axis=0), [-10.0, -10.0, -15.0])

    def test_decimation_reduces_triangles(self):
        """Test decimation cuts the triangle count toward the target ratio."""
        base = MeshExporter().export([regular_polygon(32)])
        assert base.triangle_count == 4 * 32 - 4

        settings = settings_with(decimate=True, decimate_ratio=0.5)
        result = MeshExporter(settings).export([regular_polygon(32)])
        assert result.ok
        assert result.triangle_count < base.triangle_count
        assert result.triangle_count <= int(base.triangle_count * 0.75)

    def test_collinear_loop_not_triangulated(self):
        """Test a closed loop with no area aborts without output."""
        stroke = Stroke.from_points([(0, 0), (10, 0), (20, 0), (0, 0)])
        result = MeshExporter().export([stroke])
        assert not result.ok
        assert result.failure is ExportFailure.TRIANGULATION_FAILED
        assert result.data is None

    def test_ring_order_error_reported_as_no_shape(self, monkeypatch):
        """Test an outline walk failure is reported, not raised."""

        def fail_walk(*args, **kwargs):
            raise RingOrderError("Closed shape cannot be rendered")

        monkeypatch.setattr(processor, "build_outline_mesh", fail_walk)
        result = MeshExporter().export([closed_square()])
        assert result.failure is ExportFailure.NO_CLOSED_SHAPE
        assert result.message == "Closed shape cannot be rendered"
        assert result.data is None

    def test_failures_counted(self):
        """Test failed exports are tracked by the operation logger."""
        exporter = MeshExporter()
        exporter.export([])
        exporter.export([Stroke.from_points([(0, 0), (50, 0), (50, 50)])])
        stats = exporter.operation_logger.stats
        assert stats.failed_count == 2
        assert [reason for _, reason in stats.failures] == [
            "empty_drawing",
            "no_closed_shape",
        ]

    def test_export_glb_helper(self):
        """Test the one-off helper matches the exporter."""
        result = export_glb([closed_square()])
        assert result.ok
        assert result.data[:4] == b"glTF"

    def test_success_tracked(self):
        """Test a successful export is counted and timed."""
        exporter = MeshExporter()
        exporter.export([closed_square()])
        stats = exporter.operation_logger.stats
        assert stats.succeeded_count == 1
        assert stats.failed_count == 0
        assert stats.duration_seconds >= 0.0
