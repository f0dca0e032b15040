"""Writers for drawings and exported meshes.

This module provides:
- DrawingWriter: save strokes in the JSON layout DrawingReader loads
- MeshWriter: save GLB bytes produced by the mesh exporter
- BufferWriter: save shaded RGBA pixel buffers in numpy .npy format
"""

import json
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from sketchmesh.domain import Stroke
from sketchmesh.exceptions import BufferSaveError, MeshSaveError


class DrawingWriter:
    """Saves strokes as a JSON drawing."""

    @staticmethod
    def get_repaired_path(input_path: Path) -> Path:
        """Generate the output path for a repaired drawing.

        Example:
            fish.json -> fish-repaired.json
        """
        return input_path.with_name(f"{input_path.stem}-repaired{input_path.suffix}")

    def save(self, strokes: Sequence[Stroke], output_path: Path) -> None:
        """Write strokes to a JSON file.

        Args:
            strokes: Strokes to save
            output_path: Destination path
        """
        payload = {"strokes": [stroke.to_dict() for stroke in strokes]}
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


class MeshWriter:
    """Saves exported GLB data to disk."""

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the GLB path next to a drawing.

        Example:
            fish.json -> fish-model.glb
        """
        return input_path.with_name(f"{input_path.stem}-model.glb")

    def save(self, data: bytes, output_path: Path) -> None:
        """Write GLB bytes.

        Args:
            data: GLB content from the exporter
            output_path: Destination path

        Raises:
            MeshSaveError: If data is empty or the file cannot be written
        """
        if not data:
            raise MeshSaveError(str(output_path), "no mesh data to write")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(data)
        except OSError as e:
            raise MeshSaveError(str(output_path), str(e)) from e


class BufferWriter:
    """Saves RGBA pixel buffers with ``numpy.save``."""

    @staticmethod
    def get_output_path(input_path: Path) -> Path:
        """Generate the buffer path next to a drawing.

        Example:
            fish.json -> fish-shaded.npy
        """
        return input_path.with_name(f"{input_path.stem}-shaded.npy")

    def save(self, buffer: np.ndarray, output_path: Path) -> None:
        """Write a pixel buffer.

        Raises:
            BufferSaveError: If the file cannot be written
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("wb") as f:
                np.save(f, buffer)
        except OSError as e:
            raise BufferSaveError(str(output_path), str(e)) from e
