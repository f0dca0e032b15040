"""File I/O layer for sketchmesh.

This module handles reading and writing drawings and exported meshes.
It keeps file formats out of the core engine, which only works on
in-memory strokes and bytes.

Key classes:
- DrawingReader: Load JSON drawings into strokes
- DrawingWriter: Save strokes as JSON drawings
- MeshWriter: Save exported GLB bytes
- BufferWriter: Save shaded pixel buffers
"""

from sketchmesh.io.reader import DrawingReader
from sketchmesh.io.writer import BufferWriter, DrawingWriter, MeshWriter

__all__ = [
    "BufferWriter",
    "DrawingReader",
    "DrawingWriter",
    "MeshWriter",
]
